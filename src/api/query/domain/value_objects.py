"""Domain value objects and exceptions for the Querying bounded context."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class QueryExecutionError(Exception):
    """Base exception for GraphQL query handling failures."""

    def __init__(self, message: str, query: str | None = None):
        super().__init__(message)
        self.query = query


class InvalidVariablesError(QueryExecutionError):
    """Raised when the variables text is not a JSON object."""

    pass


class UpstreamUnreachableError(QueryExecutionError):
    """Raised when the GraphQL endpoint could not be reached.

    Unlike HTTP and GraphQL errors, this is not turned into an error
    envelope; it propagates out of the tool invocation.
    """

    pass


class OperationKind(str, Enum):
    """Classification of a GraphQL document by operation type."""

    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"
    INVALID = "invalid"


class GateState(str, Enum):
    """Terminal states of the mutation gate.

    Query text moves unparsed -> classified -> allowed or blocked; a parse
    failure goes straight to blocked.
    """

    ALLOWED = "allowed"
    BLOCKED = "blocked"


class BlockReason(str, Enum):
    """Why the gate blocked a query."""

    INVALID_QUERY = "invalid_query"
    MUTATIONS_DISABLED = "mutations_disabled"


class GateDecision(BaseModel):
    """Terminal outcome of the mutation gate for one query.

    Attributes:
        state: ALLOWED or BLOCKED
        classification: Operation kind derived from the parsed document
        reason: Why the query was blocked (None when allowed)
        message: Human-readable explanation (None when allowed)
    """

    model_config = ConfigDict(frozen=True)

    state: GateState
    classification: OperationKind
    reason: BlockReason | None = None
    message: str | None = None

    @property
    def is_allowed(self) -> bool:
        return self.state is GateState.ALLOWED
