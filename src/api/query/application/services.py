"""Application services for the Querying bounded context."""

from __future__ import annotations

import json
from typing import Any

from query.application.observability import (
    DefaultQueryServiceProbe,
    QueryServiceProbe,
)
from query.domain.mutation_gate import MutationGate
from query.domain.value_objects import (
    InvalidVariablesError,
    OperationKind,
    UpstreamUnreachableError,
)
from shared_kernel.graphql_endpoint import (
    IGraphQLEndpoint,
    UpstreamGraphQLErrors,
    UpstreamHttpError,
    UpstreamNetworkFailure,
    UpstreamResult,
)
from shared_kernel.tool_result import ToolResultEnvelope


def _pretty(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def parse_variables(variables: str | None) -> dict[str, Any] | None:
    """Decode the variables argument of the query tool.

    Args:
        variables: JSON text, or None/blank for no variables.

    Returns:
        The decoded variables object, or None.

    Raises:
        InvalidVariablesError: If the text is not a JSON object.
    """
    if variables is None or not variables.strip():
        return None

    try:
        decoded = json.loads(variables)
    except json.JSONDecodeError as e:
        raise InvalidVariablesError(f"Invalid GraphQL variables: {e}") from e

    if decoded is None:
        return None
    if not isinstance(decoded, dict):
        raise InvalidVariablesError(
            "Invalid GraphQL variables: expected a JSON object"
        )
    return decoded


class MCPQueryService:
    """Application service for the ``query-graphql`` tool.

    Runs the mutation gate, then sends exactly one request upstream and
    turns the tagged result into a tool result envelope. Blocked queries
    never reach the endpoint.
    """

    def __init__(
        self,
        endpoint: IGraphQLEndpoint,
        gate: MutationGate,
        probe: QueryServiceProbe | None = None,
    ):
        """Initialize the service.

        Args:
            endpoint: The upstream GraphQL endpoint.
            gate: Mutation gate configured with the allow-mutations policy.
            probe: Optional domain probe for observability.
        """
        self._endpoint = endpoint
        self._gate = gate
        self._probe = probe or DefaultQueryServiceProbe()

    async def execute_graphql_query(
        self,
        query: str,
        variables: str | None = None,
    ) -> ToolResultEnvelope:
        """Gate and execute a GraphQL operation.

        Args:
            query: GraphQL document text.
            variables: Optional variables as JSON text.

        Returns:
            Success envelope with the pretty-printed response, or an error
            envelope for blocked queries, HTTP errors and GraphQL errors.

        Raises:
            UpstreamUnreachableError: If the endpoint could not be reached.
        """
        self._probe.query_received(query=query, query_length=len(query))

        decision = self._gate.evaluate(query)
        if not decision.is_allowed:
            self._probe.query_rejected(
                query=query,
                reason=decision.reason.value if decision.reason else "unknown",
                classification=decision.classification.value,
            )
            return ToolResultEnvelope.failure(decision.message or "Query rejected")

        try:
            parsed_variables = parse_variables(variables)
        except InvalidVariablesError as e:
            self._probe.query_rejected(
                query=query,
                reason="invalid_variables",
                classification=decision.classification.value,
            )
            return ToolResultEnvelope.failure(str(e))

        result = await self._endpoint.execute(query, parsed_variables)
        return self._to_envelope(query, decision.classification, result)

    def _to_envelope(
        self,
        query: str,
        classification: OperationKind,
        result: UpstreamResult,
    ) -> ToolResultEnvelope:
        if isinstance(result, UpstreamNetworkFailure):
            self._probe.upstream_unreachable(query=query, cause=result.cause)
            raise UpstreamUnreachableError(
                f"Failed to execute GraphQL query: {result.cause}", query=query
            )

        if isinstance(result, UpstreamHttpError):
            self._probe.upstream_http_error(
                query=query, status_code=result.status_code, reason=result.reason
            )
            return ToolResultEnvelope.failure(
                f"GraphQL request failed: {result.reason}\n{result.body}"
            )

        if isinstance(result, UpstreamGraphQLErrors):
            self._probe.upstream_graphql_errors(
                query=query, error_count=len(result.errors)
            )
            return ToolResultEnvelope.failure(
                "The GraphQL response has errors, please fix the query: "
                f"{_pretty(result.payload)}"
            )

        self._probe.query_executed(query=query, classification=classification.value)
        return ToolResultEnvelope.success(_pretty(result.payload))
