"""Domain probes for Querying application layer.

Following Domain Oriented Observability pattern.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class QueryServiceProbe(Protocol):
    """Domain probe for GraphQL query tool operations."""

    def query_received(self, query: str, query_length: int) -> None:
        """Record that a GraphQL query was received."""
        ...

    def query_rejected(self, query: str, reason: str, classification: str) -> None:
        """Record that a query was blocked before reaching the endpoint."""
        ...

    def query_executed(self, query: str, classification: str) -> None:
        """Record that the endpoint answered without errors."""
        ...

    def upstream_http_error(self, query: str, status_code: int, reason: str) -> None:
        """Record that the endpoint answered with a non-2xx status."""
        ...

    def upstream_graphql_errors(self, query: str, error_count: int) -> None:
        """Record that the endpoint answered with GraphQL errors."""
        ...

    def upstream_unreachable(self, query: str, cause: str) -> None:
        """Record that the endpoint could not be reached."""
        ...

    def with_context(self, context: ObservationContext) -> QueryServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultQueryServiceProbe:
    """Default implementation using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultQueryServiceProbe:
        return DefaultQueryServiceProbe(logger=self._logger, context=context)

    def query_received(self, query: str, query_length: int) -> None:
        self._logger.info(
            "mcp_graphql_query_received",
            query_length=query_length,
            **self._get_context_kwargs(),
        )

    def query_rejected(self, query: str, reason: str, classification: str) -> None:
        self._logger.warning(
            "mcp_graphql_query_rejected",
            reason=reason,
            classification=classification,
            **self._get_context_kwargs(),
        )

    def query_executed(self, query: str, classification: str) -> None:
        self._logger.info(
            "mcp_graphql_query_executed",
            classification=classification,
            **self._get_context_kwargs(),
        )

    def upstream_http_error(self, query: str, status_code: int, reason: str) -> None:
        self._logger.warning(
            "mcp_graphql_upstream_http_error",
            status_code=status_code,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def upstream_graphql_errors(self, query: str, error_count: int) -> None:
        self._logger.warning(
            "mcp_graphql_upstream_graphql_errors",
            error_count=error_count,
            **self._get_context_kwargs(),
        )

    def upstream_unreachable(self, query: str, cause: str) -> None:
        self._logger.error(
            "mcp_graphql_upstream_unreachable",
            cause=cause,
            **self._get_context_kwargs(),
        )
