"""Domain probe for upstream GraphQL endpoint requests.

Following Domain-Oriented Observability patterns, this probe captures
the outcome of every request sent to the configured GraphQL endpoint.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class GraphQLEndpointProbe(Protocol):
    """Domain probe for upstream GraphQL requests."""

    def request_sent(self, url: str, query_length: int) -> None:
        """Record that a request was sent to the endpoint."""
        ...

    def response_received(self, url: str, status_code: int) -> None:
        """Record that the endpoint answered."""
        ...

    def request_failed(self, url: str, reason: str) -> None:
        """Record that the endpoint could not be reached or answered badly."""
        ...

    def with_context(self, context: ObservationContext) -> GraphQLEndpointProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGraphQLEndpointProbe:
    """Default implementation of GraphQLEndpointProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultGraphQLEndpointProbe:
        return DefaultGraphQLEndpointProbe(logger=self._logger, context=context)

    def request_sent(self, url: str, query_length: int) -> None:
        self._logger.debug(
            "graphql_request_sent",
            url=url,
            query_length=query_length,
            **self._get_context_kwargs(),
        )

    def response_received(self, url: str, status_code: int) -> None:
        self._logger.debug(
            "graphql_response_received",
            url=url,
            status_code=status_code,
            **self._get_context_kwargs(),
        )

    def request_failed(self, url: str, reason: str) -> None:
        self._logger.error(
            "graphql_request_failed",
            url=url,
            reason=reason,
            **self._get_context_kwargs(),
        )
