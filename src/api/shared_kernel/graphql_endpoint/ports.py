"""Port for sending GraphQL operations to the configured endpoint."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from shared_kernel.graphql_endpoint.value_objects import UpstreamResult


@runtime_checkable
class IGraphQLEndpoint(Protocol):
    """A single upstream GraphQL endpoint.

    Implementations issue exactly one request per call and never retry.
    """

    @property
    def url(self) -> str:
        """The endpoint URL requests are sent to."""
        ...

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> UpstreamResult:
        """Send one GraphQL operation.

        Args:
            query: GraphQL document text.
            variables: Optional variable values.

        Returns:
            The tagged outcome of the request.
        """
        ...
