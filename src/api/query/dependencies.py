"""Dependency injection for Query bounded context.

Provides dependencies local to the Query context only.
Cross-context composition is handled in infrastructure.mcp_dependencies.
"""

from infrastructure.settings import GatewaySettings
from query.application.observability import (
    DefaultQueryServiceProbe,
    QueryServiceProbe,
)
from query.application.services import MCPQueryService
from query.domain.mutation_gate import MutationGate
from shared_kernel.graphql_endpoint import IGraphQLEndpoint


def get_query_service_probe() -> QueryServiceProbe:
    """Get QueryServiceProbe instance.

    Returns:
        DefaultQueryServiceProbe instance for observability
    """
    return DefaultQueryServiceProbe()


def get_mutation_gate(settings: GatewaySettings) -> MutationGate:
    """Get a mutation gate carrying the configured mutation policy."""
    return MutationGate(allow_mutations=settings.allow_mutations)


def get_mcp_query_service(
    settings: GatewaySettings, endpoint: IGraphQLEndpoint
) -> MCPQueryService:
    """Get MCPQueryService for the query tool.

    Args:
        settings: Validated gateway settings.
        endpoint: Endpoint queries are sent to.

    Returns:
        MCPQueryService instance
    """
    return MCPQueryService(
        endpoint=endpoint,
        gate=get_mutation_gate(settings),
        probe=get_query_service_probe(),
    )
