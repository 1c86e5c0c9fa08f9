"""MCP-specific cross-context dependency composition.

This is the integration/composition layer for MCP resources and tools.
It's the ONLY place allowed to wire together the Introspection and Query
contexts.
"""

import httpx
from fastmcp import FastMCP

from infrastructure.settings import GatewaySettings
from introspection.dependencies import get_schema_resolution_service
from query.dependencies import get_mcp_query_service
from query.presentation.mcp import create_mcp_server
from shared_kernel.graphql_endpoint import HttpGraphQLEndpoint, IGraphQLEndpoint


def get_graphql_endpoint(
    settings: GatewaySettings,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> IGraphQLEndpoint:
    """Get the upstream endpoint client with configured headers applied."""
    return HttpGraphQLEndpoint(
        url=settings.endpoint_url,
        headers=settings.headers,
        transport=http_transport,
    )


def build_mcp_server(
    settings: GatewaySettings,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> FastMCP:
    """Compose services for both contexts and register them on one server.

    Args:
        settings: Validated gateway settings.
        http_transport: Optional httpx transport shared by every upstream
            request (endpoint queries, introspection, remote schema fetches).

    Returns:
        FastMCP server with the schema resource and both tools registered
    """
    endpoint = get_graphql_endpoint(settings, http_transport=http_transport)
    schema_service = get_schema_resolution_service(
        settings, endpoint=endpoint, http_transport=http_transport
    )
    query_service = get_mcp_query_service(settings, endpoint=endpoint)
    return create_mcp_server(settings, schema_service, query_service)
