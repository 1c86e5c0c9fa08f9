"""MCP server surface: the schema resource and the two GraphQL tools."""

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError, ToolError
from pydantic import AliasChoices, Field

from infrastructure.settings import GatewaySettings
from introspection.application.services import SchemaResolutionService
from introspection.domain.value_objects import SchemaUnavailableError
from query.application.services import MCPQueryService
from shared_kernel.tool_result import ToolResultEnvelope

SCHEMA_RESOURCE_NAME = "graphql-schema"
INTROSPECT_TOOL_NAME = "introspect-schema"
QUERY_TOOL_NAME = "query-graphql"


def _unwrap(envelope: ToolResultEnvelope) -> str:
    """Return envelope text, raising ToolError so the result carries isError."""
    if envelope.is_error:
        raise ToolError(envelope.text)
    return envelope.text


def create_mcp_server(
    settings: GatewaySettings,
    schema_service: SchemaResolutionService,
    query_service: MCPQueryService,
) -> FastMCP:
    """Create the FastMCP server and register its resource and tools.

    Registration happens once, independent of the transport that will
    later host the server.

    Args:
        settings: Validated gateway settings.
        schema_service: Backs the schema resource and introspection tool.
        query_service: Backs the query tool.

    Returns:
        A FastMCP server ready to be connected to a transport
    """
    mcp = FastMCP(
        name=settings.name,
        instructions=f"GraphQL MCP server for {settings.endpoint_url}",
    )

    @mcp.resource(
        uri=settings.endpoint_url,
        name=SCHEMA_RESOURCE_NAME,
        description="GraphQL schema of the configured endpoint",
        mime_type="text/plain",
    )
    async def graphql_schema() -> str:
        """Read the GraphQL schema.

        Uses the remote schema URL, the local schema file or live
        introspection, in that order of precedence.
        """
        try:
            return await schema_service.read_schema_resource()
        except SchemaUnavailableError as e:
            raise ResourceError(f"Failed to get GraphQL schema: {e}") from e

    @mcp.tool(
        name=INTROSPECT_TOOL_NAME,
        description=(
            "Introspect the GraphQL schema, use this tool before doing a query "
            "to get the schema information if you do not have it available as "
            "a resource already."
        ),
    )
    async def introspect_schema(
        # Some clients send nothing instead of an empty object, so the tool
        # keeps one optional argument. Older clients name it __ignore__.
        ignore: Annotated[
            bool,
            Field(
                validation_alias=AliasChoices("__ignore__", "ignore"),
                description="This does not do anything",
            ),
        ] = False,
    ) -> str:
        return _unwrap(await schema_service.introspect_schema_tool())

    @mcp.tool(
        name=QUERY_TOOL_NAME,
        description="Query a GraphQL endpoint with the given query and variables",
    )
    async def query_graphql(
        query: Annotated[str, Field(description="GraphQL query or mutation text")],
        variables: Annotated[
            str | None, Field(description="Variables as a JSON object string")
        ] = None,
    ) -> str:
        return _unwrap(
            await query_service.execute_graphql_query(query=query, variables=variables)
        )

    return mcp
