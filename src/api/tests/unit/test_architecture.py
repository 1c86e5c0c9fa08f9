"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
and between the Introspection, Query and Transport bounded contexts.
"""

from pytest_archon import archrule


class TestDomainLayerBoundaries:
    """Domain layers are framework-agnostic."""

    def test_query_domain_has_no_io(self):
        """The mutation gate classifies documents; it never talks to the network."""
        (
            archrule("query_domain_no_io")
            .match("query.domain*")
            .should_not_import(
                "query.application*",
                "query.infrastructure*",
                "httpx*",
                "fastmcp*",
                "fastapi*",
            )
            .check("query")
        )

    def test_introspection_domain_has_no_io(self):
        (
            archrule("introspection_domain_no_io")
            .match("introspection.domain*")
            .should_not_import(
                "introspection.infrastructure*", "httpx*", "anyio*", "fastmcp*"
            )
            .check("introspection")
        )

    def test_transport_domain_has_no_framework(self):
        (
            archrule("transport_domain_no_framework")
            .match("transport.domain*")
            .should_not_import("fastapi*", "starlette*", "uvicorn*", "sse_starlette*")
            .check("transport")
        )


class TestApplicationLayerBoundaries:
    """Application services depend on ports, not implementations."""

    def test_query_application_does_not_import_http_client(self):
        """The query service sees the endpoint only through IGraphQLEndpoint."""
        (
            archrule("query_application_no_http_client")
            .match("query.application*")
            .should_not_import("shared_kernel.graphql_endpoint.client", "httpx*")
            .check("query")
        )

    def test_introspection_application_does_not_import_infrastructure(self):
        (
            archrule("introspection_application_no_infrastructure")
            .match("introspection.application*")
            .should_not_import("introspection.infrastructure*", "httpx*")
            .check("introspection")
        )


class TestCrossContextBoundaries:
    """Contexts are wired together only in infrastructure.mcp_dependencies."""

    def test_introspection_does_not_import_query(self):
        (
            archrule("introspection_no_query")
            .match("introspection*")
            .should_not_import("query*", "transport*")
            .check("introspection")
        )

    def test_query_core_does_not_import_introspection(self):
        (
            archrule("query_core_no_introspection")
            .match("query.domain*", "query.application*")
            .should_not_import("introspection*", "transport*")
            .check("query")
        )

    def test_transport_does_not_import_graphql_contexts(self):
        """Transports host any MCP server; they know nothing about GraphQL."""
        (
            archrule("transport_no_graphql_contexts")
            .match("transport*")
            .should_not_import("query*", "introspection*", "shared_kernel*")
            .check("transport")
        )


class TestSharedKernelBoundaries:
    """Shared kernel is depended upon, never depends on contexts."""

    def test_shared_kernel_does_not_import_contexts(self):
        (
            archrule("shared_kernel_no_contexts")
            .match("shared_kernel*")
            .should_not_import("query*", "introspection*", "transport*")
            .check("shared_kernel")
        )
