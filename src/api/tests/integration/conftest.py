"""Integration test fixtures.

The MCP server is built exactly as in production; only the network layer
underneath the upstream GraphQL endpoint is replaced by an in-process
``httpx.MockTransport``.
"""

import json
from collections.abc import Callable

import httpx
import pytest
from fastmcp import FastMCP
from graphql import build_schema, introspection_from_schema

from infrastructure.mcp_dependencies import build_mcp_server
from infrastructure.settings import GatewaySettings

UPSTREAM_URL = "http://upstream.test/graphql"

UPSTREAM_SDL = """
type Query {
  ok: Boolean
}

type Mutation {
  doThing: Boolean
}
"""


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (in-process, no services)",
    )


class FakeGraphQLUpstream:
    """In-process GraphQL server answering over httpx.MockTransport.

    Introspection queries get the introspection of UPSTREAM_SDL; every other
    operation gets ``data_payload``. Each status can be overridden to simulate
    a failing server.
    """

    def __init__(self):
        self.data_payload: dict = {"data": {"ok": True}}
        self.data_status = 200
        self.introspection_status = 200
        self.unreachable = False
        self.schema_document = UPSTREAM_SDL
        self.requests: list[httpx.Request] = []
        self._introspection = introspection_from_schema(build_schema(UPSTREAM_SDL))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.unreachable:
            raise httpx.ConnectError("Connection refused", request=request)
        if request.method == "GET":
            return httpx.Response(200, text=self.schema_document)

        body = json.loads(request.content)
        if "__schema" in body["query"]:
            if self.introspection_status != 200:
                return httpx.Response(self.introspection_status, text="boom")
            return httpx.Response(200, json={"data": self._introspection})
        return httpx.Response(self.data_status, json=self.data_payload)

    @property
    def operations(self) -> list[str]:
        """Query texts of every POSTed operation."""
        return [
            json.loads(request.content)["query"]
            for request in self.requests
            if request.method == "POST"
        ]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def upstream() -> FakeGraphQLUpstream:
    return FakeGraphQLUpstream()


@pytest.fixture
def build_server(upstream) -> Callable[..., FastMCP]:
    """Build the production MCP server against the fake upstream."""

    def _build(**overrides) -> FastMCP:
        overrides.setdefault("endpoint", UPSTREAM_URL)
        settings = GatewaySettings(_env_file=None, **overrides)
        return build_mcp_server(settings, http_transport=upstream.transport)

    return _build


@pytest.fixture
def upstream_url() -> str:
    return UPSTREAM_URL
