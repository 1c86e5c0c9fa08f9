"""Unit test fixtures with mocked dependencies."""

import json
from collections.abc import Callable

import httpx
import pytest
from graphql import build_schema, introspection_from_schema

from infrastructure.settings import GatewaySettings

TEST_ENDPOINT = "http://upstream.test/graphql"

TEST_SDL = """
type Query {
  "Whether the service is up"
  ok: Boolean
  users: [User!]!
}

type Mutation {
  doThing: Boolean
}

type User {
  id: ID!
  name: String
}
"""


@pytest.fixture
def make_settings() -> Callable[..., GatewaySettings]:
    """Build settings without reading a .env file."""

    def _make(**overrides) -> GatewaySettings:
        overrides.setdefault("endpoint", TEST_ENDPOINT)
        return GatewaySettings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def introspection_data() -> dict:
    """Introspection result for TEST_SDL, as a GraphQL server would return it."""
    return introspection_from_schema(build_schema(TEST_SDL))


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays a response."""

    def __init__(self, response: httpx.Response | Exception):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    def json_bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def recording_handler() -> Callable[..., RecordingHandler]:
    """Factory for a recording handler around a fixed response."""

    def _make(response: httpx.Response | Exception) -> RecordingHandler:
        return RecordingHandler(response)

    return _make


@pytest.fixture
def test_endpoint() -> str:
    return TEST_ENDPOINT


@pytest.fixture
def test_sdl() -> str:
    return TEST_SDL
