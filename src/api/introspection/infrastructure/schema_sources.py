"""Schema source implementations for the Introspection bounded context.

Three strategies, one per class:

- ``RemoteSchemaDocumentSource``: GET an SDL document from an http(s) URL
- ``LocalSchemaFileSource``: read an SDL file from disk
- ``EndpointIntrospectionSource``: run the standard introspection query
  against the GraphQL endpoint and print the result as SDL
"""

from __future__ import annotations

import anyio
import httpx
from graphql import (
    GraphQLError,
    build_client_schema,
    get_introspection_query,
    print_schema,
)

from introspection.domain.value_objects import (
    SchemaDocument,
    SchemaSourceKind,
    SchemaUnavailableError,
)
from introspection.ports.repositories import ISchemaSource
from shared_kernel.graphql_endpoint import (
    IGraphQLEndpoint,
    UpstreamGraphQLErrors,
    UpstreamHttpError,
    UpstreamNetworkFailure,
)


class RemoteSchemaDocumentSource(ISchemaSource):
    """Fetches a schema document over HTTP. Configured headers are not sent."""

    def __init__(
        self,
        url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self._url = url
        self._transport = transport
        self._timeout = timeout

    @property
    def kind(self) -> SchemaSourceKind:
        return SchemaSourceKind.REMOTE_URL

    @property
    def origin(self) -> str:
        return self._url

    async def load(self) -> SchemaDocument:
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout,
                follow_redirects=True,
            ) as client:
                response = await client.get(self._url)
        except httpx.HTTPError as e:
            raise SchemaUnavailableError(
                f"Failed to fetch schema from URL: {e}", source=self._url
            ) from e

        if not response.is_success:
            raise SchemaUnavailableError(
                f"Failed to fetch schema from URL: {response.reason_phrase}",
                source=self._url,
            )

        return SchemaDocument(
            text=response.text, source_kind=self.kind, origin=self._url
        )


class LocalSchemaFileSource(ISchemaSource):
    """Reads a schema file as UTF-8 text without blocking the event loop."""

    def __init__(self, path: str):
        self._path = path

    @property
    def kind(self) -> SchemaSourceKind:
        return SchemaSourceKind.LOCAL_FILE

    @property
    def origin(self) -> str:
        return self._path

    async def load(self) -> SchemaDocument:
        try:
            text = await anyio.Path(self._path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SchemaUnavailableError(
                f"Failed to read schema file {self._path}: {e}", source=self._path
            ) from e

        return SchemaDocument(text=text, source_kind=self.kind, origin=self._path)


class EndpointIntrospectionSource(ISchemaSource):
    """Introspects the live endpoint and renders the result as SDL."""

    def __init__(self, endpoint: IGraphQLEndpoint):
        self._endpoint = endpoint

    @property
    def kind(self) -> SchemaSourceKind:
        return SchemaSourceKind.ENDPOINT_INTROSPECTION

    @property
    def origin(self) -> str:
        return self._endpoint.url

    async def load(self) -> SchemaDocument:
        result = await self._endpoint.execute(get_introspection_query(descriptions=True))

        if isinstance(result, UpstreamNetworkFailure):
            raise SchemaUnavailableError(
                f"GraphQL request failed: {result.cause}", source=self.origin
            )
        if isinstance(result, UpstreamHttpError):
            raise SchemaUnavailableError(
                f"GraphQL request failed: {result.reason}", source=self.origin
            )
        if isinstance(result, UpstreamGraphQLErrors):
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in result.errors
            )
            raise SchemaUnavailableError(
                f"Introspection returned errors: {messages}", source=self.origin
            )

        data = result.payload.get("data")
        if not isinstance(data, dict):
            raise SchemaUnavailableError(
                "Introspection response has no data", source=self.origin
            )

        try:
            schema = build_client_schema(data)
        except (GraphQLError, TypeError, ValueError) as e:
            raise SchemaUnavailableError(
                f"Invalid introspection result: {e}", source=self.origin
            ) from e

        return SchemaDocument(
            text=print_schema(schema), source_kind=self.kind, origin=self.origin
        )
