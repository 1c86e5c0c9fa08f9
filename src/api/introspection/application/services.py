"""Application services for the Introspection bounded context."""

from __future__ import annotations

from introspection.application.observability import (
    DefaultSchemaResolutionProbe,
    SchemaResolutionProbe,
)
from introspection.domain.value_objects import SchemaDocument, SchemaUnavailableError
from introspection.ports.repositories import ISchemaSource
from shared_kernel.tool_result import ToolResultEnvelope


class SchemaResolutionService:
    """Resolves the GraphQL schema document for MCP consumers.

    Precedence for the ``graphql-schema`` resource:

    1. ``remote_source`` (SCHEMA is an http(s) URL)
    2. ``file_source`` (SCHEMA is set)
    3. ``introspection_source`` (live introspection of the endpoint)

    The ``introspect-schema`` tool skips step 1: when SCHEMA is set it is
    always read as a local file, even if it looks like a URL.

    Nothing is cached; each call performs fresh I/O.
    """

    RESOURCE = "resource"
    TOOL = "tool"

    def __init__(
        self,
        introspection_source: ISchemaSource,
        file_source: ISchemaSource | None = None,
        remote_source: ISchemaSource | None = None,
        probe: SchemaResolutionProbe | None = None,
    ):
        """Initialize the service.

        Args:
            introspection_source: Live endpoint introspection, the fallback.
            file_source: Local schema file, when SCHEMA is set.
            remote_source: Remote schema document, when SCHEMA is a URL.
            probe: Optional domain probe for observability.
        """
        self._introspection_source = introspection_source
        self._file_source = file_source
        self._remote_source = remote_source
        self._probe = probe or DefaultSchemaResolutionProbe()

    def select_source(self, allow_remote: bool = True) -> ISchemaSource:
        """Pick the strategy for one resolution.

        Args:
            allow_remote: Whether the remote document strategy may be used.
        """
        if allow_remote and self._remote_source is not None:
            return self._remote_source
        if self._file_source is not None:
            return self._file_source
        return self._introspection_source

    async def resolve_schema(
        self, allow_remote: bool = True, call_site: str = RESOURCE
    ) -> SchemaDocument:
        """Resolve the schema with the selected strategy.

        Raises:
            SchemaUnavailableError: If the selected strategy fails.
        """
        source = self.select_source(allow_remote=allow_remote)
        self._probe.schema_requested(
            call_site=call_site, source_kind=source.kind.value, origin=source.origin
        )

        try:
            document = await source.load()
        except SchemaUnavailableError as e:
            self._probe.schema_unavailable(
                call_site=call_site, source_kind=source.kind.value, reason=str(e)
            )
            raise

        self._probe.schema_resolved(
            call_site=call_site,
            source_kind=document.source_kind.value,
            content_length=len(document.text),
        )
        return document

    async def read_schema_resource(self) -> str:
        """Schema text for the readable resource.

        Raises:
            SchemaUnavailableError: Surfaced to the client as a protocol error.
        """
        document = await self.resolve_schema(allow_remote=True, call_site=self.RESOURCE)
        return document.text

    async def introspect_schema_tool(self) -> ToolResultEnvelope:
        """Schema text for the introspection tool, failures as an error envelope."""
        try:
            document = await self.resolve_schema(
                allow_remote=False, call_site=self.TOOL
            )
        except SchemaUnavailableError as e:
            return ToolResultEnvelope.failure(f"Failed to introspect schema: {e}")

        return ToolResultEnvelope.success(document.text)
