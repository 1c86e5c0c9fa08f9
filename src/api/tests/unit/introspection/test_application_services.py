"""Unit tests for the schema resolution service."""

from unittest.mock import create_autospec

import pytest

from introspection.application.observability import SchemaResolutionProbe
from introspection.application.services import SchemaResolutionService
from introspection.domain.value_objects import (
    SchemaDocument,
    SchemaSourceKind,
    SchemaUnavailableError,
)
from introspection.ports.repositories import ISchemaSource


def _source(kind: SchemaSourceKind, text: str = "type Query { ok: Boolean }"):
    source = create_autospec(ISchemaSource, instance=True)
    source.kind = kind
    source.origin = kind.value
    source.load.return_value = SchemaDocument(
        text=text, source_kind=kind, origin=kind.value
    )
    return source


@pytest.fixture
def introspection_source():
    return _source(SchemaSourceKind.ENDPOINT_INTROSPECTION, "type Query { live: Int }")


@pytest.fixture
def file_source():
    return _source(SchemaSourceKind.LOCAL_FILE, "type Query { file: Int }")


@pytest.fixture
def remote_source():
    return _source(SchemaSourceKind.REMOTE_URL, "type Query { remote: Int }")


@pytest.fixture
def mock_probe():
    return create_autospec(SchemaResolutionProbe, instance=True)


class TestSelectSource:
    """Tests for strategy precedence."""

    def test_introspection_when_nothing_configured(self, introspection_source):
        service = SchemaResolutionService(introspection_source=introspection_source)

        assert service.select_source() is introspection_source
        assert service.select_source(allow_remote=False) is introspection_source

    def test_file_over_introspection(self, introspection_source, file_source):
        service = SchemaResolutionService(
            introspection_source=introspection_source, file_source=file_source
        )

        assert service.select_source() is file_source

    def test_remote_over_file_when_allowed(
        self, introspection_source, file_source, remote_source
    ):
        service = SchemaResolutionService(
            introspection_source=introspection_source,
            file_source=file_source,
            remote_source=remote_source,
        )

        assert service.select_source(allow_remote=True) is remote_source
        assert service.select_source(allow_remote=False) is file_source


class TestReadSchemaResource:
    """Tests for the resource read path."""

    @pytest.mark.asyncio
    async def test_uses_remote_source(
        self, introspection_source, file_source, remote_source, mock_probe
    ):
        service = SchemaResolutionService(
            introspection_source=introspection_source,
            file_source=file_source,
            remote_source=remote_source,
            probe=mock_probe,
        )

        text = await service.read_schema_resource()

        assert text == "type Query { remote: Int }"
        remote_source.load.assert_awaited_once()
        file_source.load.assert_not_called()
        mock_probe.schema_resolved.assert_called_once_with(
            call_site="resource",
            source_kind="remote_url",
            content_length=len(text),
        )

    @pytest.mark.asyncio
    async def test_failure_propagates(self, introspection_source, mock_probe):
        introspection_source.load.side_effect = SchemaUnavailableError("down")
        service = SchemaResolutionService(
            introspection_source=introspection_source, probe=mock_probe
        )

        with pytest.raises(SchemaUnavailableError, match="down"):
            await service.read_schema_resource()

        mock_probe.schema_unavailable.assert_called_once_with(
            call_site="resource",
            source_kind="endpoint_introspection",
            reason="down",
        )


class TestIntrospectSchemaTool:
    """Tests for the introspection tool path."""

    @pytest.mark.asyncio
    async def test_never_uses_remote_source(
        self, introspection_source, file_source, remote_source
    ):
        service = SchemaResolutionService(
            introspection_source=introspection_source,
            file_source=file_source,
            remote_source=remote_source,
        )

        envelope = await service.introspect_schema_tool()

        assert envelope.is_error is False
        assert envelope.text == "type Query { file: Int }"
        remote_source.load.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_to_introspection(self, introspection_source):
        service = SchemaResolutionService(introspection_source=introspection_source)

        envelope = await service.introspect_schema_tool()

        assert envelope.text == "type Query { live: Int }"

    @pytest.mark.asyncio
    async def test_failure_is_error_envelope(self, introspection_source, file_source):
        file_source.load.side_effect = SchemaUnavailableError(
            "Failed to read schema file x: missing"
        )
        service = SchemaResolutionService(
            introspection_source=introspection_source, file_source=file_source
        )

        envelope = await service.introspect_schema_tool()

        assert envelope.model_dump(by_alias=True) == {
            "isError": True,
            "content": [
                {
                    "type": "text",
                    "text": "Failed to introspect schema: "
                    "Failed to read schema file x: missing",
                }
            ],
        }
        introspection_source.load.assert_not_called()

    @pytest.mark.asyncio
    async def test_each_call_reloads(self, introspection_source):
        """Nothing is cached between calls."""
        service = SchemaResolutionService(introspection_source=introspection_source)

        first = await service.introspect_schema_tool()
        second = await service.introspect_schema_tool()

        assert first == second
        assert introspection_source.load.await_count == 2
