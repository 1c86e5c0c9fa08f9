"""Unit tests for gateway settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import GatewaySettings, get_settings
from transport.domain.value_objects import TransportKind


class TestGatewaySettingsDefaults:
    """Tests for default configuration."""

    def test_defaults(self):
        """Should fall back to the documented defaults."""
        settings = GatewaySettings(_env_file=None)

        assert settings.name == "mcp-graphql"
        assert settings.endpoint_url == "http://localhost:4000/graphql"
        assert settings.allow_mutations is False
        assert settings.headers == {}
        assert settings.schema_source is None
        assert settings.transport is TransportKind.STDIO
        assert settings.port == 3000
        assert settings.host == "0.0.0.0"

    def test_settings_are_frozen(self):
        """Settings are validated once and never mutated."""
        settings = GatewaySettings(_env_file=None)
        with pytest.raises(ValidationError):
            settings.port = 4000


class TestGatewaySettingsFromEnvironment:
    """Tests for environment variable loading."""

    def test_reads_environment_variables(self, monkeypatch):
        """Should read every key from the environment."""
        monkeypatch.setenv("NAME", "my-gateway")
        monkeypatch.setenv("ENDPOINT", "https://api.example.com/graphql")
        monkeypatch.setenv("ALLOW_MUTATIONS", "true")
        monkeypatch.setenv("HEADERS", '{"Authorization": "Bearer token"}')
        monkeypatch.setenv("SCHEMA", "/tmp/schema.graphql")
        monkeypatch.setenv("TRANSPORT", "sse")
        monkeypatch.setenv("PORT", "8080")

        settings = GatewaySettings(_env_file=None)

        assert settings.name == "my-gateway"
        assert settings.endpoint_url == "https://api.example.com/graphql"
        assert settings.allow_mutations is True
        assert settings.headers == {"Authorization": "Bearer token"}
        assert settings.schema_source == "/tmp/schema.graphql"
        assert settings.transport == "sse"
        assert settings.port == 8080

    def test_reads_dotenv_file(self, tmp_path):
        """Should read values from a .env file."""
        env_file = tmp_path / "gateway.env"
        env_file.write_text("TRANSPORT=streamable-http\nPORT=9000\n")

        settings = GatewaySettings(_env_file=env_file)

        assert settings.transport == "streamable-http"
        assert settings.port == 9000

    def test_blank_schema_is_unset(self, monkeypatch):
        """An empty SCHEMA means live introspection."""
        monkeypatch.setenv("SCHEMA", "   ")

        assert GatewaySettings(_env_file=None).schema_source is None


class TestAllowMutationsValidation:
    """Tests for ALLOW_MUTATIONS parsing."""

    @pytest.mark.parametrize("value,expected", [("true", True), ("false", False)])
    def test_accepts_true_and_false(self, value, expected):
        settings = GatewaySettings(_env_file=None, allow_mutations=value)
        assert settings.allow_mutations is expected

    @pytest.mark.parametrize(
        "value", ["TRUE", "FALSE", "False", " true ", "yes", "1", "on", ""]
    )
    def test_rejects_other_strings(self, value):
        """Only the literal strings true and false are accepted."""
        with pytest.raises(ValidationError) as exc_info:
            GatewaySettings(_env_file=None, allow_mutations=value)

        assert "ALLOW_MUTATIONS" in str(exc_info.value)

    def test_uppercase_environment_value_is_fatal(self, monkeypatch):
        monkeypatch.setenv("ALLOW_MUTATIONS", "TRUE")

        with pytest.raises(ValidationError):
            GatewaySettings(_env_file=None)


class TestHeadersValidation:
    """Tests for HEADERS parsing."""

    def test_invalid_json_is_rejected(self, monkeypatch):
        monkeypatch.setenv("HEADERS", "{not json")

        with pytest.raises(ValidationError) as exc_info:
            GatewaySettings(_env_file=None)

        assert "HEADERS must be a valid JSON string" in str(exc_info.value)

    def test_non_object_is_rejected(self, monkeypatch):
        monkeypatch.setenv("HEADERS", '["a", "b"]')

        with pytest.raises(ValidationError) as exc_info:
            GatewaySettings(_env_file=None)

        assert "HEADERS must be a JSON object" in str(exc_info.value)

    def test_accepts_dict(self):
        settings = GatewaySettings(_env_file=None, headers={"X-Api-Key": "k"})
        assert settings.headers == {"X-Api-Key": "k"}


class TestOtherFieldValidation:
    """Tests for endpoint, transport and port validation."""

    def test_rejects_invalid_endpoint(self):
        with pytest.raises(ValidationError):
            GatewaySettings(_env_file=None, endpoint="not a url")

    def test_rejects_unknown_transport(self):
        with pytest.raises(ValidationError):
            GatewaySettings(_env_file=None, transport="websocket")

    @pytest.mark.parametrize("port", [0, 65536])
    def test_rejects_out_of_range_port(self, port):
        with pytest.raises(ValidationError):
            GatewaySettings(_env_file=None, port=port)


class TestSchemaIsRemote:
    """Tests for the schema_is_remote helper."""

    @pytest.mark.parametrize(
        "schema,expected",
        [
            (None, False),
            ("./schema.graphql", False),
            ("http://example.com/schema.graphql", True),
            ("https://example.com/schema.graphql", True),
        ],
    )
    def test_schema_is_remote(self, schema, expected):
        settings = GatewaySettings(_env_file=None, schema_source=schema)
        assert settings.schema_is_remote is expected


class TestGetSettings:
    """Tests for the cached accessor."""

    def test_returns_cached_instance(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
