"""Application settings using pydantic-settings.

Settings are loaded once from environment variables (and an optional
``.env`` file). Every field is validated up front; a malformed value is a
fatal configuration error and the gateway does not start.
"""

import json
from functools import lru_cache
from typing import Annotated, Any

from pydantic import AliasChoices, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from transport.domain.value_objects import TransportKind


class GatewaySettings(BaseSettings):
    """Gateway configuration.

    Environment variables:
        NAME: MCP server display name (default: mcp-graphql)
        ENDPOINT: GraphQL endpoint URL (default: http://localhost:4000/graphql)
        ALLOW_MUTATIONS: "true" or "false" (default: false)
        HEADERS: JSON object of headers forwarded upstream (default: {})
        SCHEMA: Local schema file path or http(s) URL (optional)
        TRANSPORT: stdio, streamable-http or sse (default: stdio)
        PORT: HTTP listen port for the HTTP transports (default: 3000)
        HOST: HTTP bind address for the HTTP transports (default: 0.0.0.0)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    name: str = Field(default="mcp-graphql", description="MCP server name")
    endpoint: HttpUrl = Field(
        default="http://localhost:4000/graphql",
        validate_default=True,
        description="GraphQL endpoint URL",
    )
    allow_mutations: bool = Field(
        default=False, description="Allow mutation operations"
    )
    headers: Annotated[dict[str, str], NoDecode] = Field(
        default_factory=dict, description="Headers forwarded to the endpoint"
    )
    schema_source: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SCHEMA", "schema_source"),
        description="Local schema path or remote schema URL",
    )
    transport: TransportKind = Field(
        default=TransportKind.STDIO, description="MCP transport"
    )
    port: int = Field(default=3000, ge=1, le=65535, description="HTTP port")
    host: str = Field(default="0.0.0.0", description="HTTP bind address")

    @field_validator("allow_mutations", mode="before")
    @classmethod
    def parse_allow_mutations(cls, value: Any) -> bool:
        """Accept only the literal strings "true" and "false"."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value in ("true", "false"):
            return value == "true"
        raise ValueError('ALLOW_MUTATIONS must be "true" or "false"')

    @field_validator("headers", mode="before")
    @classmethod
    def parse_headers(cls, value: Any) -> Any:
        """Decode HEADERS from JSON text when it arrives as a string."""
        if isinstance(value, str):
            try:
                value = json.loads(value or "{}")
            except json.JSONDecodeError as e:
                raise ValueError("HEADERS must be a valid JSON string") from e
        if not isinstance(value, dict):
            raise ValueError("HEADERS must be a JSON object")
        return value

    @field_validator("schema_source", mode="before")
    @classmethod
    def blank_schema_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def endpoint_url(self) -> str:
        """The endpoint as a plain string."""
        return str(self.endpoint)

    @property
    def schema_is_remote(self) -> bool:
        """Whether SCHEMA names an http(s) document rather than a file."""
        return self.schema_source is not None and self.schema_source.startswith(
            ("http://", "https://")
        )


@lru_cache
def get_settings() -> GatewaySettings:
    """Get cached gateway settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return GatewaySettings()
