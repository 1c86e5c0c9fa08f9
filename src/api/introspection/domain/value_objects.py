"""Domain value objects and exceptions for the Introspection bounded context."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SchemaUnavailableError(Exception):
    """Raised when no schema document could be produced."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class SchemaSourceKind(str, Enum):
    """Where a schema document was obtained from."""

    REMOTE_URL = "remote_url"
    LOCAL_FILE = "local_file"
    ENDPOINT_INTROSPECTION = "endpoint_introspection"


class SchemaDocument(BaseModel):
    """A retrieved GraphQL schema, passed through as text.

    Attributes:
        text: SDL text (or whatever the configured document contains)
        source_kind: Strategy that produced the text
        origin: URL or path the text came from
    """

    model_config = ConfigDict(frozen=True)

    text: str
    source_kind: SchemaSourceKind
    origin: str
