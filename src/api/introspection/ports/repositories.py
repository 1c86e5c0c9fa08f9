"""Repository interfaces (ports) for the Introspection bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from introspection.domain.value_objects import SchemaDocument, SchemaSourceKind


@runtime_checkable
class ISchemaSource(Protocol):
    """One strategy for obtaining the GraphQL schema document.

    Sources do no caching: every ``load`` call performs fresh I/O.
    """

    @property
    def kind(self) -> SchemaSourceKind:
        """Strategy implemented by this source."""
        ...

    @property
    def origin(self) -> str:
        """URL or path the schema is read from."""
        ...

    async def load(self) -> SchemaDocument:
        """Retrieve the schema document.

        Raises:
            SchemaUnavailableError: If the document cannot be retrieved.
        """
        ...
