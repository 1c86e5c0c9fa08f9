"""Domain probes for the Introspection application layer.

Following Domain Oriented Observability pattern.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class SchemaResolutionProbe(Protocol):
    """Domain probe for schema resolution."""

    def schema_requested(self, call_site: str, source_kind: str, origin: str) -> None:
        """Record that a schema was requested and which strategy was selected."""
        ...

    def schema_resolved(
        self, call_site: str, source_kind: str, content_length: int
    ) -> None:
        """Record that a schema document was produced."""
        ...

    def schema_unavailable(self, call_site: str, source_kind: str, reason: str) -> None:
        """Record that the selected strategy failed."""
        ...

    def with_context(self, context: ObservationContext) -> SchemaResolutionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSchemaResolutionProbe:
    """Default implementation using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultSchemaResolutionProbe:
        return DefaultSchemaResolutionProbe(logger=self._logger, context=context)

    def schema_requested(self, call_site: str, source_kind: str, origin: str) -> None:
        self._logger.info(
            "schema_requested",
            call_site=call_site,
            source_kind=source_kind,
            origin=origin,
            **self._get_context_kwargs(),
        )

    def schema_resolved(
        self, call_site: str, source_kind: str, content_length: int
    ) -> None:
        self._logger.info(
            "schema_resolved",
            call_site=call_site,
            source_kind=source_kind,
            content_length=content_length,
            **self._get_context_kwargs(),
        )

    def schema_unavailable(self, call_site: str, source_kind: str, reason: str) -> None:
        self._logger.warning(
            "schema_unavailable",
            call_site=call_site,
            source_kind=source_kind,
            reason=reason,
            **self._get_context_kwargs(),
        )
