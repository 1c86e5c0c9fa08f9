"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Attributes:
        request_id: Identifier of the current MCP request (if applicable).
        session_id: SSE session the request arrived on (if applicable).
        transport: Transport kind hosting the request.
        tool_name: MCP tool or resource being served.
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(transport="sse", session_id="3f0c...")
        probe = DefaultTransportProbe().with_context(context)
    """

    request_id: str | None = None
    session_id: str | None = None
    transport: str | None = None
    tool_name: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.session_id is not None:
            result["session_id"] = self.session_id
        if self.transport is not None:
            result["transport"] = self.transport
        if self.tool_name is not None:
            result["tool_name"] = self.tool_name
        result.update(self.extra)
        return result

    def with_session(self, session_id: str) -> ObservationContext:
        """Create a new context with the session id set."""
        return ObservationContext(
            request_id=self.request_id,
            session_id=session_id,
            transport=self.transport,
            tool_name=self.tool_name,
            extra=self.extra,
        )
