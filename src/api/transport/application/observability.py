"""Domain probes for the Transport bounded context.

Following Domain Oriented Observability pattern.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class TransportProbe(Protocol):
    """Domain probe for transport hosting and SSE session lifetime."""

    def server_started(self, name: str, endpoint: str, transport: str) -> None:
        """Record that the MCP server is being served."""
        ...

    def listener_bound(self, host: str, port: int) -> None:
        """Record that the HTTP listener bound its address."""
        ...

    def bind_failed(self, host: str, port: int, error: str) -> None:
        """Record that the HTTP listener could not bind."""
        ...

    def sse_session_opened(self, active_sessions: int) -> None:
        """Record that an SSE stream was opened.

        The session id comes from the bound observation context.
        """
        ...

    def sse_session_closed(self, active_sessions: int) -> None:
        """Record that an SSE stream was closed and its session removed."""
        ...

    def sse_session_not_found(self, session_id: str | None) -> None:
        """Record that a message referenced an unknown session."""
        ...

    def request_failed(self, path: str, error: str) -> None:
        """Record that an HTTP request could not be handled."""
        ...

    def with_context(self, context: ObservationContext) -> TransportProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTransportProbe:
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

    def with_context(self, context: ObservationContext) -> DefaultTransportProbe:
        return DefaultTransportProbe(logger=self._logger, context=context)

    def server_started(self, name: str, endpoint: str, transport: str) -> None:
        self._logger.info(
            "mcp_server_started",
            name=name,
            endpoint=endpoint,
            transport=transport,
            **self._get_context_kwargs(),
        )

    def listener_bound(self, host: str, port: int) -> None:
        self._logger.info(
            "http_listener_bound",
            host=host,
            port=port,
            **self._get_context_kwargs(),
        )

    def bind_failed(self, host: str, port: int, error: str) -> None:
        self._logger.error(
            "http_listener_bind_failed",
            host=host,
            port=port,
            error=error,
            **self._get_context_kwargs(),
        )

    def sse_session_opened(self, active_sessions: int) -> None:
        self._logger.info(
            "sse_session_opened",
            active_sessions=active_sessions,
            **self._get_context_kwargs(),
        )

    def sse_session_closed(self, active_sessions: int) -> None:
        self._logger.info(
            "sse_session_closed",
            active_sessions=active_sessions,
            **self._get_context_kwargs(),
        )

    def sse_session_not_found(self, session_id: str | None) -> None:
        self._logger.warning(
            "sse_session_not_found",
            session_id=session_id,
            **self._get_context_kwargs(),
        )

    def request_failed(self, path: str, error: str) -> None:
        self._logger.error(
            "mcp_request_failed",
            path=path,
            error=error,
            **self._get_context_kwargs(),
        )
