"""Dependency injection for the Transport bounded context.

The SSE host stores its session registry and probe on ``app.state``; route
handlers receive them through these providers instead of a module global.
"""

from fastapi import Request

from transport.application.observability import (
    DefaultTransportProbe,
    TransportProbe,
)
from transport.application.session_registry import SseSessionRegistry


def get_transport_probe() -> TransportProbe:
    """Get TransportProbe instance.

    Returns:
        DefaultTransportProbe instance for observability
    """
    return DefaultTransportProbe()


def get_session_registry(request: Request) -> SseSessionRegistry:
    """Get the session registry of the app serving the request."""
    return request.app.state.session_registry


def get_request_transport_probe(request: Request) -> TransportProbe:
    """Get the transport probe of the app serving the request."""
    return request.app.state.transport_probe
