"""Hosts the MCP server over exactly one transport for the process lifetime."""

from __future__ import annotations

import socket

import uvicorn
from fastapi import FastAPI
from fastmcp import FastMCP

from infrastructure.settings import GatewaySettings
from transport.application.observability import TransportProbe
from transport.application.session_registry import SseSessionRegistry
from transport.dependencies import get_transport_probe
from transport.domain.value_objects import (
    TransportBindError,
    TransportKind,
    UnsupportedTransportError,
)
from transport.presentation.routes import (
    create_sse_app,
    create_streamable_http_app,
)


class TransportMultiplexer:
    """Selects and runs the transport named by TRANSPORT.

    ``stdio`` serves a single session over stdin/stdout. The two HTTP kinds
    bind ``HOST:PORT`` before serving so a busy port surfaces as a
    ``TransportBindError`` instead of a log line from the ASGI server.
    """

    def __init__(
        self,
        mcp: FastMCP,
        settings: GatewaySettings,
        registry: SseSessionRegistry | None = None,
        probe: TransportProbe | None = None,
    ):
        self._mcp = mcp
        self._settings = settings
        self._registry = registry if registry is not None else SseSessionRegistry()
        self._probe = probe or get_transport_probe()

    @property
    def kind(self) -> TransportKind:
        return self._settings.transport

    def build_app(self) -> FastAPI:
        """Build the HTTP app for the configured HTTP transport.

        Raises:
            UnsupportedTransportError: For stdio, which has no HTTP app.
        """
        if self.kind is TransportKind.STREAMABLE_HTTP:
            return create_streamable_http_app(self._mcp)
        if self.kind is TransportKind.SSE:
            return create_sse_app(self._mcp, self._registry, self._probe)
        raise UnsupportedTransportError(f"{self.kind.value} is not served over HTTP")

    async def serve(self) -> None:
        """Serve until the transport ends.

        Raises:
            TransportBindError: If the HTTP listener cannot bind.
        """
        kind = self.kind
        self._probe.server_started(
            name=self._settings.name,
            endpoint=self._settings.endpoint_url,
            transport=kind.value,
        )

        if kind is TransportKind.STDIO:
            await self._mcp.run_async(transport="stdio", show_banner=False)
            return

        app = self.build_app()
        sock = self._bind_socket()
        self._probe.listener_bound(host=self._settings.host, port=self._settings.port)

        config = uvicorn.Config(
            app,
            host=self._settings.host,
            port=self._settings.port,
            log_level="warning",
        )
        server = uvicorn.Server(config)
        try:
            await server.serve(sockets=[sock])
        finally:
            sock.close()

    def _bind_socket(self) -> socket.socket:
        host, port = self._settings.host, self._settings.port
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
        except OSError as e:
            sock.close()
            self._probe.bind_failed(host=host, port=port, error=str(e))
            raise TransportBindError(
                f"Failed to bind {host}:{port}: {e}", host=host, port=port
            ) from e
        sock.set_inheritable(True)
        return sock
