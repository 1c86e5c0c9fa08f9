"""HTTP apps hosting the MCP server.

- ``create_streamable_http_app``: stateless ``POST /mcp``; a fresh transport
  per request, closed with the response.
- ``create_sse_app``: ``GET /sse`` opens a session-keyed event stream and
  ``POST /messages?sessionId=<id>`` feeds it. Deprecated in favour of
  streamable HTTP, kept for older clients.

Both apps expose ``GET /health``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator

from fastapi import APIRouter, Depends, FastAPI, Query, Request, status
from fastapi.responses import PlainTextResponse, Response
from fastmcp import FastMCP
from mcp.types import JSONRPCMessage
from pydantic import ValidationError
from starlette.types import Receive, Scope, Send

from infrastructure.observability.context import ObservationContext
from infrastructure.version import __version__
from transport.application.observability import TransportProbe
from transport.application.session_registry import SseSessionRegistry
from transport.dependencies import (
    get_request_transport_probe,
    get_session_registry,
    get_transport_probe,
)
from transport.domain.value_objects import SessionClosedError, TransportKind
from transport.infrastructure.sse_transport import SseSessionTransport

STREAMABLE_HTTP_PATH = "/mcp"
SSE_PATH = "/sse"
MESSAGES_PATH = "/messages"

UNKNOWN_SESSION_MESSAGE = "No transport found for sessionId"

health_router = APIRouter(tags=["health"])
sse_router = APIRouter(tags=["sse"])


@health_router.get("/health")
def health() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok"}


@sse_router.post(MESSAGES_PATH)
async def post_message(
    request: Request,
    session_id: Annotated[str | None, Query(alias="sessionId")] = None,
    registry: SseSessionRegistry = Depends(get_session_registry),
    probe: TransportProbe = Depends(get_request_transport_probe),
) -> Response:
    """Deliver one client-to-server message to an open SSE session.

    Unknown or missing session ids are rejected with 400; nothing is
    created for them.
    """
    transport = registry.get(session_id)
    if transport is None:
        probe.sse_session_not_found(session_id=session_id)
        return PlainTextResponse(
            UNKNOWN_SESSION_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST
        )

    body = await request.body()
    try:
        message = JSONRPCMessage.model_validate_json(body)
    except ValidationError as e:
        probe.request_failed(path=MESSAGES_PATH, error=str(e))
        return PlainTextResponse(
            "Could not parse message", status_code=status.HTTP_400_BAD_REQUEST
        )

    try:
        await transport.deliver(message, request)
    except SessionClosedError:
        probe.sse_session_not_found(session_id=session_id)
        return PlainTextResponse(
            UNKNOWN_SESSION_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST
        )

    return PlainTextResponse("Accepted", status_code=status.HTTP_202_ACCEPTED)


class SseStreamEndpoint:
    """ASGI endpoint for ``GET /sse``.

    Creates a transport under a fresh session id, registers it, connects
    the protocol engine to it once and unregisters it when the stream
    closes.
    """

    def __init__(
        self,
        mcp: FastMCP,
        registry: SseSessionRegistry,
        probe: TransportProbe,
        message_path: str = MESSAGES_PATH,
    ):
        self._mcp = mcp
        self._registry = registry
        self._probe = probe
        self._message_path = message_path
        self._context = ObservationContext(transport=TransportKind.SSE.value)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        transport = SseSessionTransport(message_path=self._message_path)
        probe = self._probe.with_context(
            self._context.with_session(transport.session_id)
        )
        self._registry.register(transport)
        probe.sse_session_opened(active_sessions=len(self._registry))

        server = self._mcp._mcp_server
        try:
            async with transport.connect_sse(scope, receive, send) as (
                read_stream,
                write_stream,
            ):
                await server.run(
                    read_stream,
                    write_stream,
                    server.create_initialization_options(),
                )
        finally:
            self._registry.unregister(transport.session_id)
            probe.sse_session_closed(active_sessions=len(self._registry))


def create_sse_app(
    mcp: FastMCP,
    registry: SseSessionRegistry | None = None,
    probe: TransportProbe | None = None,
) -> FastAPI:
    """Create the FastAPI app for the SSE transport.

    Args:
        mcp: Server whose handlers are connected to each stream.
        registry: Session registry; a new one is created when omitted.
        probe: Optional transport probe.

    Returns:
        FastAPI app with ``/sse``, ``/messages`` and ``/health``
    """
    registry = registry if registry is not None else SseSessionRegistry()
    probe = probe or get_transport_probe()

    app = FastAPI(
        title=mcp.name,
        description="GraphQL MCP server (SSE transport)",
        version=__version__,
    )
    app.state.session_registry = registry
    app.state.transport_probe = probe

    app.include_router(health_router)
    app.include_router(sse_router)
    app.add_route(
        SSE_PATH, SseStreamEndpoint(mcp, registry, probe), methods=["GET"]
    )
    return app


def create_streamable_http_app(mcp: FastMCP) -> FastAPI:
    """Create the FastAPI app for the stateless streamable HTTP transport.

    Args:
        mcp: Server handling each request.

    Returns:
        FastAPI app with ``/mcp`` and ``/health``
    """
    mcp_app = mcp.http_app(
        path=STREAMABLE_HTTP_PATH, stateless_http=True, json_response=True
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with mcp_app.lifespan(app):
            yield

    app = FastAPI(
        title=mcp.name,
        description="GraphQL MCP server (streamable HTTP transport)",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(health_router)
    # Mount at root so the MCP route stays at /mcp rather than /mcp/mcp
    app.mount("/", mcp_app)
    return app
