"""Server-Sent-Events transport for one MCP session.

Each ``GET /sse`` creates one ``SseSessionTransport``. Server-to-client
messages go out on the event stream; client-to-server messages arrive as
separate POSTs and are handed in through ``deliver``. The first event on
the stream is ``endpoint``, telling the client where to POST.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from uuid import uuid4

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream
from mcp.shared.message import ServerMessageMetadata, SessionMessage
from mcp.types import JSONRPCMessage
from sse_starlette import EventSourceResponse
from starlette.types import Receive, Scope, Send

from transport.domain.value_objects import SessionClosedError
from transport.ports.sessions import ISessionTransport


class SseSessionTransport(ISessionTransport):
    """Bridges one event stream and its POST channel to the protocol engine."""

    def __init__(
        self, message_path: str = "/messages", session_id: str | None = None
    ):
        self._session_id = session_id or uuid4().hex
        self._message_path = message_path
        self._read_stream_writer: (
            MemoryObjectSendStream[SessionMessage | Exception] | None
        ) = None

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def endpoint_uri(self) -> str:
        """Where the client POSTs its messages for this session."""
        return f"{self._message_path}?sessionId={self._session_id}"

    @asynccontextmanager
    async def connect_sse(
        self, scope: Scope, receive: Receive, send: Send
    ) -> AsyncIterator[
        tuple[
            MemoryObjectReceiveStream[SessionMessage | Exception],
            MemoryObjectSendStream[SessionMessage],
        ]
    ]:
        """Open the event stream and yield the protocol engine's stream pair.

        The stream stays open until the client disconnects; the yielded
        read stream is closed at that point, which ends the engine's run.
        """
        read_stream_writer, read_stream = anyio.create_memory_object_stream[
            SessionMessage | Exception
        ](0)
        write_stream, write_stream_reader = anyio.create_memory_object_stream[
            SessionMessage
        ](0)
        sse_stream_writer, sse_stream_reader = anyio.create_memory_object_stream[
            dict[str, Any]
        ](0)
        self._read_stream_writer = read_stream_writer

        async def sse_writer() -> None:
            async with sse_stream_writer, write_stream_reader:
                await sse_stream_writer.send(
                    {"event": "endpoint", "data": self.endpoint_uri}
                )
                async for session_message in write_stream_reader:
                    await sse_stream_writer.send(
                        {
                            "event": "message",
                            "data": session_message.message.model_dump_json(
                                by_alias=True, exclude_none=True
                            ),
                        }
                    )

        async def response_wrapper(scope: Scope, receive: Receive, send: Send) -> None:
            response = EventSourceResponse(
                content=sse_stream_reader, data_sender_callable=sse_writer
            )
            try:
                await response(scope, receive, send)
            finally:
                self._read_stream_writer = None
                await read_stream_writer.aclose()
                await write_stream_reader.aclose()

        async with anyio.create_task_group() as tg:
            tg.start_soon(response_wrapper, scope, receive, send)
            yield read_stream, write_stream

    async def deliver(self, message: JSONRPCMessage, request: Any | None = None) -> None:
        writer = self._read_stream_writer
        if writer is None:
            raise SessionClosedError(self._session_id)

        metadata = ServerMessageMetadata(request_context=request) if request else None
        try:
            await writer.send(SessionMessage(message, metadata=metadata))
        except (anyio.ClosedResourceError, anyio.BrokenResourceError) as e:
            raise SessionClosedError(self._session_id) from e
