"""Domain value objects and exceptions for the Transport bounded context."""

from __future__ import annotations

from enum import Enum


class TransportKind(str, Enum):
    """Connection model hosting the MCP server for the process lifetime."""

    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"
    SSE = "sse"


class TransportError(Exception):
    """Base exception for transport hosting failures."""

    pass


class TransportBindError(TransportError):
    """Raised when the HTTP listener cannot bind its address."""

    def __init__(self, message: str, host: str, port: int):
        super().__init__(message)
        self.host = host
        self.port = port


class UnsupportedTransportError(TransportError):
    """Raised for a transport kind the multiplexer cannot host."""

    pass


class DuplicateSessionError(TransportError):
    """Raised when registering a session id that is already live."""

    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} is already registered")
        self.session_id = session_id


class SessionClosedError(TransportError):
    """Raised when delivering a message to a session whose stream is closed."""

    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} is not connected")
        self.session_id = session_id
