"""Ports for session-keyed transports."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from mcp.types import JSONRPCMessage


@runtime_checkable
class ISessionTransport(Protocol):
    """A live, session-keyed transport accepting out-of-band client messages."""

    @property
    def session_id(self) -> str:
        """Server-generated identifier of the session."""
        ...

    async def deliver(self, message: JSONRPCMessage, request: Any | None = None) -> None:
        """Hand one client-to-server message to the protocol engine.

        Raises:
            SessionClosedError: If the session's stream is no longer open.
        """
        ...
