"""Registry of live SSE sessions.

Owned by the SSE host and passed explicitly to its route handlers. All
mutations happen on the event loop thread: insertion when a stream opens,
removal when it closes.
"""

from __future__ import annotations

from transport.domain.value_objects import DuplicateSessionError
from transport.ports.sessions import ISessionTransport


class SseSessionRegistry:
    """Maps session ids to their live transports."""

    def __init__(self) -> None:
        self._sessions: dict[str, ISessionTransport] = {}

    def register(self, transport: ISessionTransport) -> None:
        """Add a newly opened session.

        Raises:
            DuplicateSessionError: If the id is already live.
        """
        if transport.session_id in self._sessions:
            raise DuplicateSessionError(transport.session_id)
        self._sessions[transport.session_id] = transport

    def unregister(self, session_id: str) -> ISessionTransport | None:
        """Remove a session; returns the removed transport, if any."""
        return self._sessions.pop(session_id, None)

    def get(self, session_id: str | None) -> ISessionTransport | None:
        """Look a session up without creating anything."""
        if session_id is None:
            return None
        return self._sessions.get(session_id)

    def __len__(self) -> int:
        return len(self._sessions)
