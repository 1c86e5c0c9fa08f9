"""Value objects describing the outcome of one upstream GraphQL request.

The four variants form a closed, tagged union. The endpoint client never
raises for request-level failures; it returns one of these instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class UpstreamOk:
    """2xx response whose body carries no GraphQL errors."""

    payload: dict[str, Any]


@dataclass(frozen=True)
class UpstreamGraphQLErrors:
    """2xx response whose body has a non-empty ``errors`` array.

    The full payload is kept so callers can show partial data alongside
    the errors.
    """

    payload: dict[str, Any]

    @property
    def errors(self) -> list[Any]:
        return list(self.payload.get("errors") or [])


@dataclass(frozen=True)
class UpstreamHttpError:
    """Non-2xx response from the endpoint."""

    status_code: int
    reason: str
    body: str


@dataclass(frozen=True)
class UpstreamNetworkFailure:
    """The endpoint could not be reached or answered with unusable content.

    Covers DNS failures, refused connections, timeouts and malformed
    response bodies.
    """

    cause: str


UpstreamResult: TypeAlias = (
    UpstreamOk | UpstreamGraphQLErrors | UpstreamHttpError | UpstreamNetworkFailure
)
