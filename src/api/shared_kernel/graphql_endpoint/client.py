"""httpx implementation of the GraphQL endpoint port."""

from __future__ import annotations

from typing import Any

import httpx

from shared_kernel.graphql_endpoint.observability import (
    DefaultGraphQLEndpointProbe,
    GraphQLEndpointProbe,
)
from shared_kernel.graphql_endpoint.ports import IGraphQLEndpoint
from shared_kernel.graphql_endpoint.value_objects import (
    UpstreamGraphQLErrors,
    UpstreamHttpError,
    UpstreamNetworkFailure,
    UpstreamOk,
    UpstreamResult,
)


class HttpGraphQLEndpoint(IGraphQLEndpoint):
    """Sends GraphQL operations as JSON POST requests.

    Configured headers are merged over ``Content-Type: application/json``,
    so a configured value wins. A fresh ``httpx.AsyncClient`` is opened per
    request; ``transport`` lets callers substitute the network layer.
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
        probe: GraphQLEndpointProbe | None = None,
    ):
        self._url = url
        self._headers = dict(headers or {})
        self._transport = transport
        self._timeout = timeout
        self._probe = probe or DefaultGraphQLEndpointProbe()

    @property
    def url(self) -> str:
        return self._url

    @property
    def _request_headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", **self._headers}

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> UpstreamResult:
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables

        self._probe.request_sent(url=self._url, query_length=len(query))

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.post(
                    self._url, json=payload, headers=self._request_headers
                )
        except httpx.HTTPError as e:
            reason = str(e) or repr(e)
            self._probe.request_failed(url=self._url, reason=reason)
            return UpstreamNetworkFailure(cause=reason)

        self._probe.response_received(url=self._url, status_code=response.status_code)

        if not response.is_success:
            return UpstreamHttpError(
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
            )

        try:
            body = response.json()
        except ValueError as e:
            reason = f"Malformed JSON response: {e}"
            self._probe.request_failed(url=self._url, reason=reason)
            return UpstreamNetworkFailure(cause=reason)

        if not isinstance(body, dict):
            reason = "Malformed JSON response: expected an object"
            self._probe.request_failed(url=self._url, reason=reason)
            return UpstreamNetworkFailure(cause=reason)

        if body.get("errors"):
            return UpstreamGraphQLErrors(payload=body)

        return UpstreamOk(payload=body)
