"""
HTTP transport for rippled JSON-RPC.

JsonRpcClient talks to the node only through ``JsonRpcTransport.post_json``,
so tests can hand it canned response dicts and the HTTP stack stays out
of the parsing code.

A transport returns the decoded JSON object or raises. HttpxTransport
raises UpstreamError(BACKEND_UNAVAILABLE) for anything that is not a
JSON object (proxy error pages, truncated bodies, bare arrays) and lets
httpx errors propagate for JsonRpcClient to map.

Concrete implementations:
    - HttpxTransport (httpx.AsyncClient, one client per request)
    - RoutingTransport / SequencedTransport (tests)
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from reliable_ledger.xrpl.errors import ErrorCode, UpstreamError


@runtime_checkable
class JsonRpcTransport(Protocol):
    """POSTs one JSON-RPC request and returns the decoded response object."""

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        ...


class HttpxTransport:
    """JsonRpcTransport over httpx.AsyncClient.

    Args:
        timeout: Per-request timeout in seconds.
        http_transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
            handed to every AsyncClient this transport opens.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._http_transport = http_transport

    @property
    def timeout(self) -> float:
        return self._timeout

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._http_transport
        ) as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()
            return decode_response(response, method=payload.get("method"))


def decode_response(response: httpx.Response, *, method: str | None = None) -> dict[str, Any]:
    """Decode a JSON-RPC response body into a dict.

    Raises:
        UpstreamError: BACKEND_UNAVAILABLE if the body is not a JSON object.
    """
    try:
        body = response.json()
    except ValueError as exc:
        raise UpstreamError(
            f"{method or 'rpc'}: response body is not JSON "
            f"(HTTP {response.status_code}, {len(response.content)} bytes)",
            code=ErrorCode.BACKEND_UNAVAILABLE,
            method=method,
        ) from exc

    if not isinstance(body, dict):
        raise UpstreamError(
            f"{method or 'rpc'}: response body is a JSON {type(body).__name__}, not an object",
            code=ErrorCode.BACKEND_UNAVAILABLE,
            method=method,
        )
    return body
