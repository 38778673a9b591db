"""httpx-backed implementation of the :class:`HttpTransport` protocol.

Purpose:
    Provide a ready transport for real deployments on top of
    ``httpx.AsyncClient``. The chat core itself only sees the protocol.

Timeout strategy:
    - Timeouts derive from :func:`get_timeout_config` unless an explicit
      :class:`TimeoutConfig` is passed: connect = start timeout, read = idle
      stream timeout, write/pool = http timeout.

Lifecycle & cleanup:
    - The transport owns the client it creates and closes it in
      :meth:`HttpxTransport.aclose` (or when leaving ``async with``). A client
      passed in by the caller is left open.
    - Responses are sent with ``stream=True``; the body is read only as the
      caller pulls it, and ``aclose`` on the response releases the connection.

Error mapping:
    ``httpx.HTTPError`` raised while sending or reading becomes
    :class:`TransportError` with a normalized :class:`ErrorCode`.
"""

from __future__ import annotations

from typing import AsyncIterator, Mapping, Optional

import httpx

from ..errors import ErrorCode, TransportError, classify_exception
from ..timeouts import TimeoutConfig, get_timeout_config


def _transport_error(exc: httpx.HTTPError) -> TransportError:
    if isinstance(exc, httpx.TimeoutException):
        code = ErrorCode.TIMEOUT
    elif isinstance(exc, httpx.ConnectError):
        code = ErrorCode.UNAVAILABLE
    elif isinstance(exc, (httpx.RemoteProtocolError, httpx.ReadError, httpx.WriteError)):
        code = ErrorCode.TRANSIENT
    else:
        code = classify_exception(exc)
    return TransportError(
        code=code,
        message=f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__,
        provider="unknown",
        raw=exc,
    )


class HttpxResponse:
    """Adapts a streaming ``httpx.Response`` to :class:`TransportResponse`."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    async def aiter_bytes(self) -> AsyncIterator[bytes]:
        try:
            async for data in self._response.aiter_bytes():
                yield data
        except httpx.HTTPError as exc:
            raise _transport_error(exc) from exc

    async def aread(self) -> bytes:
        try:
            return await self._response.aread()
        except httpx.HTTPError as exc:
            raise _transport_error(exc) from exc

    async def aclose(self) -> None:
        await self._response.aclose()


class HttpxTransport:
    """:class:`HttpTransport` over ``httpx.AsyncClient``.

    Parameters:
        client: Optional preconfigured client (left open by :meth:`aclose`).
        timeouts: Optional timeout override; defaults to the environment
            driven :func:`get_timeout_config`.

    Thread-safety:
        One instance may serve many concurrent streams on the same event loop.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeouts: Optional[TimeoutConfig] = None,
    ) -> None:
        self.timeouts = timeouts or get_timeout_config()
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=self.timeouts.to_httpx())

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> HttpxResponse:
        request = self._client.build_request(
            method,
            url,
            headers=dict(headers),
            content=body or None,
            timeout=self.timeouts.to_httpx(),
        )
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise _transport_error(exc) from exc
        return HttpxResponse(response)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["HttpxTransport", "HttpxResponse"]
