"""HttpTransport / TransportResponse Protocols.

The transport is the only I/O seam of the chat layer. Callers may implement
it over any HTTP stack; :class:`~anyml_providers.base.http.HttpxTransport` and
:class:`~anyml_providers.mock.MockTransport` ship with the package.
"""

from __future__ import annotations

from typing import AsyncIterator, Mapping, Protocol, runtime_checkable


@runtime_checkable
class TransportResponse(Protocol):
    """An HTTP response whose body has not been read yet."""

    @property
    def status_code(self) -> int:
        ...

    def aiter_bytes(self) -> AsyncIterator[bytes]:
        """Yield the body incrementally, in whatever pieces the network delivers."""
        ...

    async def aread(self) -> bytes:
        """Read the whole remaining body (error bodies, model listings)."""
        ...

    async def aclose(self) -> None:
        """Release the underlying connection. Must be safe to call twice."""
        ...


@runtime_checkable
class HttpTransport(Protocol):
    """Capability that issues one HTTP request and returns its response.

    ``send`` returns as soon as the status line and headers are available and
    raises :class:`~anyml_providers.base.errors.TransportError` on connection
    failure. Implementations used for concurrent streams must tolerate
    concurrent ``send`` calls.
    """

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> TransportResponse:
        ...


__all__ = ["HttpTransport", "TransportResponse"]
