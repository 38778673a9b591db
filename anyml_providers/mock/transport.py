"""Scripted in-memory :class:`HttpTransport` for tests and examples.

``MockTransport`` replays queued :class:`MockResponse` objects in order and
records every request it was asked to send. Responses can split their body
into fixed-size fragments (or explicit pieces) to exercise fragmentation, fail
part-way through the body, and report whether they were closed.
"""
from __future__ import annotations

from collections import deque
from typing import AsyncIterator, Deque, Iterable, List, Mapping, Optional, Sequence, Union

from ..base.models import PreparedRequest


class MockResponse:
    """A canned response.

    Parameters:
        status_code: HTTP status to report.
        body: Full body (``str`` is UTF-8 encoded).
        chunk_size: Deliver the body in pieces of this many bytes.
        chunks: Explicit body pieces; overrides ``body``/``chunk_size``.
        fail_after: Raise ``error`` once this many bytes were delivered.
        error: Exception raised by ``fail_after`` (defaults to a connection
            reset).
    """

    def __init__(
        self,
        status_code: int = 200,
        body: Union[bytes, str] = b"",
        *,
        chunk_size: Optional[int] = None,
        chunks: Optional[Sequence[Union[bytes, str]]] = None,
        fail_after: Optional[int] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self.status_code = status_code
        if chunks is not None:
            self._pieces = [_to_bytes(c) for c in chunks]
        else:
            data = _to_bytes(body)
            size = chunk_size if chunk_size and chunk_size > 0 else max(len(data), 1)
            self._pieces = [data[i:i + size] for i in range(0, len(data), size)]
        self.fail_after = fail_after
        self.error = error
        self.closed = False
        self.close_calls = 0
        self.bytes_read = 0

    @property
    def body(self) -> bytes:
        return b"".join(self._pieces)

    async def aiter_bytes(self) -> AsyncIterator[bytes]:
        for piece in self._pieces:
            if self.closed:
                return
            if self.fail_after is not None and self.bytes_read + len(piece) > self.fail_after:
                keep = self.fail_after - self.bytes_read
                if keep > 0:
                    self.bytes_read += keep
                    yield piece[:keep]
                raise self._failure()
            self.bytes_read += len(piece)
            yield piece
        if self.fail_after is not None and self.bytes_read >= self.fail_after:
            raise self._failure()

    async def aread(self) -> bytes:
        data = b""
        async for piece in self.aiter_bytes():
            data += piece
        return data

    async def aclose(self) -> None:
        self.closed = True
        self.close_calls += 1

    def _failure(self) -> BaseException:
        return self.error if self.error is not None else ConnectionResetError("connection reset by peer")


class MockTransport:
    """Replay queued responses; record requests.

    Queue items are :class:`MockResponse` objects or exceptions; an exception
    is raised from ``send`` instead of returning a response.
    """

    def __init__(self, responses: Iterable[Union[MockResponse, BaseException]] = ()) -> None:
        self._queue: Deque[Union[MockResponse, BaseException]] = deque(responses)
        self.requests: List[PreparedRequest] = []
        self.sent: List[MockResponse] = []

    def queue(self, *items: Union[MockResponse, BaseException]) -> "MockTransport":
        self._queue.extend(items)
        return self

    @property
    def last_request(self) -> Optional[PreparedRequest]:
        return self.requests[-1] if self.requests else None

    @property
    def pending(self) -> int:
        return len(self._queue)

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> MockResponse:
        self.requests.append(PreparedRequest(method=method, url=url, headers=dict(headers), body=body))
        if not self._queue:
            raise LookupError(f"no mock response queued for {method} {url}")
        item = self._queue.popleft()
        if isinstance(item, BaseException):
            raise item
        self.sent.append(item)
        return item


def _to_bytes(value: Union[bytes, str]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


__all__ = ["MockTransport", "MockResponse"]
