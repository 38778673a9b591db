"""ChatStream: the lazy, cancellable result of ``chat``.

A :class:`ChatStream` is an async iterator of :class:`ChatChunk`. It yields
chunks in emission order and then either stops or raises exactly one
:class:`ProviderError` subclass; afterwards it is exhausted. Closing it (or
leaving ``async with``) releases the underlying connection even when
iteration never started. A stream that is neither consumed nor closed keeps
its connection open; callers must use ``async with`` or ``aclose()``, and
dropping such a stream emits a ``ResourceWarning``.
"""
from __future__ import annotations

import logging
import warnings
from typing import AsyncIterator, Awaitable, Callable, Optional, Union

from ..errors import ProviderError
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import AggregatedChat, ChatChunk
from .streaming_metrics import StreamMetrics

ChatResult = Union[ChatChunk, ProviderError]

_logger = get_logger("anyml.stream")


class ChatStream:
    """Async iterator over the chunks of one chat response.

    Parameters:
        chunks: Decoding async generator producing the chunks.
        close: Callback releasing the transport response.
        provider: Provider key, for logging.
        model: Requested model, for logging.
        metrics: Metrics instance updated by the decoding generator.
    """

    def __init__(
        self,
        chunks: AsyncIterator[ChatChunk],
        *,
        close: Callable[[], Awaitable[None]],
        provider: str,
        model: Optional[str] = None,
        metrics: Optional[StreamMetrics] = None,
    ) -> None:
        self._chunks = chunks
        self._close = close
        self.provider = provider
        self.model = model
        self.metrics = metrics or StreamMetrics()
        self._finished = False
        self._closed = False

    @property
    def finished(self) -> bool:
        """True once the stream ended, failed, or was closed."""
        return self._finished

    def __aiter__(self) -> "ChatStream":
        return self

    async def __anext__(self) -> ChatChunk:
        if self._finished:
            raise StopAsyncIteration
        try:
            return await self._chunks.__anext__()
        except (StopAsyncIteration, ProviderError):
            self._finished = True
            raise

    async def aclose(self) -> None:
        """Stop the stream and release its connection. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._finished = True
        aclose = getattr(self._chunks, "aclose", None)
        try:
            if aclose is not None:
                await aclose()
        finally:
            await self._close()

    def __del__(self) -> None:
        if not getattr(self, "_closed", True) and not self._finished:
            warnings.warn(
                f"ChatStream for {self.provider!r} was never closed; use 'async with' or aclose()",
                ResourceWarning,
                source=self,
            )

    async def __aenter__(self) -> "ChatStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def results(self) -> AsyncIterator[ChatResult]:
        """Yield chunks, then the terminal error (if any) as a value.

        Never raises a :class:`ProviderError`; the error is the last item.
        """
        while True:
            try:
                chunk = await self.__anext__()
            except StopAsyncIteration:
                return
            except ProviderError as exc:
                yield exc
                return
            yield chunk

    async def aggregate(self) -> AggregatedChat:
        """Consume the rest of the stream; re-raises the terminal error."""
        result = AggregatedChat()
        async for chunk in self:
            result.push(chunk)
        return result

    async def aggregate_lossy(self) -> AggregatedChat:
        """Consume the rest of the stream, keeping what arrived before an error."""
        result = AggregatedChat()
        async for item in self.results():
            if isinstance(item, ProviderError):
                normalized_log_event(
                    _logger,
                    "stream.aggregate_lossy",
                    LogContext(provider=self.provider, model=self.model),
                    phase="aggregate",
                    error_code=item.code.value,
                    emitted=self.metrics.emitted,
                    level=logging.WARNING,
                    error=item.message,
                )
                continue
            result.push(item)
        return result


__all__ = ["ChatStream", "ChatResult"]
