"""BaseChatProvider: the encode -> send -> check -> decode template.

Concrete providers contribute three pieces:

- ``encode(options)``: the pure request encoder;
- ``new_decoder()``: a fresh decoder session bound to the provider's frame
  interpreter;
- ``list_models()``: the model listing call, built on :meth:`_fetch_json`.

Everything else (configuration lookup, transport error wrapping, status
checks, stream lifecycle, metrics, logging) lives here so that every provider
behaves identically around the wire format it speaks.

Lifecycle guarantees:
    - Configuration errors are raised before the transport is touched.
    - Transport failures and non-success statuses raise from ``chat``; the
      response is closed first.
    - After ``chat`` returns, every failure is the stream's single terminal
      error, and the response is closed when the stream ends, fails, or is
      closed by the caller.
    - Nothing is retried.
"""
from __future__ import annotations

import json
import logging
from contextlib import aclosing
from dataclasses import replace
from typing import Any, AsyncIterator, Callable, Dict, List, Mapping, Optional

from .cancellation import CancellationToken, CancelledError
from .errors import (
    DecodeError,
    ProviderError,
    TransportError,
    api_error_from_body,
    classify_exception,
)
from .interfaces import HttpTransport, TransportResponse
from .logging import LogContext, get_logger, normalized_log_event
from .models import ChatChunk, ChatOptions, Model, PreparedRequest
from .streaming import ChatStream, DecoderSession, StreamMetrics
from ..config import get_provider_config


def _is_success(status: int) -> bool:
    return 200 <= status < 300


class BaseChatProvider:
    """Shared implementation of the :class:`ChatProvider` protocol.

    Parameters:
        transport: The :class:`HttpTransport` used for every request.
        api_key: Explicit API key; resolved from configuration when omitted.
        base_url: Explicit base URL; resolved from configuration when omitted.
        headers: Extra headers added to every request (after the provider's
            own headers).
    """

    #: Provider key used for configuration lookup, errors and logging.
    name: str = "base"

    def __init__(
        self,
        transport: HttpTransport,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        cfg = get_provider_config(self.name, overrides={"api_key": api_key, "base_url": base_url})
        self.transport = transport
        self.api_key: Optional[str] = cfg.get("api_key")
        self.base_url: str = str(cfg.get("base_url") or "").rstrip("/")
        self.default_model: Optional[str] = cfg.get("model")
        self.headers: Dict[str, str] = dict(headers or {})
        self._logger = get_logger(f"anyml.{self.name}")

    @property
    def provider_name(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    # ---- Hooks -----------------------------------------------------------
    def encode(self, options: ChatOptions) -> PreparedRequest:
        raise NotImplementedError

    def new_decoder(self) -> DecoderSession:
        raise NotImplementedError

    async def list_models(self) -> List[Model]:
        raise NotImplementedError

    # ---- Chat ------------------------------------------------------------
    def build_request(self, options: ChatOptions) -> PreparedRequest:
        """Encode ``options`` and apply the caller's extra headers."""
        request = self.encode(options)
        if self.headers:
            request = replace(request, headers={**request.headers, **self.headers})
        return request

    async def chat(
        self,
        options: ChatOptions,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ChatStream:
        """Send a streaming chat request and return its :class:`ChatStream`.

        Raises:
            ConfigurationError: invalid options or missing credentials.
            TransportError: the request could not be sent.
            ApiError: the provider answered with a non-success status.
            CancelledError: ``cancel_token`` was already cancelled.
        """
        ctx = LogContext(provider=self.name, model=options.model or None)
        try:
            request = self.build_request(options)
            if cancel_token is not None:
                cancel_token.raise_if_cancelled(provider=self.name, model=ctx.model)
        except ProviderError as exc:
            self._log_chat_error(self._stamp(exc, ctx.model), ctx)
            raise

        ctx.url = request.url
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", attempt=1, emitted=False)
        metrics = StreamMetrics()
        response = await self._send(request, ctx)
        if not _is_success(response.status_code):
            raise await self._api_error(response, ctx)

        session = self.new_decoder()
        chunks = self._decode(response, session, ctx, metrics, cancel_token)
        return ChatStream(chunks, close=response.aclose, provider=self.name, model=ctx.model, metrics=metrics)

    async def _decode(
        self,
        response: TransportResponse,
        session: DecoderSession,
        ctx: LogContext,
        metrics: StreamMetrics,
        cancel_token: Optional[CancellationToken],
    ) -> AsyncIterator[ChatChunk]:
        try:
            async with aclosing(session.run(self._body(response, ctx, cancel_token))) as chunks:
                async for chunk in chunks:
                    metrics.record_chunk()
                    yield chunk
        except ProviderError as exc:
            self._stamp(exc, ctx.model)
            metrics.finish()
            cancelled = isinstance(exc, CancelledError)
            normalized_log_event(
                self._logger,
                "stream.cancelled" if cancelled else "stream.error",
                ctx,
                phase="stream",
                attempt=1,
                error_code=exc.code.value,
                emitted=metrics.emitted,
                level=logging.INFO if cancelled else logging.ERROR,
                error=exc.message,
                **metrics.timings(),
            )
            raise
        else:
            metrics.finish()
            if session.truncated:
                normalized_log_event(
                    self._logger,
                    "stream.truncated",
                    ctx,
                    phase="stream",
                    attempt=1,
                    emitted=metrics.emitted,
                    level=logging.WARNING,
                )
            normalized_log_event(
                self._logger,
                "stream.end",
                ctx,
                phase="finalize",
                attempt=1,
                emitted=metrics.emitted,
                **metrics.timings(),
            )
        finally:
            await response.aclose()

    async def _body(
        self,
        response: TransportResponse,
        ctx: LogContext,
        cancel_token: Optional[CancellationToken],
    ) -> AsyncIterator[bytes]:
        """Pull the body, checking cancellation before every read."""
        pieces = response.aiter_bytes()
        while True:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled(provider=self.name, model=ctx.model)
            try:
                data = await pieces.__anext__()
            except StopAsyncIteration:
                return
            except ProviderError:
                raise
            except Exception as exc:
                raise self._transport_error(exc, ctx.model) from exc
            yield data

    # ---- Transport helpers ----------------------------------------------
    async def _send(self, request: PreparedRequest, ctx: LogContext, *, log_errors: bool = True) -> TransportResponse:
        try:
            return await self.transport.send(request.method, request.url, request.headers, request.body)
        except ProviderError as exc:
            self._stamp(exc, ctx.model)
            if log_errors:
                self._log_chat_error(exc, ctx)
            raise
        except Exception as exc:
            err = self._transport_error(exc, ctx.model)
            if log_errors:
                self._log_chat_error(err, ctx)
            raise err from exc

    async def _api_error(self, response: TransportResponse, ctx: LogContext, *, log_errors: bool = True) -> ProviderError:
        """Read and close a non-success response, returning the error to raise."""
        try:
            body = await response.aread()
        except ProviderError as exc:
            err: ProviderError = self._stamp(exc, ctx.model)
        except Exception as exc:
            err = self._transport_error(exc, ctx.model)
        else:
            err = api_error_from_body(body, provider=self.name, model=ctx.model, status_code=response.status_code)
        finally:
            await response.aclose()
        if log_errors:
            self._log_chat_error(err, ctx)
        return err

    async def _fetch_json(self, request: PreparedRequest, ctx: LogContext) -> Any:
        """Send a non-streaming request and decode its JSON body.

        Used by model listings. Raises ``TransportError``, ``ApiError`` or
        ``DecodeError``; the response is always closed.
        """
        response = await self._send(request, ctx, log_errors=False)
        if not _is_success(response.status_code):
            raise await self._api_error(response, ctx, log_errors=False)
        try:
            body = await response.aread()
        except ProviderError as exc:
            raise self._stamp(exc, ctx.model)
        except Exception as exc:
            raise self._transport_error(exc, ctx.model) from exc
        finally:
            await response.aclose()
        try:
            return json.loads(body)
        except (ValueError, RecursionError) as exc:
            raise DecodeError(
                message=f"invalid JSON body: {exc}",
                provider=self.name,
                model=ctx.model,
                frame=body[:500].decode("utf-8", errors="replace"),
                raw=exc,
            ) from exc

    async def _list_models_with(
        self,
        request_factory: Callable[[], PreparedRequest],
        parse: Callable[[Any], List[Model]],
    ) -> List[Model]:
        """Fetch and parse a listing endpoint, logging ``models.list`` / ``models.error``."""
        ctx = LogContext(provider=self.name)
        try:
            request = request_factory()
            ctx.url = request.url
            models = parse(await self._fetch_json(request, ctx))
        except ProviderError as exc:
            self._stamp(exc, None)
            self._log_models(
                "models.error",
                ctx,
                level=logging.ERROR,
                error_code=exc.code.value,
                error=exc.message,
                error_kind=type(exc).__name__,
            )
            raise
        self._log_models("models.list", ctx, emitted=len(models))
        return models

    def _transport_error(self, exc: BaseException, model: Optional[str]) -> TransportError:
        return TransportError(
            code=classify_exception(exc),
            message=str(exc) or type(exc).__name__,
            provider=self.name,
            model=model,
            raw=exc,
        )

    def _stamp(self, exc: ProviderError, model: Optional[str]) -> ProviderError:
        """Fill in provider/model on errors raised by provider-agnostic code."""
        if not exc.provider or exc.provider == "unknown":
            exc.provider = self.name
        if exc.model is None:
            exc.model = model
        return exc

    def _log_chat_error(self, exc: ProviderError, ctx: LogContext) -> None:
        normalized_log_event(
            self._logger,
            "chat.error",
            ctx,
            phase="start",
            attempt=1,
            error_code=exc.code.value,
            emitted=False,
            level=logging.ERROR,
            error=exc.message,
            error_kind=type(exc).__name__,
            status_code=getattr(exc, "status_code", None),
        )

    def _log_models(self, event: str, ctx: LogContext, *, level: int = logging.INFO, **fields: Any) -> None:
        normalized_log_event(self._logger, event, ctx, phase="models", attempt=1, level=level, **fields)


__all__ = ["BaseChatProvider"]
