from __future__ import annotations

import asyncio
import types

from anyml_providers.base.errors import (
    ApiError,
    ErrorCode,
    ProviderError,
    api_error_from_body,
    classify_exception,
    code_for_status,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_timeouts():
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101


def test_classify_http_status_mapping():
    # Direct attr
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101
    # response.status_code
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(ConnectionResetError("Connection reset by peer")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_status_fallbacks():
    assert code_for_status(418) is ErrorCode.API  # nosec B101
    assert code_for_status(599) is ErrorCode.SERVER_ERROR  # nosec B101
    assert code_for_status(529) is ErrorCode.UNAVAILABLE  # nosec B101


def test_api_error_from_known_shapes():
    openai = api_error_from_body(b'{"error":{"message":"bad","type":"invalid_request_error"}}', provider="openai", status_code=400)
    assert isinstance(openai, ApiError)  # nosec B101
    assert (openai.code, openai.message, openai.error_type) == (ErrorCode.VALIDATION, "bad", "invalid_request_error")  # nosec B101

    anthropic = api_error_from_body('{"type":"error","error":{"type":"overloaded_error","message":"Overloaded"}}', provider="anthropic")
    assert anthropic.code is ErrorCode.API and anthropic.status_code is None  # nosec B101
    assert anthropic.error_type == "overloaded_error"  # nosec B101

    ollama = api_error_from_body('{"error":"no such model"}', provider="ollama", status_code=404)
    assert ollama.message == "no such model" and ollama.error_type is None  # nosec B101


def test_api_error_from_opaque_body():
    err = api_error_from_body(b"", provider="openai", status_code=500)
    assert err.message == "HTTP 500: <empty body>"  # nosec B101
    long = api_error_from_body("x" * 5000, provider="openai", status_code=500)
    assert len(long.body) == 2000  # nosec B101
    nested = api_error_from_body("[" * 100000, provider="ollama", status_code=502)
    assert nested.message.startswith("HTTP 502: [[[")  # nosec B101
    assert nested.error_type is None  # nosec B101
