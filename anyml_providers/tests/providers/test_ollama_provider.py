"""Ollama provider tests against the mock transport."""
from __future__ import annotations

import json

import pytest

from anyml_providers.base.errors import ApiError, ConfigurationError, DecodeError, ErrorCode
from anyml_providers.base.models import ChatOptions, FinishReason, Thinking
from anyml_providers.mock import MockResponse
from anyml_providers.ollama import OllamaProvider
from anyml_providers.ollama.helpers import build_chat_payload
from anyml_providers.tests.streaming.helpers import NDJSON_SCENARIO, contents, drain, ndjson_stream
from anyml_providers.tests.utils import run

OPTIONS = ChatOptions.create("llama3.2", ["Hi"], max_tokens=64, temperature=0.5)


def test_request_encoding_without_credentials(transport):
    print("TEST: ollama chat needs no key and posts to /api/chat")
    transport.queue(MockResponse(body=ndjson_stream("Hel", "lo"), chunk_size=9))

    async def scenario():
        return await drain(await OllamaProvider(transport).chat(OPTIONS))

    chunks, error = run(scenario())
    assert error is None and contents(chunks) == ["Hel", "lo", ""]  # nosec B101
    assert chunks[-1].finish_reason is FinishReason.STOP  # nosec B101
    req = transport.last_request
    assert req.url == "http://localhost:11434/api/chat"  # nosec B101
    assert "Authorization" not in req.headers  # nosec B101
    body = json.loads(req.body)
    assert body["stream"] is True  # nosec B101
    assert body["options"] == {"num_predict": 64, "temperature": 0.5}  # nosec B101
    assert "think" not in body  # nosec B101


def test_payload_thinking_and_extra():
    body = build_chat_payload(ChatOptions.create("qwen3", ["Hi"], thinking=Thinking.enabled(), extra={"keep_alive": "5m"}))
    assert body["think"] is True  # nosec B101
    assert body["keep_alive"] == "5m"  # nosec B101


def test_generate_style_lines(transport):
    transport.queue(MockResponse(body=NDJSON_SCENARIO))

    async def scenario():
        return await drain(await OllamaProvider(transport).chat(OPTIONS))

    chunks, _ = run(scenario())
    assert contents(chunks) == ["Hi", "!"]  # nosec B101


def test_base_url_from_environment(transport, monkeypatch):
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu-box:11434")
    transport.queue(MockResponse(body=NDJSON_SCENARIO))
    run(OllamaProvider(transport).chat(OPTIONS))
    assert transport.last_request.url == "http://gpu-box:11434/api/chat"  # nosec B101


def test_model_not_found_status(transport):
    response = MockResponse(404, '{"error":"model \\"nope\\" not found, try pulling it first"}')
    transport.queue(response)
    with pytest.raises(ApiError) as info:
        run(OllamaProvider(transport).chat(ChatOptions.create("nope", ["Hi"])))
    assert info.value.code is ErrorCode.NOT_FOUND  # nosec B101
    assert info.value.message.startswith('model "nope" not found')  # nosec B101
    assert response.closed  # nosec B101


def test_empty_messages(transport):
    with pytest.raises(ConfigurationError):
        run(OllamaProvider(transport).chat(ChatOptions.create("llama3.2", [])))
    assert transport.requests == []  # nosec B101


def test_list_models_with_thinking_probe(transport):
    print("TEST: tags listing is enriched by per-model show calls")
    tags = {
        "models": [
            {"name": "qwen3:8b", "details": {"parameter_size": "8.2b", "quantization_level": "Q4_K_M"}},
            {"name": "llama3.2:latest", "details": {"parameter_size": "7B", "quantization_level": "q8_0"}},
        ]
    }
    transport.queue(
        MockResponse(body=json.dumps(tags)),
        MockResponse(body=json.dumps({"capabilities": ["completion", "thinking"]})),
        MockResponse(500, "boom"),
    )
    models = run(OllamaProvider(transport).list_models())

    assert len(transport.requests) == 3  # nosec B101
    assert transport.requests[0].method == "GET"  # nosec B101
    assert transport.requests[0].url == "http://localhost:11434/api/tags"  # nosec B101
    assert [json.loads(r.body)["model"] for r in transport.requests[1:]] == ["qwen3:8b", "llama3.2:latest"]  # nosec B101

    qwen, llama = models
    assert qwen.parameters == "8.2B" and qwen.quantization == "Q4:KM"  # nosec B101
    assert qwen.thinking_modes == ("enabled",)  # nosec B101
    assert llama.parameters == "7B" and llama.quantization == "Q8:0"  # nosec B101
    assert llama.thinking_modes is None  # nosec B101
    assert llama.display() == "Llama3.2 (7B Q8:0)"  # nosec B101
    assert all(r.closed for r in transport.sent)  # nosec B101


def test_list_models_malformed_tags(transport):
    transport.queue(MockResponse(body=json.dumps({"models": [{"size": 1}]})))
    with pytest.raises(DecodeError):
        run(OllamaProvider(transport).list_models())
