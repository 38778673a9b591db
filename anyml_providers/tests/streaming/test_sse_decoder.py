"""SSE decoder contract tests (OpenAI-style and Anthropic-style).

Covers the literal two-frame scenario, boundary invariance at every split
offset, framing rules (comments, multi-line data, CRLF), end-of-input handling
and the single terminal DecodeError / ApiError.
"""
from __future__ import annotations

from anyml_providers.anthropic.helpers import interpret_event
from anyml_providers.base.errors import ApiError, DecodeError, ErrorCode
from anyml_providers.base.models import ChatChunk, ChatOptions, FinishReason
from anyml_providers.base.streaming import DecoderState, SseDecoder
from anyml_providers.mock import MockResponse
from anyml_providers.openai import OpenAIProvider
from anyml_providers.openai.helpers import interpret_frame
from anyml_providers.tests.streaming.helpers import (
    OPENAI_SCENARIO,
    anthropic_event,
    anthropic_stream,
    byte_by_byte,
    contents,
    decode,
    drain,
    openai_frame,
    openai_stream,
    split_at,
)
from anyml_providers.tests.utils import event_names, run


def _openai() -> SseDecoder:
    return SseDecoder(interpret_frame)


def _anthropic() -> SseDecoder:
    return SseDecoder(interpret_event)


def test_openai_scenario_two_chunks_then_done():
    print("TEST: two data frames then [DONE] yield ['Hi', '!'] and a clean end")
    session = _openai()
    chunks, error = run(decode(session, [OPENAI_SCENARIO]))
    assert error is None  # nosec B101
    assert contents(chunks) == ["Hi", "!"]  # nosec B101
    assert session.state is DecoderState.DONE  # nosec B101
    assert not session.truncated  # nosec B101


def test_openai_boundary_invariance_every_offset():
    print("TEST: splitting the byte stream anywhere yields identical chunks")
    data = openai_stream("Hé", "llo ", "wörld ✓")
    expected, _ = run(decode(_openai(), [data]))
    for offset in range(1, len(data)):
        chunks, error = run(decode(_openai(), split_at(data, offset)))
        if error is not None or chunks != expected:
            raise AssertionError(f"split at {offset} diverged: {chunks!r} error={error!r}")
    chunks, error = run(decode(_openai(), byte_by_byte(data)))
    assert error is None and chunks == expected  # nosec B101


def test_openai_boundary_invariance_three_way_splits():
    data = OPENAI_SCENARIO
    for a in range(1, len(data), 7):
        for b in range(a + 1, len(data), 11):
            chunks, error = run(decode(_openai(), split_at(data, a, b)))
            if error is not None or contents(chunks) != ["Hi", "!"]:
                raise AssertionError(f"split at {a},{b} diverged")


def test_openai_role_and_finish_frames():
    data = openai_stream("a", finish="length")
    chunks, error = run(decode(_openai(), [data]))
    assert error is None  # nosec B101
    assert contents(chunks) == ["", "a", ""]  # nosec B101
    assert chunks[-1].finish_reason is FinishReason.LENGTH  # nosec B101
    assert chunks[-1].is_final and not chunks[0].is_final  # nosec B101


def test_openai_reasoning_delta_is_thinking():
    data = (openai_frame(reasoning_content="plan") + openai_frame("x") + "data: [DONE]\n\n").encode()
    chunks, _ = run(decode(_openai(), [data]))
    assert chunks[0] == ChatChunk(content="", thinking="plan")  # nosec B101
    assert chunks[1] == ChatChunk(content="x")  # nosec B101


def test_invalid_json_yields_single_decode_error():
    print("TEST: a malformed frame ends the stream with exactly one DecodeError")
    data = (openai_frame("a") + "data: {not json\n\n" + openai_frame("b") + "data: [DONE]\n\n").encode()
    session = _openai()
    chunks, error = run(decode(session, [data]))
    assert contents(chunks) == ["a"]  # nosec B101
    assert isinstance(error, DecodeError)  # nosec B101
    assert error.code is ErrorCode.DECODE  # nosec B101
    assert error.frame == "{not json"  # nosec B101
    assert session.state is DecoderState.ERRORED  # nosec B101


def test_deeply_nested_frame_is_decode_error(transport, log_capture):
    print("TEST: a frame too deep to parse yields one DecodeError item, not a crash")
    response = MockResponse(body=openai_frame("a").encode() + b"data: " + b"[" * 100000 + b"\n\n", chunk_size=4096)
    transport.queue(response)

    async def scenario():
        stream = await OpenAIProvider(transport, api_key="sk-test").chat(ChatOptions.create("gpt-4o-mini", ["Hi"]))
        return await drain(stream)

    chunks, error = run(scenario())
    assert contents(chunks) == ["a"]  # nosec B101
    assert isinstance(error, DecodeError) and error.provider == "openai"  # nosec B101
    assert error.frame == "[" * 500  # nosec B101
    assert response.closed  # nosec B101
    assert "stream.error" in event_names(log_capture)  # nosec B101


def test_invalid_json_same_result_when_fragmented():
    data = (openai_frame("a") + "data: {not json\n\n" + openai_frame("b")).encode()
    for offset in range(1, len(data)):
        chunks, error = run(decode(_openai(), split_at(data, offset)))
        if contents(chunks) != ["a"] or not isinstance(error, DecodeError):
            raise AssertionError(f"split at {offset}: {chunks!r} {error!r}")


def test_frame_missing_choices_is_decode_error():
    chunks, error = run(decode(_openai(), [b'data: {"id":"x"}\n\n']))
    assert chunks == []  # nosec B101
    assert isinstance(error, DecodeError)  # nosec B101
    assert "choices" in error.message  # nosec B101


def test_choice_without_delta_is_decode_error():
    _, error = run(decode(_openai(), [b'data: {"choices":[{"index":0}]}\n\n']))
    assert isinstance(error, DecodeError)  # nosec B101


def test_invalid_utf8_is_decode_error():
    chunks, error = run(decode(_openai(), [openai_frame("ok").encode(), b"data: \xff\xfe\n\n"]))
    assert contents(chunks) == ["ok"]  # nosec B101
    assert isinstance(error, DecodeError)  # nosec B101


def test_empty_choices_frame_emits_nothing():
    data = (openai_frame("a") + 'data: {"choices":[],"usage":{"total_tokens":5}}\n\n' + "data: [DONE]\n\n").encode()
    chunks, error = run(decode(_openai(), [data]))
    assert error is None and contents(chunks) == ["a"]  # nosec B101


def test_embedded_error_object_is_api_error():
    data = (openai_frame("a") + 'data: {"error":{"message":"overloaded","type":"server_error"}}\n\n').encode()
    chunks, error = run(decode(_openai(), [data]))
    assert contents(chunks) == ["a"]  # nosec B101
    assert isinstance(error, ApiError)  # nosec B101
    assert error.message == "overloaded"  # nosec B101
    assert error.error_type == "server_error"  # nosec B101
    assert error.status_code is None  # nosec B101


def test_comments_crlf_and_multiline_data():
    print("TEST: comments are ignored, CRLF accepted, data lines joined with newline")
    data = (
        b": keep-alive\r\n"
        b"id: 1\r\n"
        b'data: {"choices":[{"delta":\r\n'
        b'data: {"content":"x"}}]}\r\n'
        b"\r\n"
        b"data: [DONE]\r\n\r\n"
    )
    chunks, error = run(decode(_openai(), [data]))
    assert error is None and contents(chunks) == ["x"]  # nosec B101


def test_frames_after_done_are_ignored():
    data = OPENAI_SCENARIO + b"data: {not json\n\n"
    chunks, error = run(decode(_openai(), [data]))
    assert error is None and contents(chunks) == ["Hi", "!"]  # nosec B101


def test_eof_without_sentinel_dispatches_pending_event():
    print("TEST: end of input flushes a pending event and marks the stream truncated")
    data = (openai_frame("a") + 'data: {"choices":[{"delta":{"content":"b"}}]}').encode()
    session = _openai()
    chunks, error = run(decode(session, [data]))
    assert error is None  # nosec B101
    assert contents(chunks) == ["a", "b"]  # nosec B101
    assert session.truncated  # nosec B101
    assert session.state is DecoderState.DONE  # nosec B101


def test_empty_body_ends_silently():
    session = _openai()
    chunks, error = run(decode(session, []))
    assert chunks == [] and error is None and session.truncated  # nosec B101


def test_anthropic_full_stream():
    print("TEST: anthropic named events map to text, thinking and finish chunks")
    data = anthropic_stream("Hel", "lo", thinking=["hmm"])
    session = _anthropic()
    chunks, error = run(decode(session, [data]))
    assert error is None  # nosec B101
    assert chunks == [  # nosec B101
        ChatChunk(thinking="hmm"),
        ChatChunk(content="Hel"),
        ChatChunk(content="lo"),
        ChatChunk(finish_reason=FinishReason.STOP),
    ]
    assert session.state is DecoderState.DONE and not session.truncated  # nosec B101


def test_anthropic_boundary_invariance_every_offset():
    data = anthropic_stream("ünï", "cödé", stop_reason="max_tokens")
    expected, _ = run(decode(_anthropic(), [data]))
    assert expected[-1].finish_reason is FinishReason.LENGTH  # nosec B101
    for offset in range(1, len(data)):
        chunks, error = run(decode(_anthropic(), split_at(data, offset)))
        if error is not None or chunks != expected:
            raise AssertionError(f"split at {offset} diverged")


def test_anthropic_event_name_falls_back_to_payload_type():
    data = (
        'data: {"type":"content_block_delta","delta":{"type":"text_delta","text":"x"}}\n\n'
        'data: {"type":"message_stop"}\n\n'
        'data: {"type":"content_block_delta","delta":{"type":"text_delta","text":"late"}}\n\n'
    ).encode()
    chunks, error = run(decode(_anthropic(), [data]))
    assert error is None and contents(chunks) == ["x"]  # nosec B101


def test_anthropic_ignores_tool_and_signature_deltas():
    data = (
        anthropic_event("content_block_delta", {"type": "content_block_delta", "delta": {"type": "input_json_delta", "partial_json": "{"}})
        + anthropic_event("content_block_delta", {"type": "content_block_delta", "delta": {"type": "signature_delta", "signature": "abc"}})
        + anthropic_event("message_stop", {"type": "message_stop"})
    ).encode()
    chunks, error = run(decode(_anthropic(), [data]))
    assert chunks == [] and error is None  # nosec B101


def test_anthropic_error_event_is_api_error():
    data = (
        anthropic_stream("partial")[: -len(anthropic_event("message_stop", {"type": "message_stop"}))].decode()
        + anthropic_event("error", {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}})
    ).encode()
    chunks, error = run(decode(_anthropic(), [data]))
    assert "partial" in contents(chunks)  # nosec B101
    assert isinstance(error, ApiError)  # nosec B101
    assert error.error_type == "overloaded_error"  # nosec B101
    assert error.message == "Overloaded"  # nosec B101


def test_anthropic_delta_missing_is_decode_error():
    data = anthropic_event("content_block_delta", {"type": "content_block_delta", "index": 0}).encode()
    chunks, error = run(decode(_anthropic(), [data]))
    assert chunks == []  # nosec B101
    assert isinstance(error, DecodeError)  # nosec B101
    assert "delta" in error.message  # nosec B101
