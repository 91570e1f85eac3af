"""Unit tests for the chat-completions client and envelope parsing."""

import json

import pytest
from conftest import ClosingSession, FakeResponse, chat_envelope

from jobtailor.utils.exceptions import (
    AuthError,
    EncodingError,
    MalformedReply,
    RateLimited,
    TransportError,
)
from jobtailor.utils.llm import (
    JSON_OBJECT_FORMAT,
    ExtractionRequest,
    invoke_chat_completion,
    parse_chat_envelope,
    parse_json_object,
)

ENDPOINT = "https://llm.test/chat/completions"


def make_request(**overrides):
    fields = {"model": "deepseek-chat", "system_prompt": "SYSTEM", "user_payload": "PAYLOAD"}
    fields.update(overrides)
    return ExtractionRequest(**fields)


@pytest.mark.unit
def test_request_body_shape():
    """Test the wire body: model, system then user message, streaming off."""
    body = make_request().to_body()

    assert body["model"] == "deepseek-chat"
    assert body["messages"] == [
        {"role": "system", "content": "SYSTEM"},
        {"role": "user", "content": "PAYLOAD"},
    ]
    assert body["stream"] is False
    assert "response_format" not in body


@pytest.mark.unit
def test_request_body_with_response_format():
    """Test the JSON-object response format is passed through."""
    body = make_request(response_format=JSON_OBJECT_FORMAT).to_body()
    assert body["response_format"] == {"type": "json_object"}


@pytest.mark.unit
def test_request_to_json_is_utf8():
    """Test serialization keeps non-ASCII characters as UTF-8."""
    raw = make_request(user_payload="$65,000—$115,000 CAD").to_json()

    assert isinstance(raw, bytes)
    assert "—".encode("utf-8") in raw
    assert json.loads(raw)["messages"][1]["content"] == "$65,000—$115,000 CAD"


@pytest.mark.unit
def test_request_to_json_encoding_error():
    """Test an unserializable field raises EncodingError."""
    with pytest.raises(EncodingError):
        make_request(response_format={"type": object()}).to_json()


@pytest.mark.unit
def test_invoke_posts_with_bearer_key(fake_session, cancel_token):
    """Test the request goes to the endpoint with auth and JSON headers."""
    fake_session.queue(FakeResponse(200, chat_envelope("hello")))
    body = make_request().to_json()

    raw = invoke_chat_completion(
        ENDPOINT, "sk-test", body, session=fake_session, cancel=cancel_token, timeout=30.0
    )

    assert json.loads(raw)["choices"][0]["message"]["content"] == "hello"
    call = fake_session.calls[0]
    assert call["url"] == ENDPOINT
    assert call["data"] == body
    assert call["headers"]["Authorization"] == "Bearer sk-test"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["timeout"] == 30.0


@pytest.mark.unit
@pytest.mark.parametrize("api_key", ["", "   "])
def test_invoke_blank_key(fake_session, api_key):
    """Test a blank key fails before any request."""
    with pytest.raises(AuthError):
        invoke_chat_completion(ENDPOINT, api_key, b"{}", session=fake_session)
    assert fake_session.calls == []


@pytest.mark.unit
def test_invoke_rejected_key(fake_session, cancel_token):
    """Test a 401 surfaces as AuthError without retry."""
    fake_session.queue(FakeResponse(401, '{"error": "invalid api key"}'))

    with pytest.raises(AuthError) as exc_info:
        invoke_chat_completion(ENDPOINT, "sk-bad", b"{}", session=fake_session, cancel=cancel_token)

    assert exc_info.value.status_code == 401
    assert len(fake_session.calls) == 1


@pytest.mark.unit
def test_invoke_server_error(fake_session, cancel_token):
    """Test a 500 surfaces as TransportError without retry."""
    fake_session.queue(FakeResponse(500, "internal error"))

    with pytest.raises(TransportError) as exc_info:
        invoke_chat_completion(ENDPOINT, "sk-test", b"{}", session=fake_session, cancel=cancel_token)

    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "internal error"
    assert len(fake_session.calls) == 1
    assert cancel_token.waits == []


@pytest.mark.unit
def test_invoke_rate_limited(fake_session, cancel_token):
    """Test persistent throttling surfaces as RateLimited after three attempts."""
    fake_session.queue(FakeResponse(429), FakeResponse(429), FakeResponse(429))

    with pytest.raises(RateLimited):
        invoke_chat_completion(ENDPOINT, "sk-test", b"{}", session=fake_session, cancel=cancel_token)

    assert len(fake_session.calls) == 3
    assert cancel_token.waits == [0.5, 2.5]


@pytest.mark.unit
def test_invoke_network_failure(fake_session, cancel_token, connection_error):
    """Test a connection failure surfaces as TransportError."""
    fake_session.queue(connection_error)

    with pytest.raises(TransportError):
        invoke_chat_completion(ENDPOINT, "sk-test", b"{}", session=fake_session, cancel=cancel_token)


@pytest.mark.unit
def test_invoke_closes_session_it_opened(owned_session, cancel_token):
    """Test a call without a caller session closes the one it opened."""
    owned_session.queue(FakeResponse(200, chat_envelope("hi")))

    invoke_chat_completion(ENDPOINT, "sk-test", b"{}", cancel=cancel_token)

    assert len(owned_session.calls) == 1
    assert owned_session.closed


@pytest.mark.unit
def test_invoke_closes_session_on_failure(owned_session, cancel_token):
    """Test the opened session is closed even when the call raises."""
    owned_session.queue(FakeResponse(500, "boom"))

    with pytest.raises(TransportError):
        invoke_chat_completion(ENDPOINT, "sk-test", b"{}", cancel=cancel_token)

    assert owned_session.closed


@pytest.mark.unit
def test_invoke_leaves_caller_session_open(cancel_token):
    """Test a session passed in by the caller is not closed."""
    session = ClosingSession([FakeResponse(200, chat_envelope("hi"))])

    invoke_chat_completion(ENDPOINT, "sk-test", b"{}", session=session, cancel=cancel_token)

    assert not session.closed


@pytest.mark.unit
def test_parse_chat_envelope():
    """Test content and token usage are extracted."""
    reply = parse_chat_envelope(chat_envelope("<company>VML</company>", total_tokens=4321))

    assert reply.content == "<company>VML</company>"
    assert reply.total_tokens == 4321


@pytest.mark.unit
def test_parse_chat_envelope_without_usage():
    """Test missing usage counts as zero tokens."""
    raw = json.dumps({"choices": [{"message": {"content": "hi"}}]})
    assert parse_chat_envelope(raw).total_tokens == 0


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[]",
        json.dumps({"choices": []}),
        json.dumps({"error": {"message": "overloaded"}}),
        json.dumps({"choices": [{"message": {}}]}),
        json.dumps({"choices": ["oops"]}),
    ],
)
def test_parse_chat_envelope_malformed(raw):
    """Test unusable envelopes raise MalformedReply."""
    with pytest.raises(MalformedReply):
        parse_chat_envelope(raw)


@pytest.mark.unit
def test_parse_json_object_variants():
    """Test direct, fenced and prose-wrapped JSON objects."""
    assert parse_json_object('{"a": 1}') == {"a": 1}
    assert parse_json_object('```json\n{"a": 1}\n```') == {"a": 1}
    assert parse_json_object('```\n{"a": 1}\n```') == {"a": 1}
    assert parse_json_object('Sure! {"a": 1} Hope that helps.') == {"a": 1}


@pytest.mark.unit
def test_parse_json_object_rejects_non_objects():
    """Test arrays and garbage yield None."""
    assert parse_json_object("[1, 2]") is None
    assert parse_json_object("no json here") is None
    assert parse_json_object("{broken") is None
