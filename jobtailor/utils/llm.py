"""
LLM chat-completions client and response parsing utilities.

Talks to an OpenAI-compatible chat-completions endpoint (DeepSeek by default)
over plain HTTP, with bounded retry on throttling, and provides helpers for
decoding the reply envelope and JSON payloads embedded in model output.
"""

import json
import os
import re
from dataclasses import dataclass, field
from typing import Any, Optional

import requests
from dotenv import load_dotenv
from loguru import logger

from jobtailor.utils.exceptions import AuthError, EncodingError, MalformedReply
from jobtailor.utils.http import CancelToken, raise_for_status, request_with_backoff

load_dotenv()

DEFAULT_ENDPOINT = os.getenv("DEEPSEEK_ENDPOINT", "https://api.deepseek.com/chat/completions")
DEFAULT_MODEL = "deepseek-chat"
DEFAULT_TIMEOUT = 120.0

JSON_OBJECT_FORMAT = {"type": "json_object"}


@dataclass(frozen=True)
class ExtractionRequest:
    """
    One chat-completions request: a fixed system prompt plus the encoded payload.

    Built once per tailoring call and never mutated.
    """

    model: str
    system_prompt: str
    user_payload: str
    response_format: Optional[dict[str, str]] = field(default=None)

    def to_body(self) -> dict[str, Any]:
        """Request object as sent on the wire (streaming always off)."""
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": self.user_payload},
            ],
            "stream": False,
        }
        if self.response_format is not None:
            body["response_format"] = self.response_format
        return body

    def to_json(self) -> bytes:
        """
        Serialize the request body.

        Raises:
            EncodingError: If any field cannot be represented as JSON
        """
        try:
            return json.dumps(self.to_body(), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError("could not serialize model request", original_error=e) from e


@dataclass(frozen=True)
class ChatReply:
    """Decoded reply envelope."""

    content: str
    total_tokens: int


def invoke_chat_completion(
    endpoint: str,
    api_key: str,
    request_body: bytes,
    *,
    session: Optional[requests.Session] = None,
    cancel: Optional[CancelToken] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """
    POST a chat-completions request and return the raw reply text.

    Throttled requests (HTTP 429) are retried with bounded backoff; every other
    failure is terminal.

    Args:
        endpoint: Full chat-completions URL
        api_key: Bearer token for the service
        request_body: Serialized request (see ExtractionRequest.to_json)
        session: Optional requests session for connection reuse; without one a
            private session is opened and closed around the call
        cancel: Optional token bounding the whole call
        timeout: Per-attempt timeout in seconds

    Returns:
        Raw response body (the JSON envelope as text)

    Raises:
        AuthError: Blank key or 401/403 from the service
        RateLimited: Throttling outlasted the backoff limit
        TransportError: Any other non-2xx status or network failure
        OperationCancelled: The token fired before completion
    """
    if not api_key or not api_key.strip():
        raise AuthError("API key is not set")

    if session is None:
        with requests.Session() as owned:
            return invoke_chat_completion(
                endpoint, api_key, request_body, session=owned, cancel=cancel, timeout=timeout
            )

    cancel = cancel or CancelToken()
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }

    def send(attempt_timeout: float) -> requests.Response:
        return session.post(endpoint, data=request_body, headers=headers, timeout=attempt_timeout)

    logger.debug(f"[llm] POST {endpoint} ({len(request_body)} bytes)")
    response = request_with_backoff(send, cancel, timeout, description="chat completion")
    raise_for_status(response, "chat completion")
    return response.text


def parse_chat_envelope(raw: str) -> ChatReply:
    """
    Extract the first choice's message content and the token usage.

    Raises:
        MalformedReply: If the envelope is not a JSON object or has no choices
    """
    try:
        envelope = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedReply(f"reply envelope is not valid JSON: {e}") from e

    if not isinstance(envelope, dict):
        raise MalformedReply("reply envelope is not a JSON object")

    choices = envelope.get("choices") or []
    if not choices:
        raise MalformedReply("api returned no choices")

    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise MalformedReply("first choice has no message content")

    usage = envelope.get("usage") or {}
    total_tokens = usage.get("total_tokens", 0) if isinstance(usage, dict) else 0
    if not isinstance(total_tokens, int):
        total_tokens = 0

    return ChatReply(content=content, total_tokens=total_tokens)


def parse_json_object(text: str) -> Optional[dict]:
    """
    Parse a JSON object from model output, handling markdown code fences.

    Returns:
        The decoded object, or None if no JSON object could be recovered
    """
    text = text.strip()

    try:
        result = json.loads(text)
        return result if isinstance(result, dict) else None
    except json.JSONDecodeError:
        pass

    # Strip markdown code blocks
    stripped = re.sub(r"^```(?:json)?\s*", "", text)
    stripped = re.sub(r"\s*```$", "", stripped)
    try:
        result = json.loads(stripped)
        return result if isinstance(result, dict) else None
    except json.JSONDecodeError:
        pass

    # Try outermost braces
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        try:
            result = json.loads(text[start : end + 1])
            return result if isinstance(result, dict) else None
        except json.JSONDecodeError:
            pass

    return None
