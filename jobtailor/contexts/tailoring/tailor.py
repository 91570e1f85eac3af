"""
Resume tailoring orchestration.

tailor_job() runs one posting through the whole pipeline:

    raw text -> parse_job_markdown -> encode_payload -> ExtractionRequest
             -> invoke_chat_completion -> parse_chat_envelope -> parse_reply

Each stage owns its output; nothing is shared between calls, so independent
postings can be tailored concurrently by separate callers.
"""

import time
from dataclasses import dataclass
from typing import Optional

import requests

from jobtailor.contexts.intake.job_document import parse_job_markdown
from jobtailor.contexts.intake.job_nodes import ClassifiedNode
from jobtailor.contexts.tailoring.logger import log_request_start, log_tailoring_result
from jobtailor.contexts.tailoring.payload import encode_payload
from jobtailor.contexts.tailoring.prompts import SYSTEM_PROMPTS
from jobtailor.contexts.tailoring.reply_parser import ExtractionResult, parse_reply
from jobtailor.utils.config import TailorSettings
from jobtailor.utils.http import CancelToken
from jobtailor.utils.llm import (
    JSON_OBJECT_FORMAT,
    ExtractionRequest,
    invoke_chat_completion,
    parse_chat_envelope,
)


@dataclass(frozen=True)
class TailorOutcome:
    """Result of tailor_job(): the validated extraction plus the nodes it was built from."""

    result: ExtractionResult
    nodes: list[ClassifiedNode]


def build_extraction_request(
    nodes: list[ClassifiedNode],
    base_resume: str,
    base_cover: Optional[str],
    model: str,
    reply_format: str,
) -> ExtractionRequest:
    """
    Assemble the request for one posting.

    The JSON reply format also asks the service for a JSON-object response.

    Raises:
        EncodingError: If the nodes cannot be serialized
        ValueError: If reply_format is unknown
    """
    if reply_format not in SYSTEM_PROMPTS:
        raise ValueError(f"Unknown reply format: {reply_format}. Use 'tags' or 'json'")

    return ExtractionRequest(
        model=model,
        system_prompt=SYSTEM_PROMPTS[reply_format],
        user_payload=encode_payload(nodes, base_resume, base_cover),
        response_format=JSON_OBJECT_FORMAT if reply_format == "json" else None,
    )


def tailor_job(
    raw_text: str,
    base_resume: str,
    base_cover: Optional[str],
    settings: TailorSettings,
    *,
    session: Optional[requests.Session] = None,
    cancel: Optional[CancelToken] = None,
) -> TailorOutcome:
    """
    Tailor a resume (and optionally a cover letter) to one job posting.

    Args:
        raw_text: Posting markdown as returned by the reader proxy
        base_resume: Candidate's current resume
        base_cover: Candidate's current cover letter, or None to skip the cover
        settings: Model, endpoint, key and reply format
        session: Optional requests session for connection reuse
        cancel: Optional token bounding the model call and its retries

    Returns:
        TailorOutcome with the validated ExtractionResult and the filtered nodes

    Raises:
        AuthError: Missing/placeholder key, or key rejected by the service
        EncodingError: Payload could not be serialized
        RateLimited: Throttling outlasted the backoff limit
        TransportError: Any other HTTP or network failure
        MalformedReply: Reply unusable or missing company, role or resume
        OperationCancelled: The token fired before completion
    """
    api_key = settings.require_api_key()
    start_time = time.time()

    nodes = parse_job_markdown(raw_text)
    request = build_extraction_request(
        nodes, base_resume, base_cover, settings.deepseek_model, settings.reply_format
    )
    log_request_start(
        settings.deepseek_model, len(nodes), len(request.user_payload), base_cover is not None
    )

    raw_reply = invoke_chat_completion(
        settings.endpoint,
        api_key,
        request.to_json(),
        session=session,
        cancel=cancel,
        timeout=settings.request_timeout_s,
    )

    reply = parse_chat_envelope(raw_reply)
    result = parse_reply(
        reply.content,
        settings.reply_format,
        base_cover_supplied=base_cover is not None,
        tokens_used=reply.total_tokens,
    )

    log_tailoring_result(
        result.company, result.role, result.score, result.tokens_used, time.time() - start_time
    )
    return TailorOutcome(result=result, nodes=nodes)
