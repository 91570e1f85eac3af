"""
Model reply parsing and validation.

The model's message content embeds one of two structured sub-formats,
selected by configuration:

- "tags": <company>, <role>, <score>, <resume>, <cover> sections
- "json": a JSON object with the same keys

Either way company, role and resume are mandatory. The score is advisory and
falls back to 0. The cover letter is kept only when the caller supplied a base
cover letter, whatever the reply contains.
"""

import re
from dataclasses import dataclass
from typing import Optional

from jobtailor.contexts.tailoring.logger import (
    log_cover_ignored,
    log_reply_rejected,
    log_score_ignored,
)
from jobtailor.utils.exceptions import MalformedReply
from jobtailor.utils.llm import parse_json_object

MANDATORY_FIELDS = ("company", "role", "resume")

MIN_SCORE = 1
MAX_SCORE = 10


@dataclass(frozen=True)
class ExtractionResult:
    """
    Validated output of one tailoring round trip.

    Attributes:
        company: Hiring company name
        role: Role title
        resume: Tailored resume text
        cover: Tailored cover letter, present only if a base cover was supplied
        score: Fit score 1-10, or 0 when the reply had no usable score
        tokens_used: Total tokens reported by the service
    """

    company: str
    role: str
    resume: str
    cover: Optional[str] = None
    score: int = 0
    tokens_used: int = 0


@dataclass(frozen=True)
class ReplyTagPatterns:
    """
    Tag patterns for the "tags" reply format.

    DOTALL and non-greedy so fields may span lines and only the first
    occurrence of each tag is used.
    """

    COMPANY: re.Pattern = re.compile(r"<company>(.*?)</company>", re.DOTALL)
    ROLE: re.Pattern = re.compile(r"<role>(.*?)</role>", re.DOTALL)
    SCORE: re.Pattern = re.compile(r"<score>(.*?)</score>", re.DOTALL)
    RESUME: re.Pattern = re.compile(r"<resume>(.*?)</resume>", re.DOTALL)
    COVER: re.Pattern = re.compile(r"<cover>(.*?)</cover>", re.DOTALL)


def extract_tag(pattern: re.Pattern, text: str) -> str:
    """Return the stripped content of the first match, or "" if absent."""
    match = pattern.search(text)
    if not match:
        return ""
    return match.group(1).strip()


def _extract_tagged_fields(content: str) -> dict[str, object]:
    return {
        "company": extract_tag(ReplyTagPatterns.COMPANY, content),
        "role": extract_tag(ReplyTagPatterns.ROLE, content),
        "score": extract_tag(ReplyTagPatterns.SCORE, content),
        "resume": extract_tag(ReplyTagPatterns.RESUME, content),
        "cover": extract_tag(ReplyTagPatterns.COVER, content),
    }


def _extract_json_fields(content: str) -> dict[str, object]:
    data = parse_json_object(content)
    if data is None:
        raise MalformedReply("reply content is not a JSON object")

    return {
        "company": _coerce_text(data.get("company")),
        "role": _coerce_text(data.get("role")),
        "score": data.get("score"),
        "resume": _coerce_text(data.get("resume")),
        "cover": _coerce_text(data.get("cover")),
    }


def _coerce_text(value: object) -> str:
    """Strings are stripped; numbers are stringified; anything else counts as absent."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def parse_score(raw_score: object) -> int:
    """
    Interpret a fit score.

    Accepts an int or a string of digits within MIN_SCORE..MAX_SCORE.
    Anything else (absent, non-numeric, out of range) yields 0.
    """
    if raw_score is None or raw_score == "":
        return 0

    score = None
    if isinstance(raw_score, int) and not isinstance(raw_score, bool):
        score = raw_score
    elif isinstance(raw_score, str) and raw_score.strip().isdigit():
        score = int(raw_score.strip())

    if score is None or not MIN_SCORE <= score <= MAX_SCORE:
        log_score_ignored(raw_score)
        return 0

    return score


def validate_fields(fields: dict[str, object]) -> None:
    """
    Ensure company, role and resume are all non-empty.

    Raises:
        MalformedReply: Listing the length of each mandatory field
    """
    lengths = {name: len(fields.get(name) or "") for name in MANDATORY_FIELDS}
    if all(lengths.values()):
        return

    missing = [name for name, length in lengths.items() if length == 0]
    error = MalformedReply(
        f"llm response missing required fields: {', '.join(missing)}",
        field_lengths=lengths,
    )
    log_reply_rejected(error)
    raise error


def parse_reply(
    content: str,
    reply_format: str,
    base_cover_supplied: bool,
    tokens_used: int = 0,
) -> ExtractionResult:
    """
    Extract and validate the tailored fields from the model's message content.

    Args:
        content: choices[0].message.content from the reply envelope
        reply_format: "tags" or "json"
        base_cover_supplied: Whether a base cover letter was part of the request
        tokens_used: Token usage reported by the envelope

    Returns:
        ExtractionResult

    Raises:
        MalformedReply: If the content cannot be decoded or a mandatory field is empty
        ValueError: If reply_format is unknown
    """
    if reply_format == "tags":
        fields = _extract_tagged_fields(content)
    elif reply_format == "json":
        fields = _extract_json_fields(content)
    else:
        raise ValueError(f"Unknown reply format: {reply_format}. Use 'tags' or 'json'")

    validate_fields(fields)

    cover = fields["cover"] or None
    if cover is not None and not base_cover_supplied:
        log_cover_ignored()
        cover = None

    return ExtractionResult(
        company=fields["company"],
        role=fields["role"],
        resume=fields["resume"],
        cover=cover,
        score=parse_score(fields["score"]),
        tokens_used=tokens_used,
    )
