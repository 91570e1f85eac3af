"""
Tailoring Context

Responsibilities:
- Encodes classified job lines and the candidate's documents into a prompt
- Invokes the LLM with bounded retry on throttling
- Parses and validates the structured reply

Owns: Prompt wording, payload layout, reply validation rules
Never: Classifies lines or writes application files
"""

from jobtailor.contexts.tailoring.payload import encode_payload, serialize_nodes
from jobtailor.contexts.tailoring.reply_parser import ExtractionResult, parse_reply
from jobtailor.contexts.tailoring.tailor import (
    TailorOutcome,
    build_extraction_request,
    tailor_job,
)

__all__ = [
    "ExtractionResult",
    "TailorOutcome",
    "build_extraction_request",
    "encode_payload",
    "parse_reply",
    "serialize_nodes",
    "tailor_job",
]
