"""
User payload encoding for the tailoring request.

The payload has clearly labelled sections so the model can tell posting
evidence from the candidate's own documents:

    JOB DESCRIPTION:
    [{"content": "...", "node_type": "..."}, ...]

    BASE RESUME:
    ...

    BASE COVER LETTER:     (only when a base cover letter was supplied)
    ...
"""

import json
from typing import Optional, Sequence

from jobtailor.contexts.intake.job_nodes import ClassifiedNode
from jobtailor.utils.exceptions import EncodingError

JOB_DESCRIPTION_LABEL = "JOB DESCRIPTION:"
BASE_RESUME_LABEL = "BASE RESUME:"
BASE_COVER_LABEL = "BASE COVER LETTER:"


def serialize_nodes(nodes: Sequence[ClassifiedNode]) -> str:
    """
    Serialize nodes as a JSON array of {"content", "node_type"} objects.

    Raises:
        EncodingError: If a node does not hold plain string content
    """
    try:
        records = [node.to_dict() for node in nodes]
        for record in records:
            content = record["content"]
            if not isinstance(content, str):
                raise TypeError(f"node content must be str, got {type(content).__name__}")
        return json.dumps(records, ensure_ascii=False)
    except (TypeError, ValueError, AttributeError) as e:
        raise EncodingError("could not serialize job description nodes", original_error=e) from e


def encode_payload(
    nodes: Sequence[ClassifiedNode],
    base_resume: str,
    base_cover: Optional[str] = None,
) -> str:
    """
    Build the user message for the tailoring request.

    Args:
        nodes: Filtered job description nodes (see parse_job_markdown)
        base_resume: Candidate's current resume text
        base_cover: Candidate's current cover letter, or None to omit the section

    Returns:
        Payload text

    Raises:
        EncodingError: If the nodes cannot be serialized
    """
    sections = [
        f"{JOB_DESCRIPTION_LABEL}\n{serialize_nodes(nodes)}",
        f"{BASE_RESUME_LABEL}\n{base_resume}",
    ]
    if base_cover is not None:
        sections.append(f"{BASE_COVER_LABEL}\n{base_cover}")

    return "\n\n".join(sections)
