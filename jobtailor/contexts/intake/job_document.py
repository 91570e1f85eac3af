"""
Job posting document builder for the Intake context.

Turns raw posting text into an ordered sequence of ClassifiedNode:

    build_nodes()   - classify every non-blank line, skipping discards
    filter_nodes()  - remove structural noise (DROP_SET)
    parse_job_markdown() - build then filter; the public entry point

None of these functions raise; malformed markdown simply yields body nodes.
"""

from collections import Counter
from typing import Iterable, Optional

from jobtailor.contexts.intake.classifier import classify_line, strip_emphasis
from jobtailor.contexts.intake.job_nodes import DROP_SET, ClassifiedNode, NodeType
from jobtailor.contexts.intake.logger import log_parse_summary


def split_lines(raw_text: str) -> list[str]:
    """Split on LF and CRLF only; form feeds and Unicode separators stay in the line."""
    return raw_text.replace("\r\n", "\n").split("\n")


def build_nodes(raw_text: str) -> list[ClassifiedNode]:
    """
    Classify each non-blank line of raw_text, in source order.

    Lines that classify_line() discards (overlong prose) produce no node.

    Args:
        raw_text: Posting text with LF or CRLF line endings

    Returns:
        List of ClassifiedNode (empty for empty input)
    """
    nodes = []
    for line in split_lines(raw_text):
        stripped = line.strip()
        if not stripped:
            continue

        node_type = classify_line(stripped)
        if node_type is None:
            continue

        nodes.append(ClassifiedNode(content=stripped, node_type=node_type))

    return nodes


def filter_nodes(nodes: Iterable[ClassifiedNode]) -> list[ClassifiedNode]:
    """
    Remove nodes whose category is in DROP_SET.

    Order-preserving and idempotent.
    """
    return [node for node in nodes if node.node_type not in DROP_SET]


def parse_job_markdown(raw_text: str) -> list[ClassifiedNode]:
    """
    Parse posting text into the filtered node sequence sent to the model.

    Args:
        raw_text: Markdown returned by the content-extraction proxy

    Returns:
        Filtered list of ClassifiedNode
    """
    built = build_nodes(raw_text)
    kept = filter_nodes(built)

    num_lines = sum(1 for line in split_lines(raw_text) if line.strip())
    log_parse_summary(num_lines, len(built), len(kept), count_node_types(kept))

    return kept


def count_node_types(nodes: Iterable[ClassifiedNode]) -> dict[NodeType, int]:
    """Count nodes per category, most common first."""
    return dict(Counter(node.node_type for node in nodes).most_common())


def find_title(nodes: Iterable[ClassifiedNode]) -> Optional[str]:
    """
    Best-effort posting title.

    Priority:
    1. First jina_title line, without its "Title:" prefix
    2. First job_title heading, without markdown markers

    Returns:
        Title text, or None if neither is present
    """
    for node in nodes:
        if node.node_type == NodeType.JINA_TITLE:
            title = node.content.removeprefix("Title:").strip()
        elif node.node_type == NodeType.JOB_TITLE:
            title = strip_emphasis(node.content.lstrip("#").strip())
        else:
            continue

        if title:
            return title

    return None
