"""
Intake Context

Responsibilities:
- Fetches job postings as markdown through the reader proxy
- Classifies each line into a closed set of categories
- Filters structural noise before anything is sent to the model

Owns: Line classification rules and the node taxonomy
Never: Calls the LLM or writes application files
"""

from jobtailor.contexts.intake.classifier import classify_line
from jobtailor.contexts.intake.job_document import (
    build_nodes,
    count_node_types,
    filter_nodes,
    find_title,
    parse_job_markdown,
)
from jobtailor.contexts.intake.job_nodes import DROP_SET, ClassifiedNode, NodeType

__all__ = [
    "DROP_SET",
    "ClassifiedNode",
    "NodeType",
    "build_nodes",
    "classify_line",
    "count_node_types",
    "filter_nodes",
    "find_title",
    "parse_job_markdown",
]
