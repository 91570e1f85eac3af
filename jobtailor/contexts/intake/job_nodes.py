"""
Classified line data structures for the Intake context.

A job posting is represented as an ordered sequence of ClassifiedNode, one per
surviving line, each tagged with a NodeType from a closed taxonomy.
"""

from dataclasses import dataclass
from enum import Enum


class NodeType(str, Enum):
    """
    Semantic category of one line.

    Listed from most to least specific tier:
    source metadata, structural noise, inline signal, heading family,
    list structure, generic prose.
    """

    # Source metadata (r.jina.ai header)
    JINA_TITLE = "jina_title"
    JINA_URL = "jina_url"

    # Structural noise
    JINA_MARKER = "jina_marker"
    SETEXT_UNDERLINE = "setext_underline"
    NAV_LINK = "nav_link"

    # Inline signal
    SALARY = "salary"
    YEARS_EXP = "years_exp"
    LOCATION = "location"

    # Heading family
    META_FIELD = "meta_field"
    SECTION_HEADER = "section_header"
    JOB_TITLE = "job_title"
    HEADING = "heading"

    # List structure
    BULLET = "bullet"

    # Generic prose
    BODY = "body"
    UNKNOWN = "unknown"


# Categories removed by filter_nodes()
DROP_SET = frozenset(
    {
        NodeType.JINA_MARKER,
        NodeType.SETEXT_UNDERLINE,
        NodeType.NAV_LINK,
    }
)


@dataclass(frozen=True)
class ClassifiedNode:
    """
    One line of a job posting and its category.

    Attributes:
        content: The line with surrounding whitespace removed; markdown markers
            (#, **, *, -) are kept as written
        node_type: Category assigned by classify_line()
    """

    content: str
    node_type: NodeType

    def to_dict(self) -> dict[str, str]:
        return {"content": self.content, "node_type": self.node_type.value}
