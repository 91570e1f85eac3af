"""
Line classifier for job postings.

classify_line() assigns one NodeType to one line by walking an ordered list of
matchers and returning the first hit. Order encodes specificity:

1. Source metadata (Title:, URL Source:, Markdown Content:)
2. Structural noise (setext underlines, navigation links)
3. Inline signals (salary, years of experience), ahead of structure so a
   bullet quoting a pay range is tagged salary rather than bullet
4. Headings (ATX or bold-wrapped), sub-classified by their stripped text
5. Bullets
6. Location cues on bare lines
7. Fallback: body, unknown, or discard when too long

The module holds no state; all patterns come from line_patterns.
"""

from typing import Callable, Optional

from jobtailor.contexts.intake.job_nodes import NodeType
from jobtailor.contexts.intake.line_patterns import (
    HAS_ALPHANUMERIC,
    LOCATION_PATTERNS,
    MAX_BODY_LENGTH,
    SECTION_VOCABULARY_PATTERN,
    SENIORITY_PATTERN,
    ExperiencePatterns,
    HeadingPatterns,
    ListPatterns,
    SalaryPatterns,
    SourceMetadataPatterns,
    StructuralNoisePatterns,
)


def strip_emphasis(text: str) -> str:
    """
    Remove every run of asterisks, whatever its depth.

    "***X***" and "**X**" both reduce to "X"; "**Brand:** VML" to "Brand: VML".
    """
    return HeadingPatterns.EMPHASIS.sub("", text).strip()


def heading_text(line: str) -> Optional[str]:
    """
    Return the emphasis-stripped text of a heading line, or None.

    A heading is an ATX heading (# to ######, then whitespace, then text) or a
    line wrapped entirely in two or more asterisks.
    """
    match = HeadingPatterns.ATX.match(line) or HeadingPatterns.BOLD_LINE.match(line)
    if not match:
        return None
    return strip_emphasis(match.group("text"))


def classify_heading_text(text: str) -> NodeType:
    """
    Sub-classify heading text.

    meta_field before section_header before job_title before heading: a line
    can satisfy several, and the earlier check wins.
    """
    if HeadingPatterns.META_FIELD.match(text):
        return NodeType.META_FIELD
    if SECTION_VOCABULARY_PATTERN.search(text):
        return NodeType.SECTION_HEADER
    if SENIORITY_PATTERN.search(text):
        return NodeType.JOB_TITLE
    return NodeType.HEADING


# =============================================================================
# MATCHERS (one per precedence tier)
# =============================================================================


def _match_source_metadata(line: str) -> Optional[NodeType]:
    if SourceMetadataPatterns.TITLE.match(line):
        return NodeType.JINA_TITLE
    if SourceMetadataPatterns.URL_SOURCE.match(line):
        return NodeType.JINA_URL
    if SourceMetadataPatterns.CONTENT_MARKER.match(line):
        return NodeType.JINA_MARKER
    return None


def _match_structural_noise(line: str) -> Optional[NodeType]:
    if StructuralNoisePatterns.SETEXT_UNDERLINE.match(line):
        return NodeType.SETEXT_UNDERLINE
    if StructuralNoisePatterns.NAV_LINK.match(line):
        return NodeType.NAV_LINK
    return None


def _match_inline_signal(line: str) -> Optional[NodeType]:
    if SalaryPatterns.SALARY.search(line):
        return NodeType.SALARY
    if ExperiencePatterns.YEARS_EXP.search(line):
        return NodeType.YEARS_EXP
    return None


def _match_heading(line: str) -> Optional[NodeType]:
    text = heading_text(line)
    if text is None:
        return None
    return classify_heading_text(text)


def _match_bullet(line: str) -> Optional[NodeType]:
    if ListPatterns.BULLET.match(line):
        return NodeType.BULLET
    return None


def _match_location(line: str) -> Optional[NodeType]:
    if any(pattern.search(line) for pattern in LOCATION_PATTERNS):
        return NodeType.LOCATION
    return None


# Evaluated top to bottom; first non-None result wins
LINE_MATCHERS: tuple[Callable[[str], Optional[NodeType]], ...] = (
    _match_source_metadata,
    _match_structural_noise,
    _match_inline_signal,
    _match_heading,
    _match_bullet,
    _match_location,
)


def classify_line(line: str) -> Optional[NodeType]:
    """
    Assign a category to one line of a job posting.

    Args:
        line: One line of text (surrounding whitespace is ignored)

    Returns:
        The NodeType of the first matching rule, or None when the line should
        be discarded (blank, or generic prose longer than MAX_BODY_LENGTH)

    Examples:
        classify_line("#### **Brand:** VML")           # NodeType.META_FIELD
        classify_line("*   3-4 years of experience")  # NodeType.YEARS_EXP
        classify_line("----------")                   # NodeType.SETEXT_UNDERLINE
    """
    stripped = line.strip()
    if not stripped:
        return None

    for matcher in LINE_MATCHERS:
        node_type = matcher(stripped)
        if node_type is not None:
            return node_type

    if len(stripped) > MAX_BODY_LENGTH:
        return None
    if not HAS_ALPHANUMERIC.search(stripped):
        return NodeType.UNKNOWN
    return NodeType.BODY
