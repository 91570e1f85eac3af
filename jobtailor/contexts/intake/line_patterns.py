"""
Regex patterns and vocabularies for classifying job posting lines.

Pattern classes follow one convention:
- Dataclasses with frozen=True for immutability
- Class-level compiled patterns, built once at import
- Helper functions in classifier.py consume these patterns

Nothing here is mutated after import.
"""

import re
from dataclasses import dataclass

# =============================================================================
# GEOGRAPHIC CONSTANTS
# =============================================================================

US_STATES = (
    "Alabama",
    "Alaska",
    "Arizona",
    "Arkansas",
    "California",
    "Colorado",
    "Connecticut",
    "Delaware",
    "Florida",
    "Georgia",
    "Hawaii",
    "Idaho",
    "Illinois",
    "Indiana",
    "Iowa",
    "Kansas",
    "Kentucky",
    "Louisiana",
    "Maine",
    "Maryland",
    "Massachusetts",
    "Michigan",
    "Minnesota",
    "Mississippi",
    "Missouri",
    "Montana",
    "Nebraska",
    "Nevada",
    "New Hampshire",
    "New Jersey",
    "New Mexico",
    "New York",
    "North Carolina",
    "North Dakota",
    "Ohio",
    "Oklahoma",
    "Oregon",
    "Pennsylvania",
    "Rhode Island",
    "South Carolina",
    "South Dakota",
    "Tennessee",
    "Texas",
    "Utah",
    "Vermont",
    "Virginia",
    "Washington",
    "West Virginia",
    "Wisconsin",
    "Wyoming",
)

CANADIAN_PROVINCES = (
    "Alberta",
    "British Columbia",
    "Manitoba",
    "New Brunswick",
    "Newfoundland and Labrador",
    "Nova Scotia",
    "Ontario",
    "Prince Edward Island",
    "Quebec",
    "Saskatchewan",
)

US_STATE_CODES = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    "DC",
)  # fmt: skip

CANADIAN_PROVINCE_CODES = (
    "AB", "BC", "MB", "NB", "NL", "NS", "NT", "NU", "ON", "PE", "QC", "SK", "YT",
)  # fmt: skip

# Countries seen as the region half of "City, Region" on job boards
COUNTRIES = (
    "Australia",
    "Brazil",
    "Canada",
    "France",
    "Germany",
    "India",
    "Ireland",
    "Japan",
    "Mexico",
    "Netherlands",
    "New Zealand",
    "Poland",
    "Portugal",
    "Singapore",
    "Spain",
    "Sweden",
    "Switzerland",
    "United Kingdom",
    "United States",
    "UK",
    "USA",
)

_REGION_PATTERN = "|".join(re.escape(r) for r in US_STATES + CANADIAN_PROVINCES + COUNTRIES)
_REGION_CODE_PATTERN = "|".join(US_STATE_CODES + CANADIAN_PROVINCE_CODES)


# =============================================================================
# SOURCE METADATA PATTERNS (r.jina.ai header lines)
# =============================================================================


@dataclass(frozen=True)
class SourceMetadataPatterns:
    """
    Header lines emitted by the content-extraction proxy.

    These are checked before anything else: they are unambiguous artifacts of
    the proxy format and must never be reread as headings or body text.
    """

    TITLE: re.Pattern = re.compile(r"^Title:")
    URL_SOURCE: re.Pattern = re.compile(r"^URL Source:")
    CONTENT_MARKER: re.Pattern = re.compile(r"^Markdown Content:$")


# =============================================================================
# STRUCTURAL NOISE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class StructuralNoisePatterns:
    """
    Lines that carry layout but no content.
    """

    # A single character repeated, e.g. "----------" or "====". "hello-world" must not match.
    SETEXT_UNDERLINE: re.Pattern = re.compile(r"^(?:-{2,}|={2,})$")

    # One or more links (or images) and nothing else, e.g. "[Overview](...)[Apply](...)"
    NAV_LINK: re.Pattern = re.compile(r"^(?:!?\[[^\]]*\]\([^)]*\)\s*)+$")


# =============================================================================
# INLINE SIGNAL PATTERNS
# =============================================================================

_CURRENCY_SYMBOL = r"[$€£¥₹]"
# Codes stay case-sensitive under IGNORECASE so "3 cad drawings" is not pay
_CURRENCY_CODE = r"(?-i:USD|CAD|EUR|GBP|AUD|NZD|CHF|INR)"
_AMOUNT = r"\d[\d,]*(?:\.\d+)?\s?[kK]?"
_RANGE_SEP = r"\s*(?:-|–|—|to)\s*"
_PERIOD = r"(?:\s*(?:/|per|an?)\s*(?:year|yr|annum|hour|hr|month))?"


@dataclass(frozen=True)
class SalaryPatterns:
    """
    Currency amounts, with optional k suffix, range and pay period.

    Examples: "$65,000—$115,000 CAD", "$120k-$150k per year", "£40/hour",
    "USD 90,000", "80,000 - 95,000 CAD".
    """

    SALARY: re.Pattern = re.compile(
        rf"(?:{_CURRENCY_SYMBOL}\s?{_AMOUNT}|\b{_CURRENCY_CODE}\s?{_CURRENCY_SYMBOL}?\s?{_AMOUNT})"
        rf"(?:{_RANGE_SEP}(?:{_CURRENCY_SYMBOL}|{_CURRENCY_CODE}\s?)?{_AMOUNT})?"
        rf"{_PERIOD}"
        rf"|\b{_AMOUNT}(?:{_RANGE_SEP}{_AMOUNT})?\s?{_CURRENCY_CODE}\b",
        re.IGNORECASE,
    )


@dataclass(frozen=True)
class ExperiencePatterns:
    """
    Years-of-experience requirements.

    Examples: "7+ years", "3-4 years", "5 to 7 yrs", "5 years of relevant experience".
    """

    YEARS_EXP: re.Pattern = re.compile(
        r"\b\d{1,2}\s*(?:\+|(?:-|–|—|to)\s*\d{1,2}\s*\+?)\s*(?:years?|yrs?)\b"
        r"|\b\d{1,2}\s*(?:years?|yrs?)'?\s+(?:of\s+)?(?:[\w-]+\s+){0,3}experience\b",
        re.IGNORECASE,
    )


@dataclass(frozen=True)
class LocationPatterns:
    """
    Location cues for bare lines.

    Supports:
    - City, ST (US state or Canadian province code)
    - City, Region (US state, Canadian province, or common country)
    - Work mode indicators (Remote, Hybrid, On-site)
    """

    # Uses literal space (not \s) to prevent matching across line breaks
    CITY_REGION_ABBREV: re.Pattern = re.compile(
        rf"\b[A-Z][a-z]+(?: [A-Z][a-z]+)*,\s*(?:{_REGION_CODE_PATTERN})\b"
    )

    CITY_REGION_FULL: re.Pattern = re.compile(
        rf"\b[A-Z][a-z]+(?: [A-Z][a-z]+)*,\s*(?:{_REGION_PATTERN})\b"
    )

    WORK_MODE: re.Pattern = re.compile(r"\b(?:remote|hybrid|on-?site|in-?office)\b", re.IGNORECASE)


LOCATION_PATTERNS = (
    LocationPatterns.WORK_MODE,
    LocationPatterns.CITY_REGION_ABBREV,
    LocationPatterns.CITY_REGION_FULL,
)


# =============================================================================
# HEADING PATTERNS
# =============================================================================


@dataclass(frozen=True)
class HeadingPatterns:
    """
    Heading wrappers and the sub-classification of their text.

    Two wrappers are recognised: ATX headings (# to ######) and standalone
    bold-wrapped lines (**Text**, ***Text***, optionally followed by a colon).
    The wrapper is stripped before matching the text content.
    """

    ATX: re.Pattern = re.compile(r"^#{1,6}\s+(?P<text>.+?)(?:\s+#+)?\s*$")

    BOLD_LINE: re.Pattern = re.compile(r"^\*{2,}(?P<text>[^*]+?)\*{2,}:?$")

    EMPHASIS: re.Pattern = re.compile(r"\*+")

    # "Brand: VML", "Location:Toronto, Canada" - a short key, a colon, then a value.
    # (?!//) keeps "https://..." from reading as a key.
    META_FIELD: re.Pattern = re.compile(r"^[A-Za-z][A-Za-z0-9 &/'()._-]{0,39}:(?!//)\s*\S")


# Matched as whole words, case-insensitive. Not meant to be exhaustive; extend
# from real postings as they turn up.
SECTION_VOCABULARY = (
    "about",
    "overview",
    "summary",
    "description",
    "responsibilities",
    "responsibility",
    "duties",
    "requirements",
    "required",
    "qualifications",
    "qualification",
    "preferred",
    "skills",
    "benefits",
    "perks",
    "compensation",
    "location",
    "team",
    "role",
    "position",
    "opportunity",
    "culture",
    "mission",
    "values",
    "apply",
    "who we are",
    "who you are",
    "what you'll do",
    "what we offer",
    "looking for",
    "nice to have",
)

SENIORITY_TERMS = (
    "intern",
    "junior",
    "jr",
    "associate",
    "intermediate",
    "mid-level",
    "senior",
    "sr",
    "staff",
    "principal",
    "lead",
    "head of",
    "manager",
    "director",
    "vp",
    "vice president",
    "chief",
)


def _word_alternation(words: tuple) -> re.Pattern:
    escaped = "|".join(re.escape(w) for w in words)
    return re.compile(rf"(?<![\w-])(?:{escaped})(?![\w-])", re.IGNORECASE)


SECTION_VOCABULARY_PATTERN = _word_alternation(SECTION_VOCABULARY)
SENIORITY_PATTERN = _word_alternation(SENIORITY_TERMS)


# =============================================================================
# LIST AND FALLBACK PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ListPatterns:
    """Markdown list items ("- item", "*   item")."""

    BULLET: re.Pattern = re.compile(r"^\s*[-*]\s+")


# Generic prose longer than this is dropped: low information per token
MAX_BODY_LENGTH = 300

# A letter or digit anywhere; lines without one are catch-all noise
HAS_ALPHANUMERIC = re.compile(r"[^\W_]")
