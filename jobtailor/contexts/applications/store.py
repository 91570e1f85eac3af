"""
Application output storage.

Each tailored application gets its own directory under the jobs directory:

    <jobs_dir>/<8-hex-prefix>-<title-slug>/
        resume.txt
        cover.txt     (only when a cover letter was produced)
        meta.json     (company, role, score, tokens, date)
"""

import json
import re
import secrets
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from jobtailor.contexts.intake.job_document import find_title
from jobtailor.contexts.intake.job_nodes import ClassifiedNode
from jobtailor.contexts.tailoring.reply_parser import ExtractionResult
from jobtailor.utils.timestamp import today

RESUME_FILENAME = "resume.txt"
COVER_FILENAME = "cover.txt"
META_FILENAME = "meta.json"

_SLUG_SEPARATOR = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class ApplicationMeta:
    """Contents of meta.json."""

    company: str
    role: str
    score: int
    tokens: int
    date: str


def slugify(nodes: Iterable[ClassifiedNode], prefix: Optional[str] = None) -> str:
    """
    Directory name for an application.

    A random prefix keeps repeated applications to the same posting apart.

    Args:
        nodes: Filtered job description nodes (title taken from find_title)
        prefix: Override for the random 8-character prefix (tests)

    Returns:
        "<prefix>-<slug>", or just "<prefix>" when no title was found

    Example:
        slugify(nodes, prefix="1a2b3c4d")  # "1a2b3c4d-copywriter-careers-vml"
    """
    if prefix is None:
        prefix = secrets.token_hex(4)

    title = (find_title(nodes) or "").lower().strip()
    slug = _SLUG_SEPARATOR.sub("-", title).strip("-")

    return f"{prefix}-{slug}" if slug else prefix


def save_application(
    jobs_dir: Path,
    nodes: Iterable[ClassifiedNode],
    result: ExtractionResult,
    date: Optional[str] = None,
    prefix: Optional[str] = None,
) -> Path:
    """
    Write a tailored application to a new directory.

    Args:
        jobs_dir: Parent directory for all applications
        nodes: Nodes the application was built from (for the directory name)
        result: Validated extraction result
        date: Date recorded in meta.json (defaults to today)
        prefix: Override for the slug prefix

    Returns:
        Path to the created directory

    Raises:
        FileExistsError: If the directory already exists
    """
    application_dir = jobs_dir / slugify(nodes, prefix=prefix)
    jobs_dir.mkdir(parents=True, exist_ok=True)
    application_dir.mkdir()

    (application_dir / RESUME_FILENAME).write_text(result.resume, encoding="utf-8")

    if result.cover is not None:
        (application_dir / COVER_FILENAME).write_text(result.cover, encoding="utf-8")

    meta = ApplicationMeta(
        company=result.company,
        role=result.role,
        score=result.score,
        tokens=result.tokens_used,
        date=date or today(),
    )
    (application_dir / META_FILENAME).write_text(
        json.dumps(asdict(meta), indent=2) + "\n", encoding="utf-8"
    )

    logger.debug(f"[applications] Wrote {application_dir}")
    return application_dir


def load_application_meta(application_dir: Path) -> ApplicationMeta:
    """Read meta.json back from an application directory."""
    data = json.loads((application_dir / META_FILENAME).read_text(encoding="utf-8"))
    return ApplicationMeta(**data)


def load_base_resume(templates_dir: Path) -> str:
    """
    Read the base resume template.

    Raises:
        FileNotFoundError: If resume.txt is missing
    """
    path = templates_dir / RESUME_FILENAME
    if not path.exists():
        raise FileNotFoundError(f"Resume template not found: {path}")
    return path.read_text(encoding="utf-8")


def load_base_cover(templates_dir: Path) -> Optional[str]:
    """Read the base cover letter template, or None when there isn't one."""
    path = templates_dir / COVER_FILENAME
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")
