"""
First-run workspace scaffolding.

Creates the workspace directories and example base templates. Existing files
are never overwritten.
"""

from pathlib import Path

from loguru import logger

from jobtailor.contexts.applications.store import COVER_FILENAME, RESUME_FILENAME
from jobtailor.utils.config import WorkspacePaths

EXAMPLE_RESUME = """\
YOUR NAME
your.email@example.com | (555) 123-4567 | linkedin.com/in/yourprofile

SUMMARY
Two or three lines on your field, years of experience, and strongest skills.

EXPERIENCE

Job Title | Company Name | Month Year - Present
- Achievement with a measurable result (e.g., cut onboarding time by 30%)
- Responsibility that shows a skill the roles you want ask for
- Initiative you led and what came of it

Previous Title | Previous Company | Month Year - Month Year
- Achievement with a measurable result
- Collaboration or leadership example

EDUCATION
Degree | University | Year

SKILLS
- Technical: skill, skill, skill
- Tools: tool, tool, tool
"""

EXAMPLE_COVER = """\
YOUR NAME
your.email@example.com | (555) 123-4567

Dear Hiring Manager,

Opening: the role you are applying for and why it caught your attention.

Body: two or three achievements that match what the posting asks for, with
numbers where you have them.

Fit: what draws you to the company and what you would bring to the team.

Closing: thank the reader and ask for a conversation.

Sincerely,
Your Name
"""

EXAMPLE_TEMPLATES = {
    RESUME_FILENAME: EXAMPLE_RESUME,
    COVER_FILENAME: EXAMPLE_COVER,
}


def ensure_workspace(paths: WorkspacePaths) -> list[Path]:
    """
    Create workspace directories and any missing example templates.

    Args:
        paths: Workspace layout

    Returns:
        List of template paths that were created (empty when all existed)
    """
    for directory in (paths.config_dir, paths.templates_dir, paths.data_dir, paths.jobs_dir):
        directory.mkdir(parents=True, exist_ok=True)

    created = []
    for filename, content in EXAMPLE_TEMPLATES.items():
        path = paths.templates_dir / filename
        if not path.exists():
            path.write_text(content, encoding="utf-8")
            created.append(path)
            logger.info(f"[applications] Created example template: {path}")

    return created
