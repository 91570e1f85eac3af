"""
Applications Context

Responsibilities:
- Scaffolds the workspace (directories, example base templates)
- Loads the candidate's base resume and cover letter
- Persists each tailored application to its own directory

Owns: Workspace layout and application file formats
Never: Talks to the network
"""

from jobtailor.contexts.applications.store import (
    ApplicationMeta,
    load_application_meta,
    load_base_cover,
    load_base_resume,
    save_application,
    slugify,
)
from jobtailor.contexts.applications.workspace import ensure_workspace

__all__ = [
    "ApplicationMeta",
    "ensure_workspace",
    "load_application_meta",
    "load_base_cover",
    "load_base_resume",
    "save_application",
    "slugify",
]
