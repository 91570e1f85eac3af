"""
Settings and workspace path resolution.

Settings live in a YAML file under the workspace config directory and are
merged over structured defaults with OmegaConf. DEEPSEEK_API_KEY in the
environment (or a .env file) overrides the key stored in the file.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from omegaconf import OmegaConf

from jobtailor.utils.exceptions import AuthError
from jobtailor.utils.llm import DEFAULT_ENDPOINT, DEFAULT_MODEL, DEFAULT_TIMEOUT

load_dotenv()

PLACEHOLDER_API_KEY = "example_key"
REPLY_FORMATS = ("tags", "json")


@dataclass
class TailorSettings:
    """User-editable settings (config.yaml)."""

    deepseek_api_key: str = PLACEHOLDER_API_KEY
    deepseek_model: str = DEFAULT_MODEL
    endpoint: str = DEFAULT_ENDPOINT
    reply_format: str = "tags"
    request_timeout_s: float = DEFAULT_TIMEOUT

    def require_api_key(self) -> str:
        """
        Return the API key, rejecting blank or placeholder values.

        Raises:
            AuthError: If the key was never filled in
        """
        key = (self.deepseek_api_key or "").strip()
        if not key or key == PLACEHOLDER_API_KEY:
            raise AuthError(
                "set deepseek_api_key in config.yaml or DEEPSEEK_API_KEY in the environment"
            )
        return key


@dataclass(frozen=True)
class WorkspacePaths:
    """Directory layout rooted at JOBTAILOR_HOME."""

    root: Path

    @property
    def config_dir(self) -> Path:
        return self.root / "config"

    @property
    def config_file(self) -> Path:
        return self.config_dir / "config.yaml"

    @property
    def templates_dir(self) -> Path:
        return self.config_dir / "templates"

    @property
    def data_dir(self) -> Path:
        return self.root / "data"

    @property
    def jobs_dir(self) -> Path:
        return self.data_dir / "jobs"

    @property
    def logs_dir(self) -> Path:
        return self.data_dir / "logs"


def get_workspace_paths(root: Path = None) -> WorkspacePaths:
    """
    Resolve the workspace root.

    Args:
        root: Explicit root (defaults to JOBTAILOR_HOME, then ~/.jobtailor)
    """
    if root is None:
        root = Path(os.getenv("JOBTAILOR_HOME", Path.home() / ".jobtailor"))
    return WorkspacePaths(root=Path(root).expanduser())


def create_default_config(config_path: Path) -> None:
    """Write a config file populated with defaults (placeholder API key)."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(OmegaConf.structured(TailorSettings), config_path)


def load_settings(config_path: Path) -> TailorSettings:
    """
    Load settings from YAML, merged over defaults, with environment overrides.

    Args:
        config_path: Path to config.yaml

    Returns:
        TailorSettings instance

    Raises:
        FileNotFoundError: If the config file does not exist
        ValueError: If reply_format is not one of REPLY_FORMATS
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    schema = OmegaConf.structured(TailorSettings)
    merged = OmegaConf.merge(schema, OmegaConf.load(config_path))
    settings: TailorSettings = OmegaConf.to_object(merged)

    env_key = os.getenv("DEEPSEEK_API_KEY")
    if env_key:
        settings.deepseek_api_key = env_key

    if settings.reply_format not in REPLY_FORMATS:
        raise ValueError(
            f"Unknown reply_format: {settings.reply_format}. Use one of {', '.join(REPLY_FORMATS)}"
        )

    return settings
