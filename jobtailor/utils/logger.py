"""
Session logging for jobtailor scripts.

Each script run gets its own directory under the workspace logs/ folder with
one DEBUG-level file, while the console shows INFO and above (or DEBUG with
--verbose). Context wrappers in contexts/{context}/logger.py add the
[intake]/[tailor]/[applications] prefixes.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Console color per level
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[dict] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output to a session log file and stderr.

    Args:
        context_name: Log file stem (e.g., "tailor" gives tailor.log)
        log_dir: Directory for this session, created if missing
        extra_provenance: Run settings written under the provenance header
        console_level: Minimum level echoed to stderr

    Returns:
        Path to the session log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(log_file, extra_provenance)
    return log_file


def log_provenance(log_file: Path, extra_context: Optional[dict] = None) -> None:
    """Write the run header: command line, interpreter and run settings."""
    logger.debug("=" * 80)
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")
    logger.debug(f"Log file: {log_file}")

    for key, value in (extra_context or {}).items():
        logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
