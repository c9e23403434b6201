"""Logging utilities for drupal-require-core."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path


LOG_DIR = Path("/tmp/drupal_require_core_logs")
LOGGER_NAME = "drupal_require_core"

# Characters kept when a project name or version goes into a file name
_UNSAFE_CHARS = re.compile(r"[^\w.-]+")


def get_log_path(project_dir: Path, version: str | None = None) -> Path:
    """
    Get the log file path for one run against a project.

    The name carries the project directory's basename and the requested
    version, e.g. ``mysite_10.4_20250101_120000.log``.

    Args:
        project_dir: Project whose composer.json is being updated
        version: Requested Drupal core version, if given

    Returns:
        Path to log file
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    parts = [project_dir.resolve().name or "root"]
    if version:
        parts.append(version)
    parts.append(timestamp)
    stem = "_".join(_UNSAFE_CHARS.sub("-", part) for part in parts)
    return LOG_DIR / f"{stem}.log"


def setup_logging(
    project_dir: Path,
    version: str | None = None,
    verbose: bool = False,
) -> logging.Logger:
    """
    Set up logging for one run.

    Args:
        project_dir: Project the run works on
        version: Requested Drupal core version, if given
        verbose: If True, also log to console

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    # File handler - always enabled
    log_path = get_log_path(project_dir, version)
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(file_handler)

    # Console handler - only if verbose
    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console_handler)

    logger.debug(
        "drupal-require-core run: project=%s version=%s log=%s",
        project_dir, version or "(missing)", log_path,
    )
    return logger
