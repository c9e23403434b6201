"""composer.json reading and drupal/core-* dependency matching."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

MANIFEST_NAME = "composer.json"
CORE_PREFIX = "drupal/core-"
CONSTRAINT_OPERATOR = "^"

# Manifest sections scanned, in output order
REQUIRE = "require"
REQUIRE_DEV = "require-dev"


class ManifestError(Exception):
    """Base error for manifest problems."""


class ManifestNotFoundError(ManifestError):
    """Raised when composer.json is missing from the project directory."""

    def __init__(self, project_dir: Path) -> None:
        self.project_dir = project_dir
        super().__init__(f"{MANIFEST_NAME} not found in {project_dir}.")


class ManifestParseError(ManifestError):
    """Raised when composer.json can't be read or has an unexpected shape."""


@dataclass(frozen=True)
class MatchedEntry:
    """A drupal/core-* package paired with its new constraint."""
    name: str
    constraint: str

    def __str__(self) -> str:
        return f"{self.name}:{self.constraint}"


@dataclass(frozen=True)
class CoreDependencies:
    """Matched entries for both manifest sections."""
    version: str
    require: list[MatchedEntry] = field(default_factory=list)
    require_dev: list[MatchedEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when neither section has a match."""
        return not self.require and not self.require_dev

    @property
    def constraint(self) -> str:
        """Constraint every matched entry is moved to."""
        return render_constraint(self.version)


def render_constraint(version: str) -> str:
    """Return the caret constraint for a version, e.g. ``^10.4``."""
    return f"{CONSTRAINT_OPERATOR}{version}"


def load_manifest(project_dir: Path) -> dict[str, Any]:
    """Read and decode composer.json from a project directory.

    Args:
        project_dir: Directory expected to hold composer.json

    Returns:
        The decoded manifest object

    Raises:
        ManifestNotFoundError: If composer.json doesn't exist
        ManifestParseError: If it can't be read or isn't a JSON object
    """
    path = project_dir / MANIFEST_NAME
    if not path.is_file():
        raise ManifestNotFoundError(project_dir)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestParseError(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParseError(f"{path} does not contain a JSON object.")

    logger.debug("Loaded manifest %s", path)
    return data


def _section(manifest: dict[str, Any], name: str) -> dict[str, Any]:
    value = manifest.get(name)
    # PHP encodes an empty map as []
    if value is None or value == []:
        return {}
    if not isinstance(value, dict):
        raise ManifestParseError(
            f'"{name}" in {MANIFEST_NAME} must be an object, got {type(value).__name__}.'
        )
    return value


def match_section(section: dict[str, Any], version: str) -> list[MatchedEntry]:
    """Select drupal/core-* keys from one section, keeping manifest order.

    The existing constraint is dropped; only the package name is reused.
    """
    constraint = render_constraint(version)
    return [
        MatchedEntry(name=name, constraint=constraint)
        for name in section
        if name.startswith(CORE_PREFIX)
    ]


def find_core_dependencies(manifest: dict[str, Any], version: str) -> CoreDependencies:
    """Collect drupal/core-* entries from require and require-dev."""
    deps = CoreDependencies(
        version=version,
        require=match_section(_section(manifest, REQUIRE), version),
        require_dev=match_section(_section(manifest, REQUIRE_DEV), version),
    )
    logger.info(
        "Matched %d normal and %d dev dependencies",
        len(deps.require), len(deps.require_dev),
    )
    return deps
