"""Pytest configuration and fixtures."""

import io
import json

import pytest
from unittest.mock import AsyncMock
from rich.console import Console


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path, monkeypatch):
    """Keep log files out of /tmp during tests."""
    log_dir = tmp_path / "logs"
    monkeypatch.setattr("drupal_require_core.utils.logging.LOG_DIR", log_dir)
    yield log_dir


@pytest.fixture
def console():
    """Console writing plain text into a buffer."""
    return Console(file=io.StringIO(), width=250, color_system=None)


@pytest.fixture
def make_project(tmp_path):
    """Create a project directory with the given composer.json content."""
    def _make(manifest=None, name="project"):
        project_dir = tmp_path / name
        project_dir.mkdir()
        if manifest is not None:
            content = manifest if isinstance(manifest, str) else json.dumps(manifest)
            (project_dir / "composer.json").write_text(content, encoding="utf-8")
        return project_dir

    return _make


@pytest.fixture
def drupal_manifest():
    """A typical Drupal recommended-project manifest."""
    return {
        "name": "drupal/recommended-project",
        "type": "project",
        "require": {
            "composer/installers": "^2.0",
            "drupal/core-composer-scaffold": "^10.3",
            "drupal/core-project-message": "^10.3",
            "drupal/core-recommended": "^10.3",
            "drupal/admin_toolbar": "^3.4",
            "drush/drush": "^12.5",
        },
        "require-dev": {
            "drupal/core-dev": "^10.3",
            "phpspec/prophecy-phpunit": "^2",
        },
    }


@pytest.fixture
def make_processes():
    """Build mock subprocesses that exit with the given statuses."""
    def _make(*returncodes):
        processes = []
        for code in returncodes:
            proc = AsyncMock()
            proc.returncode = code
            proc.wait = AsyncMock(return_value=code)
            processes.append(proc)
        return processes

    return _make
