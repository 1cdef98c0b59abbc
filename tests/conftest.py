# tests/conftest.py
"""Shared fixtures: an on-disk template root and a config pointing at it."""

import logging
import textwrap
from pathlib import Path

import pytest

from templateview.config.settings import ViewConfig
from templateview.logging_setup import LOGGER_NAME


@pytest.fixture(autouse=True)
def no_user_config(tmp_path_factory, monkeypatch):
    """Keeps a developer's ~/.config/templateview/config.toml out of the tests."""
    missing = tmp_path_factory.mktemp("home") / "config.toml"
    monkeypatch.setattr("templateview.config.loader.USER_CONFIG_FILE", missing)


@pytest.fixture(autouse=True)
def detached_package_logger():
    """Drops handlers a test attached via configure_logging, whose streams die with the test."""
    yield
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.propagate = True


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    root = tmp_path / "templates"
    root.mkdir()
    return root


@pytest.fixture
def write_template(template_root: Path):
    """Writes a template file under the root, creating parent directories."""
    def _write(relative_path: str, content: str) -> Path:
        path = template_root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def view_config(template_root: Path) -> ViewConfig:
    return ViewConfig(template_root=template_root)
