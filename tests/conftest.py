"""Shared fixtures: a configuration rooted in temporary home and target directories."""

import os
import sys
from pathlib import Path

import pytest
from loguru import logger

from dotfilesctl.config import Config, init_config


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep DOTFILESCTL_* variables from the outer shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("DOTFILESCTL_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI commands replace loguru handlers; restore a plain stderr sink afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def target(tmp_path: Path) -> Path:
    path = tmp_path / "target"
    (path / "contents").mkdir(parents=True)
    return path


@pytest.fixture
def config(home: Path, target: Path) -> Config:
    return Config(target=target, home=home)


@pytest.fixture
def config_file(tmp_path: Path, home: Path, target: Path) -> Path:
    """A config.toml on disk describing the same layout as ``config``."""
    return init_config(tmp_path / "config" / "config.toml", target, home=home)


def setup_content(config: Config, name: str, text: str | None = None, mode: int = 0o644) -> Path:
    """Create a file in the content store."""
    path = config.contents() / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text if text is not None else name)
    path.chmod(mode)
    return path


def setup_dotfile(config: Config, name: str, mode: int = 0o644) -> Path:
    """Create a plain file in the home directory, holding its own name."""
    path = config.get_home() / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(name)
    path.chmod(mode)
    return path


def setup_symlink(config: Config, name: str) -> Path:
    """Link the home path to its content-store path."""
    path = config.get_home() / name
    path.parent.mkdir(parents=True, exist_ok=True)
    os.symlink(config.contents() / name, path)
    return path


def setup_symlink_wrong(config: Config, name: str) -> Path:
    """Put a regular file where the symlink should be."""
    path = config.get_home() / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("not a symlink")
    return path
