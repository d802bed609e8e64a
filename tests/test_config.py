"""Unit tests for configuration management."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from dotfilesctl.config import (
    APP_NAME,
    CONTENTS_DIR_NAME,
    MANIFEST_FILE_NAME,
    Config,
    init_config,
)
from dotfilesctl.core.errors import NoHomeDirectoryError


def test_app_name_constant():
    """Test APP_NAME constant is defined correctly."""
    assert APP_NAME == "dotfilesctl"


def test_derived_paths(tmp_path):
    """Manifest and content store live directly under the target."""
    config = Config(target=tmp_path)
    assert config.manifest_path() == tmp_path / MANIFEST_FILE_NAME
    assert config.contents() == tmp_path / CONTENTS_DIR_NAME
    assert config.manifest_path().name == "dotfiles.toml"
    assert config.contents().name == "contents"


def test_default_values(tmp_path):
    config = Config(target=tmp_path)
    assert config.home is None
    assert config.log_level == "INFO"
    assert config.log_file is False


def test_config_is_frozen(tmp_path):
    config = Config(target=tmp_path)
    with pytest.raises(ValidationError):
        config.target = tmp_path / "other"


class TestLogLevel:

    def test_normalized_to_upper(self, tmp_path):
        assert Config(target=tmp_path, log_level="debug").log_level == "DEBUG"

    def test_unknown_level_rejected(self, tmp_path):
        with pytest.raises(ValidationError, match="unknown log level"):
            Config(target=tmp_path, log_level="loud")


class TestAbsolutePaths:
    """target and home must not depend on the working directory."""

    def test_relative_target_rejected(self):
        with pytest.raises(ValidationError, match="must be absolute"):
            Config(target=Path("dotfiles"))

    def test_relative_home_rejected(self, tmp_path):
        with pytest.raises(ValidationError, match="must be absolute"):
            Config(target=tmp_path, home=Path("home"))

    def test_tilde_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        config = Config(target=Path("~/dotfiles"), home=Path("~"))
        assert config.target == tmp_path / "dotfiles"
        assert config.home == tmp_path

    def test_relative_home_in_file_rejected(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text(f'target = "{tmp_path}"\nhome = "h"\n')

        with pytest.raises(ValidationError):
            Config.load(config_file)


class TestGetHome:

    def test_configured_home(self, tmp_path):
        assert Config(target=tmp_path, home=tmp_path / "h").get_home() == tmp_path / "h"

    def test_detected_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path / "detected"))
        assert Config(target=tmp_path).get_home() == tmp_path / "detected"

    def test_detection_failure(self, tmp_path):
        with patch.object(Path, "home", side_effect=RuntimeError("no home")):
            with pytest.raises(NoHomeDirectoryError):
                Config(target=tmp_path).get_home()


class TestLoad:
    """Loading config.toml with environment overrides."""

    def test_load_from_file(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text(f'target = "{tmp_path / "t"}"\nhome = "{tmp_path / "h"}"\n')

        config = Config.load(config_file)

        assert config.target == tmp_path / "t"
        assert config.home == tmp_path / "h"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.toml"
        config_file.write_text(f'target = "{tmp_path / "t"}"\nhome = "{tmp_path / "h"}"\n')
        monkeypatch.setenv("DOTFILESCTL_HOME", str(tmp_path / "env-home"))
        monkeypatch.setenv("DOTFILESCTL_LOG_LEVEL", "warning")

        config = Config.load(config_file)

        assert config.home == tmp_path / "env-home"
        assert config.log_level == "WARNING"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path / "missing.toml")

    def test_missing_target(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text('home = "/home/alice"\n')

        with pytest.raises(ValidationError):
            Config.load(config_file)

    def test_file_source_not_kept_after_load(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text(f'target = "{tmp_path}"\n')
        Config.load(config_file)

        with pytest.raises(ValidationError):
            Config()


class TestInitConfig:
    """Writing a fresh config file."""

    def test_writes_document(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        config_file = tmp_path / "cfg" / "config.toml"

        written = init_config(config_file, target)

        assert written == config_file
        with open(config_file, "rb") as f:
            document = tomllib.load(f)
        assert document == {"target": str(target.resolve())}
        assert (target / "contents").is_dir()

    def test_loadable(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        config_file = tmp_path / "config.toml"

        init_config(config_file, target, home=tmp_path / "home")
        config = Config.load(config_file)

        assert config.target == target.resolve()
        assert config.home == tmp_path / "home"

    def test_target_resolved(self, tmp_path, monkeypatch):
        (tmp_path / "target").mkdir()
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "config.toml"

        init_config(config_file, Path("target"))

        assert Config.load(config_file).target == (tmp_path / "target").resolve()

    def test_relative_home_resolved(self, tmp_path, monkeypatch):
        """A relative --home is stored absolute and keeps working from other directories."""
        (tmp_path / "target").mkdir()
        (tmp_path / "h").mkdir()
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "config.toml"

        init_config(config_file, Path("target"), home=Path("h"))
        monkeypatch.chdir("/")
        home = Config.load(config_file).get_home()

        assert home.is_absolute()
        assert home == (tmp_path / "h").resolve()

    def test_target_must_exist(self, tmp_path):
        with pytest.raises(NotADirectoryError):
            init_config(tmp_path / "config.toml", tmp_path / "missing")
        assert not (tmp_path / "config.toml").exists()

    def test_existing_without_force(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("keep = true\n")

        with pytest.raises(FileExistsError, match="--force"):
            init_config(config_file, tmp_path)

        assert config_file.read_text() == "keep = true\n"

    def test_existing_with_force(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("keep = true\n")

        init_config(config_file, tmp_path, force=True)

        assert "target" in config_file.read_text()

    def test_existing_contents_kept(self, tmp_path):
        (tmp_path / "contents").mkdir()
        (tmp_path / "contents" / ".bashrc").write_text("x")

        init_config(tmp_path / "config.toml", tmp_path)

        assert (tmp_path / "contents" / ".bashrc").read_text() == "x"
