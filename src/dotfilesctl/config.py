"""Configuration management for dotfilesctl using pydantic-settings.

Supports hierarchical configuration from:
1. Environment variables (highest priority)
2. TOML config file
3. Init arguments (lowest priority)

Environment variables use the format: DOTFILESCTL_<FIELD>
Example: DOTFILESCTL_HOME=/home/alice
"""

import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .core.errors import NoHomeDirectoryError

APP_NAME = "dotfilesctl"

MANIFEST_FILE_NAME = "dotfiles.toml"
CONTENTS_DIR_NAME = "contents"


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source for loading from a TOML file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_file: Path):
        super().__init__(settings_cls)
        self.toml_file = toml_file

    def get_field_value(
        self, field: Any, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get field value - required by base class but not used in v2."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load configuration from TOML file."""
        if self.toml_file.exists():
            with open(self.toml_file, "rb") as f:
                return tomllib.load(f)
        return {}


# Set only while Config.load() builds an instance
_toml_config_file: Path | None = None


class Config(BaseSettings):
    """Read-only context for every dotfiles operation.

    Attributes:
        target: Directory holding the manifest and the content store
        home: Home directory override, auto-detected when None
        log_level: Console log level used by the CLI
        log_file: Also write logs to a rotating file in the platform logs directory
    """

    target: Path
    home: Path | None = None
    log_level: str = Field(default="INFO")
    log_file: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="DOTFILESCTL_",
        frozen=True,
    )

    @field_validator("target", "home")
    @classmethod
    def path_must_be_absolute(cls, v: Path | None) -> Path | None:
        """Expand ~ and require an absolute path."""
        if v is None:
            return v
        v = v.expanduser()
        if not v.is_absolute():
            raise ValueError(f"path must be absolute: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate that log_level is a loguru level name."""
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level

    @classmethod
    def load(cls, config_path: Path | str) -> "Config":
        """Load the configuration from a TOML file, with environment overrides.

        Raises:
            FileNotFoundError: If the config file does not exist
            pydantic.ValidationError: If the document is malformed
        """
        global _toml_config_file
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        _toml_config_file = path
        try:
            return cls()
        finally:
            _toml_config_file = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority: environment, then the TOML file being loaded, then init arguments."""
        if _toml_config_file is not None:
            toml_source = TomlConfigSettingsSource(settings_cls, toml_file=_toml_config_file)
            return (env_settings, toml_source, init_settings)
        return (env_settings, init_settings)

    def get_home(self) -> Path:
        """Return the configured home directory or the detected one.

        Raises:
            NoHomeDirectoryError: If none is configured and detection fails
        """
        if self.home is not None:
            return self.home
        try:
            return Path.home()
        except RuntimeError as e:
            raise NoHomeDirectoryError() from e

    def manifest_path(self) -> Path:
        return self.target / MANIFEST_FILE_NAME

    def contents(self) -> Path:
        return self.target / CONTENTS_DIR_NAME


def init_config(
    config_path: Path,
    target: Path,
    home: Path | None = None,
    force: bool = False,
) -> Path:
    """Write a fresh configuration file pointing at ``target``.

    The target is canonicalized before it is written, and its content
    store directory is created.

    Args:
        config_path: Where to write the TOML config
        target: Existing directory for the manifest and content store
        home: Optional home directory override
        force: Overwrite an existing config file

    Returns:
        Path to the written config file

    Raises:
        NotADirectoryError: If target is not a directory
        FileExistsError: If config_path exists and force is False
    """
    target = Path(target)
    if not target.is_dir():
        raise NotADirectoryError(f"{target} is not a directory")
    target = target.resolve()

    config_path = Path(config_path)
    if config_path.exists() and not force:
        raise FileExistsError(f"{config_path} exists but --force has not been specified")

    logger.info(f"Installing a fresh config in {config_path}")
    document: dict[str, Any] = {"target": str(target)}
    if home is not None:
        document["home"] = str(Path(home).expanduser().resolve())

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "wb") as f:
        tomli_w.dump(document, f)

    (target / CONTENTS_DIR_NAME).mkdir(exist_ok=True)
    return config_path
