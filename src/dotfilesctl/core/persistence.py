"""Loading and saving the manifest document.

The manifest is stored as TOML in ``<target>/dotfiles.toml``:

    version = 1
    files = [".bashrc"]
    executables = []
    deleted = []

Manifests written before versioning existed carry no ``version`` field and
are read as version 1. Saving always writes every list, even empty ones.
"""

import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from loguru import logger

from .errors import UnsupportedManifestVersionError
from .file_io import atomic_write
from .manifest import MANIFEST_VERSION, Dotfiles

if TYPE_CHECKING:
    from ..config import Config


def parse_manifest(data: dict[str, Any]) -> Dotfiles:
    """Build a manifest from a decoded document.

    Raises:
        UnsupportedManifestVersionError: If version is present and not 1
        pydantic.ValidationError: If a list holds something other than paths
    """
    version = data.get("version", MANIFEST_VERSION)
    if type(version) is not int or version != MANIFEST_VERSION:
        raise UnsupportedManifestVersionError(version)
    return Dotfiles(
        version=version,
        files=data.get("files", []),
        executables=data.get("executables", []),
        deleted=data.get("deleted", []),
    )


def canonicalize(dotfiles: Dotfiles) -> dict[str, Any]:
    """Document form of a manifest with every field materialized."""
    return {
        "version": MANIFEST_VERSION,
        "files": [path.as_posix() for path in dotfiles.files],
        "executables": [path.as_posix() for path in dotfiles.executables],
        "deleted": [path.as_posix() for path in dotfiles.deleted],
    }


def load_manifest(config: "Config") -> Dotfiles:
    """Load the manifest, or an empty one if it has never been saved."""
    path = config.manifest_path()
    if not path.exists():
        logger.info(f"No manifest found at {path}, starting fresh")
        return Dotfiles()

    with open(path, "rb") as f:
        data = tomllib.load(f)
    dotfiles = parse_manifest(data)
    logger.debug(
        f"Loaded manifest from {path}: {len(dotfiles.files)} tracked, "
        f"{len(dotfiles.deleted)} deleted"
    )
    return dotfiles


def save_manifest(dotfiles: Dotfiles, config: "Config") -> Path:
    """Write the canonical manifest document atomically.

    Returns:
        Path of the written manifest
    """
    path = config.manifest_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    content = tomli_w.dumps(canonicalize(dotfiles)).encode("utf-8")
    atomic_write(str(path), content)
    logger.debug(f"Saved manifest to {path}")
    return path
