"""Non-interactive decision strategies for repair, untrack and track.

Interactive variants that prompt on stdin live in the CLI layer.
"""

from pathlib import Path

from loguru import logger

from .errors import AbortedError, NotADotfileError
from .symlink import RepairAction


def delete_on_wrong(path: Path) -> RepairAction:
    """Repair policy: always delete entries that are in the way."""
    logger.info(f"Deleting {path}")
    return RepairAction.DELETE


def skip_on_wrong(path: Path) -> RepairAction:
    """Repair policy: never delete anything."""
    return RepairAction.SKIP


def confirm_always(path: Path) -> None:
    """Untrack policy: approve every deletion."""


def abort_always(path: Path) -> None:
    """Untrack policy: refuse every deletion."""
    raise AbortedError(path)


def require_dot_prefix(relative: Path) -> None:
    """Track policy: only accept paths whose first component starts with a dot.

    Raises:
        NotADotfileError: If the relative path is not a dotfile
    """
    if not relative.parts or not relative.parts[0].startswith("."):
        raise NotADotfileError(relative)


def accept_any(relative: Path) -> None:
    """Track policy: accept every path."""
