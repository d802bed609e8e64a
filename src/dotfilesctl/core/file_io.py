"""Filesystem mutation helpers for manifest files and tracked entries.

- atomic_write: write bytes via temp file + fsync + os.replace
- move_entry: move a file or directory tree, creating destination parents
- remove_entry: delete a file, symlink or directory tree without following links

None of these roll back on failure. Callers own the ordering of steps.
"""

import os
import shutil
import tempfile
from pathlib import Path

from loguru import logger


def _fsync_parent_directory(file_path: str) -> None:
    """Fsync parent directory so the new directory entry is durable.

    Silently ignores OSError for filesystems that don't support directory fsync.
    """
    parent_dir = os.path.dirname(file_path)
    if not parent_dir:
        return

    try:
        dir_fd = os.open(parent_dir, os.O_RDONLY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)
    except OSError:
        # Some filesystems don't support directory fsync
        pass


def atomic_write(target_path: str, content: bytes) -> None:
    """Write content to file atomically with durability guarantees.

    Args:
        target_path: Destination file path
        content: Raw bytes content to write

    Raises:
        OSError: If write fails

    Implementation:
        1. Create temp file in same directory as target (same filesystem)
        2. Write content to temp file and fsync it
        3. Replace target with temp file atomically
        4. Fsync parent directory
        5. On any failure: cleanup temp file and re-raise
    """
    target_dir = os.path.dirname(target_path) or '.'
    fd = None
    tmp_path = None

    try:
        fd, tmp_path = tempfile.mkstemp(dir=target_dir, prefix='.tmp_')

        os.write(fd, content)
        os.fsync(fd)

        os.close(fd)
        fd = None

        os.replace(tmp_path, target_path)

        _fsync_parent_directory(target_path)

    except Exception:
        if fd is not None:
            try:
                os.close(fd)
            except OSError:
                pass

        if tmp_path is not None and os.path.exists(tmp_path):
            try:
                os.unlink(tmp_path)
            except OSError:
                pass

        raise


def move_entry(src: Path, dst: Path) -> None:
    """Move a file or directory tree to ``dst``.

    The parent of ``dst`` is created if needed. ``dst`` itself must not
    exist, otherwise shutil.move would nest the source inside it.

    Raises:
        FileExistsError: If dst already exists
        OSError: If the move fails
    """
    if os.path.lexists(dst):
        raise FileExistsError(f"Destination already exists: {dst}")
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(src), str(dst))


def remove_entry(path: Path) -> None:
    """Delete whatever lives at ``path``.

    Symlinks are unlinked, never followed. Real directories are removed
    recursively.
    """
    if path.is_dir() and not path.is_symlink():
        logger.debug(f"Removing directory tree {path}")
        shutil.rmtree(path)
    else:
        path.unlink()
