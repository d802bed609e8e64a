"""Symlink status, creation and repair for a single tracked entry."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable

from loguru import logger

from .file_io import remove_entry
from .perm import Executable


class SymlinkStatus(Enum):
    """State of the home-directory entry for a tracked file."""

    OK = "ok"
    WRONG = "wrong"
    ABSENT = "absent"


class RepairAction(Enum):
    """Decision for a home-directory entry that is in the way."""

    SKIP = "skip"
    DELETE = "delete"


class RepairResult(Enum):
    """Outcome of a repair. A single skip poisons the whole repair."""

    SUCCESSFUL = "successful"
    SKIPPED = "skipped"

    @classmethod
    def coalesce_all(cls, results: Iterable["RepairResult"]) -> "RepairResult":
        if any(result is cls.SKIPPED for result in results):
            return cls.SKIPPED
        return cls.SUCCESSFUL


OnWrong = Callable[[Path], RepairAction]


@dataclass(frozen=True)
class Symlink:
    """Expected vs. actual state of one home-directory symlink.

    Attributes:
        expected: Absolute content-store path the link must point to
        path: Absolute home-directory path of the link
        status: Inspected status
        error: Lookup error when status is ABSENT
    """

    expected: Path
    path: Path
    status: SymlinkStatus
    error: OSError | None = None

    @classmethod
    def get(cls, contents: Path, home: Path, relative: Path) -> "Symlink":
        """Inspect the home-directory entry for ``relative``.

        Never raises: a failed lookup is recorded as ABSENT together with
        the underlying error, and an entry that cannot be read as a link
        is WRONG.
        """
        expected = contents / relative
        path = home / relative
        try:
            path.lstat()
        except OSError as e:
            return cls(expected, path, SymlinkStatus.ABSENT, e)

        try:
            actual = Path(os.readlink(path))
        except OSError:
            return cls(expected, path, SymlinkStatus.WRONG)

        status = SymlinkStatus.OK if actual == expected else SymlinkStatus.WRONG
        return cls(expected, path, status)

    def actual_target(self) -> Path | None:
        """Current link target, or None if path is not a readable link."""
        try:
            return Path(os.readlink(self.path))
        except OSError:
            return None

    def create(self) -> None:
        """Create the link. Fails if anything already exists at ``path``."""
        logger.info(f"Creating symlink {self.path} -> {self.expected}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        os.symlink(self.expected, self.path)

    def set_executable(self, mode: Executable) -> None:
        """Apply ``mode`` to the link target if it is a regular file.

        Directories are always traversable and never get an explicit flag.
        """
        if not self.expected.is_file():
            return
        mode.set(self.expected)

    def repair(self, on_wrong: OnWrong, executable: Executable) -> RepairResult:
        """Bring the link into the OK state.

        Args:
            on_wrong: Decides whether an entry in the way gets deleted
            executable: Flag to (re-)apply to the target

        Returns:
            SKIPPED if on_wrong declined the deletion, SUCCESSFUL otherwise
        """
        if self.status is SymlinkStatus.ABSENT:
            self.create()
        elif self.status is SymlinkStatus.WRONG:
            action = on_wrong(self.path)
            if action is RepairAction.SKIP:
                logger.warning(f"Skipping file {self.path}")
                return RepairResult.SKIPPED
            logger.info(f"Deleting file {self.path}")
            remove_entry(self.path)
            self.create()

        self.set_executable(executable)
        return RepairResult.SUCCESSFUL
