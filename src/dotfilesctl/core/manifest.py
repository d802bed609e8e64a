"""The dotfiles manifest and the operations that keep it consistent.

A Dotfiles value is immutable. Mutating operations (track, untrack,
set_executable) perform their filesystem steps and return a new value;
persisting that value is the caller's job (see persistence.py).

Filesystem steps are not transactional. If track fails after moving the
file into the content store, the original location is left empty and the
manifest is not updated. If untrack fails after deleting the content, the
home symlink dangles and the manifest still lists the path.
"""

import os
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable

from loguru import logger
from pydantic import BaseModel, ConfigDict

from .errors import (
    AlreadyDeletedError,
    AlreadyTrackedError,
    InconsistentManifestError,
    InvalidUtf8PathError,
    MissingContentError,
    NotARegularFileError,
    NotInHomeDirectoryError,
    NotTrackedError,
    PermissionMismatchError,
    SpuriousContentError,
    SymlinkMismatchError,
    TrackSymlinkError,
)
from .file_io import move_entry, remove_entry
from .paths import relative_to
from .perm import Executable
from .symlink import OnWrong, RepairResult, Symlink, SymlinkStatus

if TYPE_CHECKING:
    from ..config import Config

MANIFEST_VERSION = 1

Validate = Callable[[Path], None]
Confirm = Callable[[Path], None]


def _duplicates(paths: Iterable[Path]) -> list[Path]:
    return [path for path, count in Counter(paths).items() if count > 1]


def _unexpected_files(directory: Path, files: Iterable[Path], expect_exists: bool) -> list[Path]:
    """Files whose presence under ``directory`` differs from ``expect_exists``."""
    return [
        file for file in files
        if os.path.lexists(directory / file) != expect_exists
    ]


def _home_relative(config: "Config", file: Path) -> Path:
    """Relative path of a home-directory entry without following the entry itself.

    The parent directory is canonicalized so that ``file`` may be given
    relative to the working directory, while a symlink at ``file`` is left
    unresolved.
    """
    home = config.get_home().resolve()
    absolute = Path(os.path.abspath(file))
    located = absolute.parent.resolve() / absolute.name
    if not located.is_relative_to(home) or located == home:
        raise NotInHomeDirectoryError(located, home)
    return Path(relative_to(home, located))


class Dotfiles(BaseModel):
    """Declared state of all tracked, executable and deleted dotfiles.

    Paths are relative to the home directory and double as paths under the
    content store. Lists keep insertion order.
    """

    model_config = ConfigDict(frozen=True)

    version: int = MANIFEST_VERSION
    files: tuple[Path, ...] = ()
    executables: tuple[Path, ...] = ()
    deleted: tuple[Path, ...] = ()

    def is_executable(self, relative: Path) -> Executable:
        return Executable.from_bool(relative in self.executables)

    def get_symlinks(self, contents: Path, home: Path) -> dict[Path, Symlink]:
        return {
            dotfile: Symlink.get(contents, home, dotfile)
            for dotfile in self.files
        }

    def check_consistency(self) -> None:
        """Validate the structural invariants without touching the filesystem.

        Raises:
            InconsistentManifestError: On duplicates, tracked-and-deleted
                paths, or executables that are not tracked
        """
        for name, paths in (
            ("files", self.files),
            ("executables", self.executables),
            ("deleted", self.deleted),
        ):
            duplicates = _duplicates(paths)
            if duplicates:
                raise InconsistentManifestError(f"duplicate entries in {name}", duplicates)

        overlap = [file for file in self.files if file in self.deleted]
        if overlap:
            raise InconsistentManifestError("tracked and deleted at the same time", overlap)

        untracked = [file for file in self.executables if file not in self.files]
        if untracked:
            raise InconsistentManifestError("executable but not tracked", untracked)

    def check(self, config: "Config") -> None:
        """Verify that the filesystem matches the manifest.

        Stages, stopping at the first failure:
        1. Structural consistency of the manifest itself
        2. Every tracked file has content in the store
        3. No deleted file has content in the store
        4. Every tracked file has a correct symlink and executable flag

        Raises:
            InconsistentManifestError: Stage 1
            MissingContentError: Stage 2, listing every missing path
            SpuriousContentError: Stage 3, listing every offending path
            SymlinkMismatchError: Stage 4, symlink absent or wrong
            PermissionMismatchError: Stage 4, executable flag differs
        """
        self.check_consistency()

        contents = config.contents()
        logger.info(f"Checking for absent content in {contents}")
        absent = _unexpected_files(contents, self.files, expect_exists=True)
        if absent:
            raise MissingContentError(absent)
        logger.info("No absent content.")

        logger.info(f"Checking for spurious content in {contents}")
        spurious = _unexpected_files(contents, self.deleted, expect_exists=False)
        if spurious:
            raise SpuriousContentError(spurious)
        logger.info("No spurious content.")

        home = config.get_home()
        logger.info(f"Checking for symlinks in {home}")
        symlinks = self.get_symlinks(contents, home)
        for dotfile, symlink in symlinks.items():
            if symlink.status is SymlinkStatus.ABSENT:
                raise SymlinkMismatchError(dotfile, symlink.expected, error=symlink.error)
            if symlink.status is SymlinkStatus.WRONG:
                raise SymlinkMismatchError(dotfile, symlink.expected, actual=symlink.actual_target())

            declared = self.is_executable(dotfile)
            if symlink.expected.is_file():
                actual = Executable.get(symlink.expected)
                if actual is not declared:
                    raise PermissionMismatchError(dotfile, declared.value, actual.value)
            elif declared is Executable.YES:
                raise PermissionMismatchError(dotfile, "directory", declared.value)

        logger.info(f"{len(symlinks)} symlink(s) correct.")

    def repair(self, config: "Config", on_wrong: OnWrong) -> RepairResult:
        """Repair the symlink and executable flag of every tracked file.

        Missing or spurious content is not addressed; a later check will
        still report it.
        """
        home = config.get_home()
        logger.info(f"Attempting to repair broken symlinks in {home}")

        symlinks = self.get_symlinks(config.contents(), home)
        results = [
            symlink.repair(on_wrong, self.is_executable(dotfile))
            for dotfile, symlink in symlinks.items()
        ]
        return RepairResult.coalesce_all(results)

    def track(self, config: "Config", file: Path, validate: Validate) -> "Dotfiles":
        """Move ``file`` into the content store and link it back.

        Args:
            config: Configuration context
            file: File or directory inside the home directory
            validate: Called with the relative path before anything is
                moved, raises to reject it

        Returns:
            New manifest with the relative path appended to files

        Raises:
            TrackSymlinkError: If file is itself a symlink
            NotInHomeDirectoryError: If file is not under the home directory
            InvalidUtf8PathError: If the path cannot be stored as UTF-8
            AlreadyTrackedError: If the path is already tracked
            AlreadyDeletedError: If the path was tracked and deleted before
            SpuriousContentError: If the content store already has the path
        """
        file = Path(file)
        if file.is_symlink():
            raise TrackSymlinkError(file)

        file = file.resolve(strict=True)
        home = config.get_home().resolve()
        if not file.is_relative_to(home) or file == home:
            raise NotInHomeDirectoryError(file, home)

        relative = Path(relative_to(home, file))
        try:
            str(relative).encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidUtf8PathError(relative) from e

        if relative in self.files:
            raise AlreadyTrackedError(relative)
        if relative in self.deleted:
            raise AlreadyDeletedError(relative)

        content_path = config.contents() / relative
        if os.path.lexists(content_path):
            raise SpuriousContentError([relative])

        validate(relative)

        if file.is_dir():
            logger.info(f"Tracking {relative} and all its children")
        else:
            logger.info(f"Tracking {relative}")

        move_entry(file, content_path)
        os.symlink(content_path, file)

        return self.model_copy(update={"files": self.files + (relative,)})

    def untrack(self, config: "Config", file: Path, confirm: Confirm) -> "Dotfiles":
        """Delete a tracked file and tombstone its path.

        ``confirm`` is called once for the content-store entry and once for
        the home-directory symlink, each time before deleting it. It raises
        to abort; when it aborts on the second call the content is already
        gone.

        Raises:
            NotInHomeDirectoryError: If file is not under the home directory
            AlreadyDeletedError: If the path was already untracked
            NotTrackedError: If the path is not tracked
        """
        relative = _home_relative(config, Path(file))
        if relative in self.deleted:
            raise AlreadyDeletedError(relative)
        if relative not in self.files:
            raise NotTrackedError(relative)

        logger.info(f"Untracking {relative}")
        symlink = Symlink.get(config.contents(), config.get_home(), relative)

        if os.path.lexists(symlink.expected):
            confirm(symlink.expected)
            remove_entry(symlink.expected)
        else:
            logger.warning(f"No content for {relative} in {config.contents()}")

        if symlink.path.is_symlink():
            confirm(symlink.path)
            symlink.path.unlink()
        elif os.path.lexists(symlink.path):
            logger.warning(f"Leaving {symlink.path} in place because it is not a symlink")

        return self.model_copy(update={
            "files": tuple(f for f in self.files if f != relative),
            "executables": tuple(f for f in self.executables if f != relative),
            "deleted": self.deleted + (relative,),
        })

    def set_executable(self, config: "Config", file: Path, mode: Executable) -> "Dotfiles":
        """Apply the executable flag to a tracked file and record it.

        Raises:
            NotInHomeDirectoryError: If file is not under the home directory
            NotTrackedError: If the path is not tracked
            NotARegularFileError: If a directory would be marked executable
        """
        relative = _home_relative(config, Path(file))
        if relative not in self.files:
            raise NotTrackedError(relative)

        symlink = Symlink.get(config.contents(), config.get_home(), relative)
        if mode is Executable.YES and not symlink.expected.is_file():
            raise NotARegularFileError(symlink.expected)

        logger.info(f"Setting executable flag of {relative} to {mode.value}")
        symlink.set_executable(mode)

        if mode is Executable.YES:
            if relative in self.executables:
                return self
            executables = self.executables + (relative,)
        else:
            if relative not in self.executables:
                return self
            executables = tuple(f for f in self.executables if f != relative)
        return self.model_copy(update={"executables": executables})
