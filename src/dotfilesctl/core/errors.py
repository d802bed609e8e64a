"""Error types raised by the dotfiles core.

Every error carries an ``ErrorKind`` plus the structured fields needed to
diagnose it (paths, expected vs. actual state), so callers and tests can
branch on the kind instead of matching message text.
"""

from enum import StrEnum
from pathlib import Path
from typing import Iterable


class ErrorKind(StrEnum):
    """Closed set of failure categories."""

    INCONSISTENT_MANIFEST = "INCONSISTENT_MANIFEST"
    MISSING_CONTENT = "MISSING_CONTENT"
    SPURIOUS_CONTENT = "SPURIOUS_CONTENT"
    SYMLINK_MISMATCH = "SYMLINK_MISMATCH"
    PERMISSION_MISMATCH = "PERMISSION_MISMATCH"
    NOT_IN_HOME_DIRECTORY = "NOT_IN_HOME_DIRECTORY"
    ALREADY_TRACKED = "ALREADY_TRACKED"
    ALREADY_DELETED = "ALREADY_DELETED"
    NOT_TRACKED = "NOT_TRACKED"
    INVALID_UTF8_PATH = "INVALID_UTF8_PATH"
    UNSUPPORTED_MANIFEST_VERSION = "UNSUPPORTED_MANIFEST_VERSION"
    INVALID_PERMISSION_BITS = "INVALID_PERMISSION_BITS"
    TRACK_SYMLINK = "TRACK_SYMLINK"
    NOT_A_REGULAR_FILE = "NOT_A_REGULAR_FILE"
    NOT_A_DOTFILE = "NOT_A_DOTFILE"
    NO_HOME_DIRECTORY = "NO_HOME_DIRECTORY"
    ABORTED = "ABORTED"


class DotfilesError(Exception):
    """Base class for all dotfiles errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InconsistentManifestError(DotfilesError):
    """Duplicate or overlapping manifest entries."""

    kind = ErrorKind.INCONSISTENT_MANIFEST

    def __init__(self, reason: str, paths: Iterable[Path]):
        self.reason = reason
        self.paths = list(paths)
        super().__init__(f"Inconsistent manifest, {reason}: {_format_paths(self.paths)}")


class MissingContentError(DotfilesError):
    """Tracked files without an entry in the content store."""

    kind = ErrorKind.MISSING_CONTENT

    def __init__(self, paths: Iterable[Path]):
        self.paths = list(paths)
        super().__init__(f"Absent content: {_format_paths(self.paths)}")


class SpuriousContentError(DotfilesError):
    """Content-store entries that the manifest says must not exist."""

    kind = ErrorKind.SPURIOUS_CONTENT

    def __init__(self, paths: Iterable[Path]):
        self.paths = list(paths)
        super().__init__(f"Spurious content: {_format_paths(self.paths)}")


class SymlinkMismatchError(DotfilesError):
    """Home-directory entry is absent or is not the expected symlink."""

    kind = ErrorKind.SYMLINK_MISMATCH

    def __init__(
        self,
        relative: Path,
        expected: Path,
        actual: Path | None = None,
        error: OSError | None = None,
    ):
        self.relative = relative
        self.expected = expected
        self.actual = actual
        self.error = error
        if error is not None:
            message = f"{relative} does not exist, expected symbolic link to {expected} ({error})"
        elif actual is not None:
            message = f"{relative} is a symlink with wrong target {actual}, expected: {expected}"
        else:
            message = f"{relative} is not a symlink, expected symbolic link to {expected}"
        super().__init__(message)


class PermissionMismatchError(DotfilesError):
    """Executable flag on disk differs from the declared one."""

    kind = ErrorKind.PERMISSION_MISMATCH

    def __init__(self, relative: Path, expected: str, actual: str):
        self.relative = relative
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{relative} has wrong executable flag, expected: {expected}, actual: {actual}"
        )


class NotInHomeDirectoryError(DotfilesError):
    kind = ErrorKind.NOT_IN_HOME_DIRECTORY

    def __init__(self, path: Path, home: Path):
        self.path = path
        self.home = home
        super().__init__(f"{path} is not in the home directory {home}")


class AlreadyTrackedError(DotfilesError):
    kind = ErrorKind.ALREADY_TRACKED

    def __init__(self, relative: Path):
        self.relative = relative
        super().__init__(f"{relative} is already tracked")


class AlreadyDeletedError(DotfilesError):
    """Path is tombstoned and can never be tracked again."""

    kind = ErrorKind.ALREADY_DELETED

    def __init__(self, relative: Path):
        self.relative = relative
        super().__init__(f"{relative} has been deleted and cannot be tracked again")


class NotTrackedError(DotfilesError):
    kind = ErrorKind.NOT_TRACKED

    def __init__(self, relative: Path):
        self.relative = relative
        super().__init__(f"{relative} is not tracked")


class InvalidUtf8PathError(DotfilesError):
    kind = ErrorKind.INVALID_UTF8_PATH

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"{path!r} is not valid UTF-8")


class UnsupportedManifestVersionError(DotfilesError):
    kind = ErrorKind.UNSUPPORTED_MANIFEST_VERSION

    def __init__(self, version: object):
        self.version = version
        super().__init__(f"Unsupported manifest version: {version!r}")


class InvalidPermissionBitsError(DotfilesError):
    """Mode has bits beyond the nine read/write/execute bits."""

    kind = ErrorKind.INVALID_PERMISSION_BITS

    def __init__(self, mode: int):
        self.mode = mode
        super().__init__(f"Unknown bits set, possibly sticky: {oct(mode)}")


class TrackSymlinkError(DotfilesError):
    kind = ErrorKind.TRACK_SYMLINK

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Cannot track {path} because it is a symlink")


class NotARegularFileError(DotfilesError):
    kind = ErrorKind.NOT_A_REGULAR_FILE

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"{path} is not a regular file")


class NotADotfileError(DotfilesError):
    kind = ErrorKind.NOT_A_DOTFILE

    def __init__(self, relative: Path):
        self.relative = relative
        super().__init__(f"{relative} does not start with a dot")


class NoHomeDirectoryError(DotfilesError):
    kind = ErrorKind.NO_HOME_DIRECTORY

    def __init__(self):
        super().__init__("No home directory configured and none could be detected")


class AbortedError(DotfilesError):
    """Raised by confirmation callbacks to abort a destructive step."""

    kind = ErrorKind.ABORTED

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Aborted, {path} was not deleted")


def _format_paths(paths: list[Path]) -> str:
    return ", ".join(str(path) for path in paths)
