"""Core functionality package."""

from .errors import (
    AbortedError,
    AlreadyDeletedError,
    AlreadyTrackedError,
    DotfilesError,
    ErrorKind,
    InconsistentManifestError,
    InvalidPermissionBitsError,
    InvalidUtf8PathError,
    MissingContentError,
    NoHomeDirectoryError,
    NotADotfileError,
    NotARegularFileError,
    NotInHomeDirectoryError,
    NotTrackedError,
    PermissionMismatchError,
    SpuriousContentError,
    SymlinkMismatchError,
    TrackSymlinkError,
    UnsupportedManifestVersionError,
)
from .file_io import atomic_write, move_entry, remove_entry
from .manifest import Dotfiles
from .paths import normalize_lexical, relative_to
from .perm import Executable, Perm, Perms
from .persistence import load_manifest, save_manifest
from .symlink import RepairAction, RepairResult, Symlink, SymlinkStatus
from .watcher import TargetWatcher

__all__ = [
    "AbortedError",
    "AlreadyDeletedError",
    "AlreadyTrackedError",
    "Dotfiles",
    "DotfilesError",
    "ErrorKind",
    "Executable",
    "InconsistentManifestError",
    "InvalidPermissionBitsError",
    "InvalidUtf8PathError",
    "MissingContentError",
    "NoHomeDirectoryError",
    "NotADotfileError",
    "NotARegularFileError",
    "NotInHomeDirectoryError",
    "NotTrackedError",
    "Perm",
    "Perms",
    "PermissionMismatchError",
    "RepairAction",
    "RepairResult",
    "SpuriousContentError",
    "Symlink",
    "SymlinkMismatchError",
    "SymlinkStatus",
    "TargetWatcher",
    "TrackSymlinkError",
    "UnsupportedManifestVersionError",
    "atomic_write",
    "load_manifest",
    "move_entry",
    "normalize_lexical",
    "relative_to",
    "remove_entry",
    "save_manifest",
]
