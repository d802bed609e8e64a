"""POSIX permission bits and the derived executable flag.

The model only covers the nine standard read/write/execute bits for user,
group and other. Modes carrying anything else (sticky, setuid, setgid) are
rejected with InvalidPermissionBitsError rather than silently truncated.
"""

import os
import stat
from enum import Enum, IntFlag
from pathlib import Path
from typing import Callable

from .errors import InvalidPermissionBitsError, NotARegularFileError

PERMS_MASK = 0o777


class Perm(IntFlag):
    """Read/write/execute bits of a single permission class."""

    R = 4
    W = 2
    X = 1

    RWX = 7
    RW = 6
    RX = 5
    WX = 3


class Perms(IntFlag):
    """Nine-bit permission value for user, group and other."""

    UR = 0o400
    UW = 0o200
    UX = 0o100
    GR = 0o040
    GW = 0o020
    GX = 0o010
    OR = 0o004
    OW = 0o002
    OX = 0o001

    def user(self) -> Perm:
        return Perm((int(self) >> 6) & 0o7)

    def group(self) -> Perm:
        return Perm((int(self) >> 3) & 0o7)

    def other(self) -> Perm:
        return Perm(int(self) & 0o7)

    @classmethod
    def compose(cls, user: Perm, group: Perm, other: Perm) -> "Perms":
        """Build a permission value from its three classes.

        Inverse of ``user()``, ``group()`` and ``other()``.
        """
        return cls(((int(user) & 0o7) << 6) | ((int(group) & 0o7) << 3) | (int(other) & 0o7))

    def map(
        self,
        user: Callable[[Perm], Perm],
        group: Callable[[Perm], Perm],
        other: Callable[[Perm], Perm],
    ) -> "Perms":
        """Apply an independent transformation to each class."""
        return Perms.compose(user(self.user()), group(self.group()), other(self.other()))

    def map_user(self, f: Callable[[Perm], Perm]) -> "Perms":
        return self.map(f, _identity, _identity)

    def map_group(self, f: Callable[[Perm], Perm]) -> "Perms":
        return self.map(_identity, f, _identity)

    def map_other(self, f: Callable[[Perm], Perm]) -> "Perms":
        return self.map(_identity, _identity, f)

    @classmethod
    def from_mode(cls, mode: int) -> "Perms":
        """Convert raw ``st_mode`` bits to a permission value.

        File-type bits are dropped first; any remaining bit outside the
        standard nine makes the mode unsupported.

        Raises:
            InvalidPermissionBitsError: If sticky, setuid or setgid bits are set
        """
        bits = stat.S_IMODE(mode)
        if bits & ~PERMS_MASK:
            raise InvalidPermissionBitsError(bits)
        return cls(bits)

    def to_mode(self) -> int:
        """Raw permission bits for chmod.

        Raises:
            InvalidPermissionBitsError: If bits beyond the standard nine are set
        """
        bits = int(self)
        if bits & ~PERMS_MASK:
            raise InvalidPermissionBitsError(bits)
        return bits


def _identity(perm: Perm) -> Perm:
    return perm


def _add_execute_if_readable(perm: Perm) -> Perm:
    if perm & Perm.R:
        return perm | Perm.X
    return perm


def _clear_execute(perm: Perm) -> Perm:
    return Perm(int(perm) & ~int(Perm.X) & 0o7)


class Executable(Enum):
    """Whether a regular file should carry execute bits.

    Turning the flag on follows the read-implies-execute pattern: every
    class that can read the file may also execute it. Turning it off clears
    all three execute bits.
    """

    YES = "yes"
    NO = "no"

    @classmethod
    def from_bool(cls, flag: bool) -> "Executable":
        return cls.YES if flag else cls.NO

    def __bool__(self) -> bool:
        return self is Executable.YES

    def update_perms(self, perms: Perms) -> Perms:
        """Return ``perms`` with execute bits added or removed."""
        if self is Executable.YES:
            step = _add_execute_if_readable
        else:
            step = _clear_execute
        return perms.map(step, step, step)

    @classmethod
    def get(cls, path: Path) -> "Executable":
        """Read the executable flag of a regular file.

        Args:
            path: File to inspect, symlinks are followed

        Returns:
            YES if the user execute bit is set, NO otherwise

        Raises:
            NotARegularFileError: If path is not a regular file
            InvalidPermissionBitsError: If the mode has unsupported bits
        """
        path = Path(path)
        if not path.is_file():
            raise NotARegularFileError(path)
        perms = Perms.from_mode(path.stat().st_mode)
        return cls.from_bool(bool(perms & Perms.UX))

    def set(self, path: Path) -> None:
        """Apply this flag to the permissions of a regular file."""
        path = Path(path)
        if not path.is_file():
            raise NotARegularFileError(path)
        perms = Perms.from_mode(path.stat().st_mode)
        os.chmod(path, self.update_perms(perms).to_mode())
