"""Lexical path helpers.

Nothing in here touches the filesystem: paths are compared and rewritten
purely by their components.
"""

from pathlib import PurePath


def relative_to(base: PurePath, target: PurePath) -> PurePath:
    """Compute the path that leads from ``base`` to ``target``.

    Walks outward from ``base`` one ``..`` at a time until ``target`` is a
    descendant, then appends the remaining components. Unlike
    ``PurePath.relative_to`` the target does not have to live under base.

    Args:
        base: Absolute directory path to start from
        target: Absolute path to reach

    Returns:
        Relative path such that ``normalize_lexical(base / result) == target``

    Example:
        >>> relative_to(PurePath("/a/b/c"), PurePath("/a/e"))
        PurePosixPath('../../e')
    """
    ups = 0
    while not target.is_relative_to(base):
        # The root is an ancestor of every absolute path, so this terminates.
        base = base.parent
        ups += 1
    return type(target)(*([".."] * ups), target.relative_to(base))


def normalize_lexical(path: PurePath) -> PurePath:
    """Remove ``.`` and ``..`` components without resolving symlinks.

    A ``..`` directly under the root is dropped, since the root is its own
    parent. A leading ``..`` in a relative path is kept.
    """
    anchor = path.anchor
    parts: list[str] = []
    for part in path.parts[1:] if anchor else path.parts:
        if part == ".":
            continue
        if part == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not anchor:
                parts.append(part)
            continue
        parts.append(part)
    return type(path)(anchor, *parts)
