"""Relative hyperlink paths between two filesystem locations."""

from __future__ import annotations

import os
from pathlib import Path

from umldoclet.core.exceptions import RelativePathError


def relative_path(from_path: str | os.PathLike[str] | None, to_path: str | os.PathLike[str] | None) -> str | None:
    """Return the relative path from one location to another, joined by forward slashes.

    Both locations are canonicalized first (symlinks, ``.`` and ``..`` resolved).
    If ``from_path`` is a file, its directory is used.

    Args:
        from_path: The source file or directory. Must exist.
        to_path: The target file or directory. Need not exist.

    Returns:
        The relative path, or ``None`` when either location is ``None``.

    Raises:
        RelativePathError: If ``from_path`` is neither an existing file nor an existing directory.

    """
    if from_path is None or to_path is None:
        return None

    source = Path(from_path)
    if source.is_file():
        source = source.parent
    if not source.is_dir():
        msg = f"Not a directory: {source}"
        raise RelativePathError(msg)

    return relative_location(source, to_path)


def relative_location(from_directory: str | os.PathLike[str], to_path: str | os.PathLike[str]) -> str:
    """Relative path from a directory to a location, computed on the paths alone.

    Neither location has to exist yet; both are made absolute and normalized, with
    symlinks resolved where the path exists.
    """
    from_parts = Path(from_directory).resolve().parts
    to_parts = Path(to_path).resolve().parts

    common = 0
    while common < len(from_parts) and common < len(to_parts) and from_parts[common] == to_parts[common]:
        common += 1

    segments = [".."] * (len(from_parts) - common)
    segments.extend(to_parts[common:])
    return "/".join(segments)
