"""Atomic replacement of a generated page by its postprocessed staging copy."""

from __future__ import annotations

import shutil
from enum import StrEnum
from typing import TYPE_CHECKING

from umldoclet.core.exceptions import PostprocessingError
from umldoclet.core.outcome import Fatal, Success

if TYPE_CHECKING:
    from pathlib import Path

    from umldoclet.core.outcome import Outcome


class ReplaceBranch(StrEnum):
    """How the staging copy reached the original path."""

    RENAMED = "renamed"
    COPIED = "copied"


def replace_file(original: Path, staging: Path) -> Outcome[ReplaceBranch]:
    """Replace ``original`` by ``staging``.

    The original is deleted first, then the staging file is renamed onto its path. When
    the rename fails (for instance across filesystems) the staging file is copied and
    then deleted.

    Postcondition on ``Success``: ``original`` holds the staging content and ``staging``
    no longer exists. A crash between the delete and the rename can leave ``original``
    absent.

    Returns:
        ``Success`` with the branch taken, or ``Fatal`` when the original cannot be deleted,
        the copy fails, or the staging file cannot be deleted after copying.

    """
    try:
        original.unlink()
    except OSError as e:
        return Fatal(PostprocessingError(f"Cannot delete {original}: {e}", str(original)))

    try:
        staging.rename(original)
    except OSError:
        return _copy_back(original, staging)
    return Success(ReplaceBranch.RENAMED)


def _copy_back(original: Path, staging: Path) -> Outcome[ReplaceBranch]:
    try:
        shutil.copyfile(staging, original)
    except OSError as e:
        return Fatal(PostprocessingError(f"Cannot copy {staging} to {original}: {e}", str(original)))
    try:
        staging.unlink()
    except OSError as e:
        return Fatal(PostprocessingError(f"Cannot delete {staging} after postprocessing: {e}", str(staging)))
    return Success(ReplaceBranch.COPIED)
