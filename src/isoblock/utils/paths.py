"""Path containment utilities for untrusted (LLM-generated) paths."""

import os
from pathlib import Path, PurePath


def normalize(path: str | os.PathLike[str]) -> Path:
    """Make *path* absolute and collapse ``.``/``..`` segments.

    Normalization is purely lexical: symlinks are not followed and the path
    does not need to exist.
    """
    return Path(os.path.normpath(os.path.abspath(path)))


def is_contained(root: str | os.PathLike[str], path: str | os.PathLike[str]) -> bool:
    """Return True if *path* is *root* or lies beneath it.

    Both sides are normalized first and compared segment by segment, so
    ``/sandboxevil`` is not considered inside ``/sandbox``.
    """
    return PurePath(normalize(path)).is_relative_to(normalize(root))


def flat_name(relative: str | os.PathLike[str], fallback: str | os.PathLike[str]) -> str:
    """Final segment of *relative*, or of the normalized *fallback* when that is unusable.

    Args:
        relative: Destination path that escaped its root.
        fallback: Path whose file name is used if *relative* ends in ``..``,
            ``.`` or nothing at all.
    """
    name = PurePath(relative).name
    if name in ("", ".", ".."):
        name = normalize(fallback).name
    return name
