"""Path helpers shared by the filter, the index and the commit expander."""

import os
import posixpath
from pathlib import Path

_IS_WINDOWS = os.sep == "\\"


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Normalize a path into the key used by the resource index.

    Separators are unified and redundant components collapsed. On Windows the
    result is also lower-cased, so lookups are case-insensitive there.

    Args:
        path: Path to normalize.

    Returns:
        The normalized path string.
    """
    return os.path.normcase(os.path.normpath(os.fspath(path)))


def _relative_key(path: str) -> str:
    key = path.replace("\\", "/")
    if _IS_WINDOWS:
        key = key.lstrip("/").lower()
    return key


def is_descendant(parent: str, descendant: str) -> bool:
    """Check whether ``descendant`` equals or lies below ``parent``.

    Both paths are relative status paths. Blank paths are never related.

    Args:
        parent: Candidate ancestor path.
        descendant: Candidate descendant path.

    Returns:
        True if descendant is parent itself or inside it.
    """
    if not parent.strip() or not descendant.strip():
        return False

    parent_key = _relative_key(parent)
    descendant_key = _relative_key(descendant)
    if parent_key == descendant_key:
        return True

    if not parent_key.endswith("/"):
        parent_key += "/"
    return descendant_key.startswith(parent_key)


def to_posix(path: str) -> str:
    """Return a relative status path with forward slashes."""
    return posixpath.normpath(path.replace("\\", "/"))


def resolve_record_path(root: Path, path: str) -> Path:
    """Join a relative status path onto the working-copy root.

    Args:
        root: Absolute working-copy root.
        path: Relative status path, "." for the root itself.

    Returns:
        Absolute path of the item.
    """
    if path in ("", "."):
        return root
    return root / to_posix(path)
