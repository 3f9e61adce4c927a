"""Path string utilities.

Everything here is a lexical transform on path text except get_filepath,
which canonicalizes against the real filesystem.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

from afs.errors import ErrorKind, FsError, raise_fs_error

__all__ = [
    "basename",
    "dirname",
    "filename",
    "get_filepath",
    "normalize_path",
    "resolve",
]


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Replace backslash separators with forward slashes."""
    return os.fspath(path).replace("\\", "/")


def _ensure_encodable(value: str, operation: str) -> None:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FsError(
            ErrorKind.INVALID_ENCODING, operation, repr(value), "path is not valid UTF-8"
        ) from e


def resolve(base: str | os.PathLike[str], input: str | os.PathLike[str]) -> str:
    """Resolve ``input`` against ``base`` without touching the filesystem.

    Absolute inputs are returned collapsed and ``base`` is ignored. Relative
    inputs are joined to ``base`` and ``.``/``..`` segments are collapsed.

    Args:
        base: Directory to resolve relative inputs against.
        input: Path to resolve.

    Returns:
        The resolved path.

    Raises:
        FsError: If either path cannot be encoded as UTF-8.

    Example:
        >>> resolve("/home/user", "../test.txt")
        '/home/test.txt'
    """
    base_str = os.fspath(base)
    input_str = os.fspath(input)
    _ensure_encodable(base_str, "resolve")
    _ensure_encodable(input_str, "resolve")

    if os.path.isabs(input_str):
        return os.path.normpath(input_str)
    return os.path.normpath(os.path.join(base_str, input_str))


def _final_component(path: str | os.PathLike[str], operation: str) -> str:
    normalized = normalize_path(path)
    if not normalized:
        raise FsError(ErrorKind.INVALID_ARGUMENT, operation, normalized, "path cannot be empty")
    name = PurePosixPath(normalized).name
    if not name or name == "..":
        raise FsError(
            ErrorKind.INVALID_ARGUMENT, operation, normalized, "path has no final component"
        )
    return name


def basename(path: str | os.PathLike[str]) -> str:
    """Return the final path component, including its extension."""
    return _final_component(path, "basename")


def filename(path: str | os.PathLike[str]) -> str:
    """Return the file name of a path. Same result as basename."""
    return _final_component(path, "filename")


def dirname(path: str | os.PathLike[str]) -> str:
    """Return everything but the final path component.

    A bare name yields ``"."``.

    Raises:
        FsError: If the path is empty or has no parent segment (e.g. ``/``).
    """
    normalized = normalize_path(path)
    if not normalized:
        raise FsError(ErrorKind.INVALID_ARGUMENT, "dirname", normalized, "path cannot be empty")
    pure = PurePosixPath(normalized)
    if pure.parent == pure:
        raise FsError(
            ErrorKind.INVALID_ARGUMENT, "dirname", normalized, "path has no parent"
        )
    return str(pure.parent)


def get_filepath(path: str | os.PathLike[str]) -> str:
    """Return the canonical absolute path, resolving symlinks.

    Raises:
        FsError: If the path does not exist.
    """
    normalized = normalize_path(path)
    with raise_fs_error("get_filepath", normalized):
        return str(Path(normalized).resolve(strict=True))
