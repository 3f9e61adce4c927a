"""System utilities: command lookup, permissions, links and temp files."""

from __future__ import annotations

import logging
import os
import re
import shutil
import stat as stat_mod
import sys
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager

import aiofiles.os
from aiofiles.ospath import wrap

from afs.config import get_settings
from afs.errors import CommandNotFoundError, ErrorKind, FsError, raise_fs_error

__all__ = [
    "chmod",
    "chmod_sync",
    "create_tempdir",
    "create_tempfile",
    "mktempdir",
    "mktempdir_sync",
    "mktempfile",
    "mktempfile_sync",
    "parse_mode",
    "soft_link",
    "temporary_directory",
    "temporary_file",
    "which",
]

logger = logging.getLogger(__name__)

_OCTAL_MODE = re.compile(r"^(?:0o)?([0-7]{1,4})$")
_SYMBOLIC_CLAUSE = re.compile(r"^([ugoa]*)([+\-=])([rwx]*)$")

_PERMISSION_BITS = {
    "u": {"r": stat_mod.S_IRUSR, "w": stat_mod.S_IWUSR, "x": stat_mod.S_IXUSR},
    "g": {"r": stat_mod.S_IRGRP, "w": stat_mod.S_IWGRP, "x": stat_mod.S_IXGRP},
    "o": {"r": stat_mod.S_IROTH, "w": stat_mod.S_IWOTH, "x": stat_mod.S_IXOTH},
}

_chmod = wrap(os.chmod)
_mkdtemp = wrap(tempfile.mkdtemp)
_rmtree = wrap(shutil.rmtree)


# ============================================================================
# Command lookup
# ============================================================================


def _executable_names(command: str) -> list[str]:
    """Candidate file names for a command on this platform."""
    if sys.platform != "win32":
        return [command]
    extensions = os.environ.get("PATHEXT", ".COM;.EXE;.BAT;.CMD").split(os.pathsep)
    if any(command.lower().endswith(ext.lower()) for ext in extensions if ext):
        return [command]
    return [command] + [command + ext for ext in extensions if ext]


def _is_executable(candidate: str) -> bool:
    return os.path.isfile(candidate) and os.access(candidate, os.X_OK)


def which(command: str, path: str | None = None) -> str:
    """Locate an executable on the search path.

    Args:
        command: Command name. A name containing a directory separator is
            checked directly instead of searched for.
        path: Search path string. Defaults to the PATH environment variable.

    Returns:
        Full path of the first match, in search-path order.

    Raises:
        CommandNotFoundError: If no directory holds a matching executable.
    """
    names = _executable_names(command)
    if os.path.dirname(command):
        for name in names:
            if _is_executable(name):
                return name
        raise CommandNotFoundError(command)

    search_path = os.environ.get("PATH", "") if path is None else path
    for directory in search_path.split(os.pathsep):
        if not directory:
            continue
        for name in names:
            candidate = os.path.join(directory, name)
            if _is_executable(candidate):
                logger.debug("Resolved %s to %s", command, candidate)
                return candidate
    raise CommandNotFoundError(command)


# ============================================================================
# Permissions
# ============================================================================


def parse_mode(mode: str | int, current: int = 0) -> int:
    """Turn an octal or symbolic mode into permission bits.

    Symbolic clauses (``u+x``, ``go-w``, ``a=r``; comma separated) apply to
    ``current``. A missing who-part means all of user, group and other.

    Args:
        mode: Integer mode, octal string ("755", "0o644") or symbolic string.
        current: Permission bits symbolic clauses are applied to.

    Returns:
        The resulting permission bits.

    Raises:
        FsError: INVALID_ARGUMENT if the mode cannot be parsed.

    Example:
        >>> oct(parse_mode("u+x", 0o644))
        '0o744'
    """
    if isinstance(mode, int):
        return mode

    text = mode.strip()
    octal = _OCTAL_MODE.match(text)
    if octal:
        return int(octal.group(1), 8)

    result = stat_mod.S_IMODE(current)
    for clause in text.split(","):
        match = _SYMBOLIC_CLAUSE.match(clause.strip())
        if not match:
            raise FsError(ErrorKind.INVALID_ARGUMENT, "chmod", None, f"invalid mode: {mode}")
        who, op, perms = match.groups()
        classes = "ugo" if who in ("", "a") or "a" in who else who
        for cls in classes:
            bits = 0
            for perm in perms:
                bits |= _PERMISSION_BITS[cls][perm]
            if op == "+":
                result |= bits
            elif op == "-":
                result &= ~bits
            else:
                for cleared in _PERMISSION_BITS[cls].values():
                    result &= ~cleared
                result |= bits
    return result


def chmod_sync(mode: str | int, path: str | os.PathLike[str]) -> None:
    """Apply a permission mode to a path.

    Args:
        mode: Octal string, integer, or symbolic expression (see parse_mode).
        path: Target path.
    """
    with raise_fs_error("chmod", path):
        current = os.stat(path).st_mode
        bits = parse_mode(mode, current)
        os.chmod(path, bits)
    logger.debug("Changed mode of %s to %o", path, bits)


async def chmod(mode: str | int, path: str | os.PathLike[str]) -> None:
    """Apply a permission mode to a path."""
    with raise_fs_error("chmod", path):
        current = (await aiofiles.os.stat(path)).st_mode
        bits = parse_mode(mode, current)
        await _chmod(path, bits)
    logger.debug("Changed mode of %s to %o", path, bits)


# ============================================================================
# Links
# ============================================================================


def soft_link(target: str | os.PathLike[str], link: str | os.PathLike[str]) -> None:
    """Create a symbolic link at ``link`` pointing to ``target``."""
    with raise_fs_error("soft_link", link):
        os.symlink(target, link, target_is_directory=os.path.isdir(target))
    logger.debug("Linked %s -> %s", link, target)


# ============================================================================
# Temporary resources
# ============================================================================


def mktempdir_sync() -> str:
    """Create a uniquely named directory under the OS temp directory.

    The caller owns the directory and must remove it.
    """
    with raise_fs_error("mktempdir"):
        return tempfile.mkdtemp(prefix=get_settings().temp_prefix)


async def mktempdir() -> str:
    """Create a uniquely named directory under the OS temp directory.

    The caller owns the directory and must remove it.
    """
    with raise_fs_error("mktempdir"):
        path: str = await _mkdtemp(prefix=get_settings().temp_prefix)
    return path


def _new_file_in(directory: str, ext: str) -> str:
    fd, path = tempfile.mkstemp(suffix=ext, prefix=get_settings().temp_prefix, dir=directory)
    os.close(fd)
    return path


_new_file_in_async = wrap(_new_file_in)


def mktempfile_sync(ext: str = "") -> str:
    """Create an empty file with extension ``ext`` in a new temp directory.

    The caller owns both the file and its directory.
    """
    directory = mktempdir_sync()
    try:
        with raise_fs_error("mktempfile", directory):
            return _new_file_in(directory, ext)
    except FsError:
        shutil.rmtree(directory, ignore_errors=True)
        raise


async def mktempfile(ext: str = "") -> str:
    """Create an empty file with extension ``ext`` in a new temp directory.

    The caller owns both the file and its directory.
    """
    directory = await mktempdir()
    try:
        with raise_fs_error("mktempfile", directory):
            path: str = await _new_file_in_async(directory, ext)
    except FsError:
        await _rmtree(directory, ignore_errors=True)
        raise
    return path


create_tempdir = mktempdir
create_tempfile = mktempfile


@contextmanager
def temporary_directory() -> Iterator[str]:
    """Yield a new temp directory and remove it with its contents on exit."""
    path = mktempdir_sync()
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@contextmanager
def temporary_file(ext: str = "") -> Iterator[str]:
    """Yield a new empty temp file and remove it and its directory on exit."""
    path = mktempfile_sync(ext)
    try:
        yield path
    finally:
        shutil.rmtree(os.path.dirname(path), ignore_errors=True)
