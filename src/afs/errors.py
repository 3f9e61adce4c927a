"""Unified error type for filesystem operations.

Every fallible operation in afs raises FsError. The originating OS or
parsing error is chained as ``__cause__`` and classified into an ErrorKind
so callers can branch on it without inspecting errno values.
"""

from __future__ import annotations

import errno
import os
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

__all__ = ["CommandNotFoundError", "ErrorKind", "FsError", "raise_fs_error"]


class ErrorKind(str, Enum):
    """Classification of a filesystem failure."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_EXISTS = "already_exists"
    NOT_EMPTY = "not_empty"
    INVALID_ENCODING = "invalid_encoding"
    MALFORMED_DATA = "malformed_data"
    NOT_FOUND_IN_PATH = "not_found_in_path"
    INVALID_ARGUMENT = "invalid_argument"
    IO = "io"


class FsError(Exception):
    """Error during a filesystem operation.

    Attributes:
        kind: Classification of the failure.
        operation: Name of the operation that failed (e.g. "read_file").
        path: Offending path, if any.
        reason: Human-readable reason.
    """

    def __init__(
        self,
        kind: ErrorKind,
        operation: str,
        path: str | None = None,
        reason: str = "",
    ) -> None:
        self.kind = kind
        self.operation = operation
        self.path = path
        self.reason = reason
        super().__init__(self._format())

    def _format(self) -> str:
        target = f" for {self.path}" if self.path is not None else ""
        reason = f": {self.reason}" if self.reason else ""
        return f"{self.operation} failed{target}{reason}"

    @classmethod
    def from_os_error(
        cls, error: OSError, operation: str, path: str | None = None
    ) -> FsError:
        """Build an FsError from an OSError, classifying it by type and errno."""
        reason = error.strerror or str(error)
        return cls(_classify_os_error(error), operation, path, reason)


class CommandNotFoundError(FsError):
    """A command could not be located on the search path."""

    def __init__(self, command: str) -> None:
        super().__init__(
            ErrorKind.NOT_FOUND_IN_PATH,
            "which",
            command,
            f"command '{command}' not found in PATH",
        )
        self.command = command


def _classify_os_error(error: OSError) -> ErrorKind:
    if isinstance(error, FileNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(error, PermissionError):
        return ErrorKind.PERMISSION_DENIED
    if isinstance(error, FileExistsError):
        return ErrorKind.ALREADY_EXISTS
    if error.errno == errno.ENOTEMPTY:
        return ErrorKind.NOT_EMPTY
    return ErrorKind.IO


def _display_path(path: str | os.PathLike[str] | None) -> str | None:
    """Render a path argument for error messages."""
    if path is None:
        return None
    return os.fspath(path)


@contextmanager
def raise_fs_error(
    operation: str, path: str | os.PathLike[str] | None = None
) -> Iterator[None]:
    """Translate OS and encoding errors raised in the block into FsError.

    FsError raised inside the block passes through untouched.
    """
    try:
        yield
    except FsError:
        raise
    except OSError as e:
        raise FsError.from_os_error(e, operation, _display_path(path)) from e
    except UnicodeError as e:
        raise FsError(
            ErrorKind.INVALID_ENCODING, operation, _display_path(path), str(e)
        ) from e
    except ValueError as e:
        # os functions raise ValueError for embedded null bytes
        raise FsError(
            ErrorKind.INVALID_ARGUMENT, operation, _display_path(path), str(e)
        ) from e
