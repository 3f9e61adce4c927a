"""JSON convenience layer built on the file content operations.

Typed reads and writes go through pydantic's TypeAdapter, so any shape
pydantic understands can be used as the schema: models, dataclasses,
TypedDicts or plain generics like ``list[int]``.
"""

from __future__ import annotations

import json
import os
from typing import Any, TypeVar

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from afs.config import get_settings
from afs.errors import ErrorKind, FsError
from afs.files import read_file, read_file_sync, write_file, write_file_sync

__all__ = [
    "read_from_json",
    "read_from_json_sync",
    "read_json",
    "read_json_sync",
    "write_to_json",
    "write_to_json_sync",
]

T = TypeVar("T")


def _parse(content: str, path: str | os.PathLike[str]) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise FsError(ErrorKind.MALFORMED_DATA, "read_json", os.fspath(path), str(e)) from e


def _decode(content: str, type_: type[T], path: str | os.PathLike[str]) -> T:
    try:
        return TypeAdapter(type_).validate_json(content)
    except ValidationError as e:
        raise FsError(
            ErrorKind.MALFORMED_DATA, "read_from_json", os.fspath(path), str(e)
        ) from e


def _encode(data: Any, path: str | os.PathLike[str]) -> str:
    try:
        raw = TypeAdapter(type(data)).dump_json(data, indent=get_settings().json_indent)
    except (PydanticSchemaGenerationError, PydanticSerializationError) as e:
        raise FsError(
            ErrorKind.MALFORMED_DATA, "write_to_json", os.fspath(path), str(e)
        ) from e
    return raw.decode("utf-8")


def read_json_sync(path: str | os.PathLike[str]) -> Any:
    """Read a file and parse it as an untyped JSON document."""
    return _parse(read_file_sync(path), path)


async def read_json(path: str | os.PathLike[str]) -> Any:
    """Read a file and parse it as an untyped JSON document."""
    return _parse(await read_file(path), path)


def read_from_json_sync(path: str | os.PathLike[str], type_: type[T]) -> T:
    """Read a file and decode it into ``type_``.

    Args:
        path: JSON file to read.
        type_: Target schema.

    Returns:
        The decoded value.

    Raises:
        FsError: MALFORMED_DATA on invalid JSON or schema mismatch, otherwise
            the read failure.
    """
    return _decode(read_file_sync(path), type_, path)


async def read_from_json(path: str | os.PathLike[str], type_: type[T]) -> T:
    """Read a file and decode it into ``type_``."""
    return _decode(await read_file(path), type_, path)


def write_to_json_sync(path: str | os.PathLike[str], data: Any) -> None:
    """Serialize ``data`` as pretty-printed JSON, overwriting the file."""
    write_file_sync(path, _encode(data, path))


async def write_to_json(path: str | os.PathLike[str], data: Any) -> None:
    """Serialize ``data`` as pretty-printed JSON, overwriting the file."""
    await write_file(path, _encode(data, path))
