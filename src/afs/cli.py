"""CLI commands using Typer."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

import typer
from rich.logging import RichHandler

from afs import __version__
from afs.context import create_context
from afs.display import Display, format_size
from afs.errors import FsError
from afs.jsonio import read_json_sync
from afs.metadata import Metadata, disk_usage_info_sync
from afs.paths import basename, dirname, get_filepath, normalize_path, resolve
from afs.system import chmod_sync, mktempdir_sync, mktempfile_sync, soft_link, which

app = typer.Typer(
    name="afs",
    help="Filesystem utilities modeled on node:fs",
    no_args_is_help=True,
)

display = Display()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        display.console.print(f"afs v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route afs debug logging to the console when verbose."""
    if not verbose:
        return
    logger = logging.getLogger("afs")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=display.console, show_path=False))


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log filesystem operations")
    ] = False,
) -> None:
    """Filesystem utilities modeled on node:fs."""
    _configure_logging(verbose)


@contextmanager
def _exit_on_error() -> Iterator[None]:
    """Report an FsError and exit with status 1."""
    try:
        yield
    except FsError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e


# ============================================================================
# File Commands
# ============================================================================


@app.command("read")
def read(
    path: Annotated[str, typer.Argument(help="File to read")],
    _context=None,
) -> None:
    """Print the content of a file."""
    ctx = _context or create_context()
    with _exit_on_error():
        content = ctx.filesystem.read_text(path)
    display.show_text(content)


@app.command("write")
def write(
    path: Annotated[str, typer.Argument(help="File to write")],
    content: Annotated[str, typer.Argument(help="Text to write")],
    _context=None,
) -> None:
    """Write text to a file, replacing its content."""
    ctx = _context or create_context()
    with _exit_on_error():
        ctx.filesystem.write_text(path, content)
    display.show_success(f"Wrote {path}")


@app.command("append")
def append(
    path: Annotated[str, typer.Argument(help="File to append to")],
    content: Annotated[str, typer.Argument(help="Text to append")],
    _context=None,
) -> None:
    """Append text to a file."""
    ctx = _context or create_context()
    with _exit_on_error():
        ctx.filesystem.append_text(path, content)
    display.show_success(f"Appended to {path}")


@app.command("touch")
def touch(
    path: Annotated[str, typer.Argument(help="File to create")],
    _context=None,
) -> None:
    """Create an empty file and any missing parent directories."""
    ctx = _context or create_context()
    with _exit_on_error():
        ctx.filesystem.touch(path)
    display.show_success(f"Created {path}")


@app.command("rm")
def rm(
    path: Annotated[str, typer.Argument(help="File to remove")],
    _context=None,
) -> None:
    """Remove a file."""
    ctx = _context or create_context()
    with _exit_on_error():
        ctx.filesystem.unlink(path)
    display.show_success(f"Removed {path}")


# ============================================================================
# Directory Commands
# ============================================================================


@app.command("mkdir")
def mkdir(
    path: Annotated[str, typer.Argument(help="Directory to create")],
    parents: Annotated[
        bool, typer.Option("--parents", "-p", help="Create missing parent directories")
    ] = False,
    _context=None,
) -> None:
    """Create a directory."""
    ctx = _context or create_context()
    with _exit_on_error():
        ctx.filesystem.mkdir(path, parents=parents)
    display.show_success(f"Created directory {path}")


@app.command("rmdir")
def rmdir(
    path: Annotated[str, typer.Argument(help="Directory to remove")],
    recursive: Annotated[
        bool, typer.Option("--recursive", "-r", help="Remove contents as well")
    ] = False,
    _context=None,
) -> None:
    """Remove a directory."""
    ctx = _context or create_context()
    with _exit_on_error():
        ctx.filesystem.rmdir(path, recursive=recursive)
    display.show_success(f"Removed directory {path}")


@app.command("ls")
def ls(
    path: Annotated[str, typer.Argument(help="Directory to list")] = ".",
    _context=None,
) -> None:
    """List directory entries."""
    ctx = _context or create_context()
    with _exit_on_error():
        names = ctx.filesystem.listdir(path)
    display.show_listing(path, names)


# ============================================================================
# Metadata Commands
# ============================================================================


@app.command("stat")
def stat(
    path: Annotated[str, typer.Argument(help="Path to inspect")],
    _context=None,
) -> None:
    """Show metadata for a path."""
    ctx = _context or create_context()
    with _exit_on_error():
        result = ctx.filesystem.stat(path)
    display.show_metadata(path, Metadata.from_stat(result))


@app.command("size")
def size(
    path: Annotated[str, typer.Argument(help="File to measure")],
    no_follow: Annotated[
        bool, typer.Option("--no-follow", help="Report a symlink's own size")
    ] = False,
    human: Annotated[bool, typer.Option("--human", "-h", help="Human-readable size")] = False,
    _context=None,
) -> None:
    """Print the size of a file in bytes."""
    ctx = _context or create_context()
    with _exit_on_error():
        total = ctx.filesystem.file_size(path, follow_symlinks=not no_follow)
    display.show_value(format_size(total) if human else total)


@app.command("du")
def du(
    path: Annotated[str, typer.Argument(help="Directory to measure")] = ".",
    human: Annotated[bool, typer.Option("--human", "-h", help="Human-readable size")] = False,
    _context=None,
) -> None:
    """Print the total size of the files below a directory."""
    ctx = _context or create_context()
    with _exit_on_error():
        total = ctx.filesystem.dir_size(path)
    display.show_value(format_size(total) if human else total)


@app.command("df")
def df(
    path: Annotated[str | None, typer.Argument(help="Path on the volume")] = None,
) -> None:
    """Show disk usage of the current (or given) volume."""
    with _exit_on_error():
        usage = disk_usage_info_sync(path)
    display.show_disk_usage(usage)


@app.command("hash")
def hash_(
    path: Annotated[str, typer.Argument(help="File to hash")],
    _context=None,
) -> None:
    """Print the SHA-256 digest of a file."""
    ctx = _context or create_context()
    with _exit_on_error():
        digest = ctx.filesystem.hash(path)
    display.show_value(f"{digest}  {path}")


@app.command("json")
def json_(
    path: Annotated[str, typer.Argument(help="JSON file to pretty-print")],
) -> None:
    """Validate and pretty-print a JSON file."""
    with _exit_on_error():
        data = read_json_sync(path)
    display.console.print_json(data=data)


# ============================================================================
# System Commands
# ============================================================================


@app.command("which")
def which_(
    command: Annotated[str, typer.Argument(help="Command to locate")],
) -> None:
    """Locate a command on PATH."""
    with _exit_on_error():
        location = which(command)
    display.show_value(location)


@app.command("chmod")
def chmod(
    mode: Annotated[str, typer.Argument(help="Octal (755) or symbolic (u+x) mode")],
    path: Annotated[str, typer.Argument(help="Target path")],
) -> None:
    """Change permissions of a path."""
    with _exit_on_error():
        chmod_sync(mode, path)
    display.show_success(f"Changed mode of {path} to {mode}")


@app.command("ln")
def ln(
    target: Annotated[str, typer.Argument(help="Link target")],
    link: Annotated[str, typer.Argument(help="Link path to create")],
) -> None:
    """Create a symbolic link."""
    with _exit_on_error():
        soft_link(target, link)
    display.show_success(f"Linked {link} -> {target}")


@app.command("tempdir")
def tempdir() -> None:
    """Create a temporary directory and print its path."""
    with _exit_on_error():
        path = mktempdir_sync()
    display.show_value(path)


@app.command("tempfile")
def tempfile(
    ext: Annotated[str, typer.Option("--ext", "-e", help="File extension, e.g. .txt")] = "",
) -> None:
    """Create a temporary file and print its path."""
    with _exit_on_error():
        path = mktempfile_sync(ext)
    display.show_value(path)


# ============================================================================
# Path Commands
# ============================================================================


@app.command("resolve")
def resolve_(
    base: Annotated[str, typer.Argument(help="Base directory")],
    path: Annotated[str, typer.Argument(help="Path to resolve against base")],
) -> None:
    """Resolve a path against a base without touching the filesystem."""
    with _exit_on_error():
        resolved = resolve(base, path)
    display.show_value(resolved)


@app.command("normalize")
def normalize(
    path: Annotated[str, typer.Argument(help="Path to normalize")],
) -> None:
    """Convert backslash separators to forward slashes."""
    display.show_value(normalize_path(path))


@app.command("basename")
def basename_(
    path: Annotated[str, typer.Argument(help="Path")],
) -> None:
    """Print the final component of a path."""
    with _exit_on_error():
        name = basename(path)
    display.show_value(name)


@app.command("dirname")
def dirname_(
    path: Annotated[str, typer.Argument(help="Path")],
) -> None:
    """Print a path without its final component."""
    with _exit_on_error():
        parent = dirname(path)
    display.show_value(parent)


@app.command("realpath")
def realpath(
    path: Annotated[str, typer.Argument(help="Existing path")],
) -> None:
    """Print the canonical absolute path."""
    with _exit_on_error():
        canonical = get_filepath(path)
    display.show_value(canonical)


if __name__ == "__main__":
    app()
