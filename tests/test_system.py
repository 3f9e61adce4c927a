"""Tests for command lookup, permissions, links and temp files."""

from __future__ import annotations

import errno
import os
import stat
import sys
import tempfile
from pathlib import Path

import pytest

from afs import system
from afs.errors import CommandNotFoundError, ErrorKind, FsError

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")


def _make_executable(path: Path) -> Path:
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(0o755)
    return path


class TestWhich:
    """Tests for which."""

    @posix_only
    def test_finds_executable_on_custom_path(self, tmp_path: Path) -> None:
        """Test a command is located in an explicit search path."""
        tool = _make_executable(tmp_path / "mytool")

        assert system.which("mytool", path=str(tmp_path)) == str(tool)

    @posix_only
    def test_first_match_wins(self, tmp_path: Path) -> None:
        """Test directories are searched in order."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        _make_executable(second / "tool")
        expected = _make_executable(first / "tool")

        result = system.which("tool", path=os.pathsep.join([str(first), str(second)]))

        assert result == str(expected)

    @posix_only
    def test_skips_non_executable(self, tmp_path: Path) -> None:
        """Test a plain file with the right name is not a match."""
        (tmp_path / "notexec").write_text("data")

        with pytest.raises(CommandNotFoundError):
            system.which("notexec", path=str(tmp_path))

    def test_skips_directories(self, tmp_path: Path) -> None:
        """Test a directory with the command's name is not a match."""
        (tmp_path / "tool").mkdir()

        with pytest.raises(CommandNotFoundError):
            system.which("tool", path=str(tmp_path))

    def test_not_found(self) -> None:
        """Test a missing command raises NOT_FOUND_IN_PATH."""
        with pytest.raises(CommandNotFoundError) as exc_info:
            system.which("definitely-nonexistent-command-xyz")

        assert exc_info.value.kind is ErrorKind.NOT_FOUND_IN_PATH
        assert exc_info.value.command == "definitely-nonexistent-command-xyz"
        assert isinstance(exc_info.value, FsError)

    @posix_only
    def test_uses_path_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the PATH variable is used by default."""
        tool = _make_executable(tmp_path / "envtool")
        monkeypatch.setenv("PATH", str(tmp_path))

        assert system.which("envtool") == str(tool)

    @posix_only
    def test_command_with_directory(self, tmp_path: Path) -> None:
        """Test a command containing a separator is checked directly."""
        tool = _make_executable(tmp_path / "direct")

        assert system.which(str(tool), path="") == str(tool)


class TestParseMode:
    """Tests for parse_mode."""

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [("755", 0o755), ("0644", 0o644), ("0o600", 0o600), ("4755", 0o4755), (0o700, 0o700)],
    )
    def test_octal(self, mode: str | int, expected: int) -> None:
        """Test octal strings and integers."""
        assert system.parse_mode(mode) == expected

    @pytest.mark.parametrize(
        ("mode", "current", "expected"),
        [
            ("u+x", 0o644, 0o744),
            ("go-w", 0o666, 0o644),
            ("a=r", 0o755, 0o444),
            ("+x", 0o644, 0o755),
            ("u=rwx,g=rx,o=", 0o000, 0o750),
            ("ug+w", 0o444, 0o664),
        ],
    )
    def test_symbolic(self, mode: str, current: int, expected: int) -> None:
        """Test symbolic clauses applied to current bits."""
        assert system.parse_mode(mode, current) == expected

    def test_symbolic_ignores_file_type_bits(self) -> None:
        """Test only permission bits of current are kept."""
        assert system.parse_mode("u+x", stat.S_IFREG | 0o644) == 0o744

    @pytest.mark.parametrize("mode", ["", "999", "rwx", "u+z", "0o8"])
    def test_invalid(self, mode: str) -> None:
        """Test unparseable modes raise INVALID_ARGUMENT."""
        with pytest.raises(FsError) as exc_info:
            system.parse_mode(mode)

        assert exc_info.value.kind is ErrorKind.INVALID_ARGUMENT


@posix_only
class TestChmod:
    """Tests for chmod and chmod_sync."""

    def test_octal_mode(self, tmp_path: Path) -> None:
        """Test '755' sets rwxr-xr-x."""
        path = tmp_path / "script.sh"
        path.write_text("")

        system.chmod_sync("755", path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o755

    def test_read_only(self, tmp_path: Path) -> None:
        """Test '444' makes the file read-only."""
        path = tmp_path / "readonly.txt"
        path.write_text("")

        system.chmod_sync("444", path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o444
        path.chmod(0o644)

    def test_symbolic_mode(self, tmp_path: Path) -> None:
        """Test a symbolic expression is applied to the current mode."""
        path = tmp_path / "file"
        path.write_text("")
        path.chmod(0o644)

        system.chmod_sync("u+x", path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o744

    @pytest.mark.asyncio
    async def test_async(self, tmp_path: Path) -> None:
        """Test the async variant."""
        path = tmp_path / "file"
        path.write_text("")

        await system.chmod("600", path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_invalid_mode_leaves_file(self, tmp_path: Path) -> None:
        """Test an invalid mode raises without changing permissions."""
        path = tmp_path / "file"
        path.write_text("")
        path.chmod(0o644)

        with pytest.raises(FsError) as exc_info:
            system.chmod_sync("not-a-mode", path)

        assert exc_info.value.kind is ErrorKind.INVALID_ARGUMENT
        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_missing_path(self, tmp_path: Path) -> None:
        """Test a missing path raises NOT_FOUND."""
        with pytest.raises(FsError) as exc_info:
            system.chmod_sync("644", tmp_path / "missing")

        assert exc_info.value.kind is ErrorKind.NOT_FOUND


@posix_only
class TestSoftLink:
    """Tests for soft_link."""

    def test_file_link(self, tmp_path: Path) -> None:
        """Test a link to a file reads through to its content."""
        target = tmp_path / "target.txt"
        target.write_text("through the link")
        link = tmp_path / "link.txt"

        system.soft_link(target, link)

        assert link.is_symlink()
        assert link.read_text() == "through the link"

    def test_directory_link(self, tmp_path: Path) -> None:
        """Test a link to a directory."""
        target = tmp_path / "dir"
        target.mkdir()
        link = tmp_path / "dirlink"

        system.soft_link(target, link)

        assert link.is_symlink()
        assert link.is_dir()

    def test_dangling_link_allowed(self, tmp_path: Path) -> None:
        """Test the target need not exist."""
        link = tmp_path / "dangling"

        system.soft_link(tmp_path / "missing", link)

        assert link.is_symlink()
        assert not link.exists()

    def test_existing_link_path_raises(self, tmp_path: Path) -> None:
        """Test an occupied link path raises ALREADY_EXISTS."""
        occupied = tmp_path / "occupied"
        occupied.write_text("x")

        with pytest.raises(FsError) as exc_info:
            system.soft_link(tmp_path / "target", occupied)

        assert exc_info.value.kind is ErrorKind.ALREADY_EXISTS


class TestTempResources:
    """Tests for temp directories and files."""

    def test_mktempdir_sync(self) -> None:
        """Test a new empty directory is created with the configured prefix."""
        path = Path(system.mktempdir_sync())
        try:
            assert path.is_dir()
            assert list(path.iterdir()) == []
            assert path.name.startswith("afs-")
        finally:
            path.rmdir()

    def test_mktempdir_unique(self) -> None:
        """Test consecutive calls return distinct directories."""
        first = system.mktempdir_sync()
        second = system.mktempdir_sync()
        try:
            assert first != second
        finally:
            os.rmdir(first)
            os.rmdir(second)

    @pytest.mark.asyncio
    async def test_mktempdir_async(self) -> None:
        """Test the async variant and its alias."""
        first = Path(await system.mktempdir())
        second = Path(await system.create_tempdir())
        try:
            assert first.is_dir()
            assert second.is_dir()
            assert first != second
        finally:
            first.rmdir()
            second.rmdir()

    def test_mktempfile_sync(self) -> None:
        """Test an empty file with the extension is created in its own directory."""
        path = Path(system.mktempfile_sync(".txt"))
        try:
            assert path.is_file()
            assert path.suffix == ".txt"
            assert path.read_bytes() == b""
            assert list(path.parent.iterdir()) == [path]
        finally:
            path.unlink()
            path.parent.rmdir()

    @pytest.mark.asyncio
    async def test_mktempfile_async(self) -> None:
        """Test the async variant and its alias."""
        first = Path(await system.mktempfile(".json"))
        second = Path(await system.create_tempfile())
        try:
            assert first.is_file()
            assert first.suffix == ".json"
            assert second.is_file()
            assert first.parent != second.parent
        finally:
            for path in (first, second):
                path.unlink()
                path.parent.rmdir()

    def test_prefix_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test AFS_TEMP_PREFIX changes the directory name prefix."""
        monkeypatch.setenv("AFS_TEMP_PREFIX", "custom-")

        path = Path(system.mktempdir_sync())
        try:
            assert path.name.startswith("custom-")
        finally:
            path.rmdir()

    def test_temporary_directory_cleans_up(self) -> None:
        """Test the directory and its contents are removed on exit."""
        with system.temporary_directory() as directory:
            (Path(directory) / "nested").mkdir()
            (Path(directory) / "nested" / "file").write_text("x")

        assert not Path(directory).exists()

    def test_temporary_file_cleans_up(self) -> None:
        """Test the file and its directory are removed on exit."""
        with system.temporary_file(".log") as path:
            assert path.endswith(".log")
            Path(path).write_text("data")

        assert not Path(path).exists()
        assert not Path(path).parent.exists()

    def test_temporary_directory_cleans_up_on_error(self) -> None:
        """Test cleanup also runs when the block raises."""
        with pytest.raises(RuntimeError):
            with system.temporary_directory() as directory:
                raise RuntimeError("boom")

        assert not Path(directory).exists()


class TestTempFileFailure:
    """Tests for cleanup when the temp file cannot be created."""

    @pytest.fixture
    def failing_mkstemp(self, monkeypatch: pytest.MonkeyPatch) -> list[str]:
        """Make file creation fail and record the directory it was asked for."""
        requested: list[str] = []

        def mkstemp(suffix: str = "", prefix: str = "", dir: str | None = None) -> tuple[int, str]:
            requested.append(dir or "")
            raise PermissionError(errno.EACCES, "Permission denied", dir)

        monkeypatch.setattr(tempfile, "mkstemp", mkstemp)
        return requested

    def test_directory_removed_on_failure(self, failing_mkstemp: list[str]) -> None:
        """Test the new directory is removed when the file cannot be created."""
        with pytest.raises(FsError) as exc_info:
            system.mktempfile_sync(".txt")

        assert exc_info.value.kind is ErrorKind.PERMISSION_DENIED
        assert len(failing_mkstemp) == 1
        assert not Path(failing_mkstemp[0]).exists()

    @pytest.mark.asyncio
    async def test_directory_removed_on_failure_async(self, failing_mkstemp: list[str]) -> None:
        """Test the async variant also removes the new directory."""
        with pytest.raises(FsError):
            await system.mktempfile(".txt")

        assert len(failing_mkstemp) == 1
        assert not Path(failing_mkstemp[0]).exists()
