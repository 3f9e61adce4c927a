"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from afs.config import ENV_PREFIX, reset_settings
from afs.context import AppContext


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from AFS_* variables and the settings cache."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ============================================================================
# Sample Tree Fixtures
# ============================================================================


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a nested directory tree with known file sizes.

    Layout:
        tree/a.txt          (10 bytes)
        tree/b.txt          (20 bytes)
        tree/sub/c.txt      (5 bytes)
        tree/sub/deep/d.bin (7 bytes)
    """
    root = tmp_path / "tree"
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"x" * 10)
    (root / "b.txt").write_bytes(b"y" * 20)
    (root / "sub" / "c.txt").write_bytes(b"z" * 5)
    (root / "sub" / "deep" / "d.bin").write_bytes(b"\x00" * 7)
    return root


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_dir.return_value = False
    fs.read_text.return_value = ""
    return fs


@pytest.fixture
def mock_context(mock_filesystem: MagicMock) -> AppContext:
    """Create an AppContext wired to the mock filesystem."""
    return AppContext(filesystem=mock_filesystem)
