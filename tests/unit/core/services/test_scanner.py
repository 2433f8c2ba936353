from __future__ import annotations

"""
Unit tests for the File Discovery Service.

Verifies the extension-style name rule, recursion control, allow-list
filtering, relative path normalization and fail-fast error handling.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from bsmanifest.core.services.scanner import scan_files


@pytest.fixture
def scan_root(tmp_path: Path) -> Path:
    """Create a folder mixing files, extensionless names and dotted folders."""
    root = tmp_path / "scan"
    (root / "nested" / "deeper").mkdir(parents=True)
    (root / "folder.with.dots").mkdir()
    (root / ".hidden_dir").mkdir()

    (root / "top.dll").write_text("x", encoding="utf-8")
    (root / "README").write_text("x", encoding="utf-8")
    (root / ".env").write_text("x", encoding="utf-8")
    (root / "nested" / "inner.json").write_text("x", encoding="utf-8")
    (root / "nested" / "deeper" / "leaf.txt").write_text("x", encoding="utf-8")
    (root / "folder.with.dots" / "child.cfg").write_text("x", encoding="utf-8")
    (root / ".hidden_dir" / "secret.dll").write_text("x", encoding="utf-8")
    return root


def test_recursive_scan_returns_relative_posix_paths(scan_root: Path) -> None:
    files = scan_files(str(scan_root))

    assert files == [
        "folder.with.dots/child.cfg",
        "nested/deeper/leaf.txt",
        "nested/inner.json",
        "top.dll",
    ]


def test_extensionless_and_hidden_names_are_excluded(scan_root: Path) -> None:
    files = scan_files(str(scan_root))

    assert "README" not in files
    assert ".env" not in files
    assert not any("secret.dll" in f for f in files)


def test_directories_with_dots_are_not_reported_as_files(scan_root: Path) -> None:
    files = scan_files(str(scan_root))

    assert "folder.with.dots" not in files


def test_non_recursive_scan_returns_single_segment_paths(scan_root: Path) -> None:
    files = scan_files(str(scan_root), recursive=False)

    assert files == ["top.dll"]
    assert all("/" not in f for f in files)


def test_name_filter_restricts_to_allow_list(scan_root: Path) -> None:
    files = scan_files(str(scan_root), name_filter={"leaf.txt", "top.dll", "missing.dll"})

    assert files == ["nested/deeper/leaf.txt", "top.dll"]
    assert all(f.rsplit("/", 1)[-1] in {"leaf.txt", "top.dll"} for f in files)


def test_empty_name_filter_excludes_everything(scan_root: Path) -> None:
    assert scan_files(str(scan_root), name_filter=set()) == []


def test_missing_directory_yields_nothing(tmp_path: Path) -> None:
    assert scan_files(str(tmp_path / "does_not_exist")) == []


def test_traversal_errors_propagate(scan_root: Path) -> None:
    """An unreadable subfolder aborts the scan instead of being skipped."""
    real_scandir = os.scandir

    def failing_scandir(path):
        if str(path).endswith("nested"):
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    with patch("os.scandir", side_effect=failing_scandir):
        with pytest.raises(PermissionError):
            scan_files(str(scan_root))
