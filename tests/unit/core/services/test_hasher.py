from __future__ import annotations

"""
Unit tests for the Content Digest Service and the version lookup.
"""

import hashlib
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from bsmanifest.core.services.hasher import compute_digest, hash_entries, hash_file
from bsmanifest.core.services.version import read_version
from bsmanifest.domain.constants import HASH_LEN, VERSION_MISSING


def test_compute_digest_is_40_char_sha1():
    digest = compute_digest(b"hello")

    assert digest == hashlib.sha1(b"hello").hexdigest()
    assert len(digest) == HASH_LEN


def test_compute_digest_is_deterministic():
    assert compute_digest(b"same") == compute_digest(b"same")
    assert compute_digest(b"same") != compute_digest(b"other")


def test_hash_file_reads_bytes(tmp_path: Path):
    target = tmp_path / "a.dll"
    target.write_bytes(b"\x00\x01binary")

    assert hash_file(str(target)) == hashlib.sha1(b"\x00\x01binary").hexdigest()


@pytest.mark.parametrize("use_pool", [False, True])
def test_hash_entries_keeps_input_order(tmp_path: Path, use_pool: bool):
    (tmp_path / "sub").mkdir()
    (tmp_path / "b.txt").write_bytes(b"b")
    (tmp_path / "sub" / "a.txt").write_bytes(b"a")

    rel_paths = ["b.txt", "sub/a.txt"]
    if use_pool:
        with ThreadPoolExecutor(max_workers=2) as pool:
            entries = hash_entries(str(tmp_path), rel_paths, executor=pool)
    else:
        entries = hash_entries(str(tmp_path), rel_paths)

    assert [e.rel_path for e in entries] == rel_paths
    assert entries[1].parts == ("sub", "a.txt")
    assert entries[1].digest == hashlib.sha1(b"a").hexdigest()


def test_hash_entries_propagates_read_failure(tmp_path: Path):
    with ThreadPoolExecutor(max_workers=2) as pool:
        with pytest.raises(FileNotFoundError):
            hash_entries(str(tmp_path), ["missing.dll"], executor=pool)


def test_read_version_returns_raw_contents(tmp_path: Path):
    (tmp_path / "BeatSaberVersion.txt").write_bytes(b"1.29.1\n")

    assert read_version(str(tmp_path)) == "1.29.1\n"


def test_read_version_missing_marker(tmp_path: Path):
    assert read_version(str(tmp_path)) == VERSION_MISSING
