from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure and config persistence.

Validates path normalization, data directory resolution, read/write
primitives and the JSON configuration round trip.
"""

import os
from pathlib import Path
from unittest.mock import patch

from bsmanifest.domain import config as config_module
from bsmanifest.infra import fs

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_unix(tmp_path: Path) -> None:
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=str(tmp_path)):
            path = fs.get_user_data_dir()

    assert path == os.path.join(str(tmp_path), ".bsmanifest")
    assert os.path.isdir(path)


def test_normalize_path_expansion(tmp_path: Path) -> None:
    with patch.dict(os.environ, {"BS_TEST_DIR": str(tmp_path)}):
        result = fs.normalize_path("$BS_TEST_DIR/game", "/fallback")

    assert result == os.path.join(str(tmp_path), "game")


def test_normalize_path_blank_uses_fallback(tmp_path: Path) -> None:
    assert fs.normalize_path("   ", str(tmp_path)) == str(tmp_path)
    assert fs.normalize_path(None, str(tmp_path)) == str(tmp_path)


def test_to_posix_relative(tmp_path: Path) -> None:
    nested = tmp_path / "a" / "b.txt"

    assert fs.to_posix_relative(str(nested), str(tmp_path)) == "a/b.txt"

# -----------------------------------------------------------------------------
# READ / WRITE PRIMITIVES
# -----------------------------------------------------------------------------

def test_read_text_keeps_raw_newlines(tmp_path: Path) -> None:
    target = tmp_path / "v.txt"
    target.write_bytes(b"1.0\r\n")

    assert fs.read_text(str(target)) == "1.0\r\n"


def test_is_file_distinguishes_directories(tmp_path: Path) -> None:
    (tmp_path / "d.dll").mkdir()
    (tmp_path / "f.dll").write_bytes(b"")

    assert fs.is_file(str(tmp_path / "f.dll")) is True
    assert fs.is_file(str(tmp_path / "d.dll")) is False


def test_write_text_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "out" / "nested" / "report.txt"

    written = fs.write_text(str(target), "hello\n")

    assert written == str(target)
    assert target.read_text(encoding="utf-8") == "hello\n"

# -----------------------------------------------------------------------------
# CONFIG PERSISTENCE
# -----------------------------------------------------------------------------

def test_config_round_trip(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    with patch.object(config_module, "get_config_path", return_value=str(config_path)):
        cfg = config_module.get_default_config()
        cfg["app_name"] = "Other Game"
        cfg["conflict_policy"] = "overwrite"
        config_module.save_config(cfg)

        loaded = config_module.load_config()

    assert loaded["app_name"] == "Other Game"
    assert loaded["conflict_policy"] == "overwrite"


def test_corrupted_config_returns_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json", encoding="utf-8")

    with patch.object(config_module, "get_config_path", return_value=str(config_path)):
        loaded = config_module.load_config()

    assert loaded == config_module.get_default_config()
