from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A fake game install laid out like a real Beat Saber directory.
"""

import hashlib
import os
import sys
from pathlib import Path
from typing import Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def sha1_of(content: bytes) -> str:
    return hashlib.sha1(content).hexdigest()


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    """
    Create a fake install directory.

    Structure:
    /Beat Saber
      BeatSaberVersion.txt
      Beat Saber.exe
      winhttp.dll
      LICENSE                      (no extension, ignored)
      /Plugins
        SongCore.dll
        /Sub
          Helper.dll
      /Beat Saber_Data
        /Managed
          Assembly-CSharp.dll
          0Harmony.dll
          UnityEngine.dll          (not allow-listed)
        /Plugins
          /x86_64
            steam_api64.dll
    """
    root = tmp_path / "Beat Saber"
    (root / "Plugins" / "Sub").mkdir(parents=True)
    (root / "Beat Saber_Data" / "Managed").mkdir(parents=True)
    (root / "Beat Saber_Data" / "Plugins" / "x86_64").mkdir(parents=True)

    (root / "BeatSaberVersion.txt").write_bytes(b"1.29.1")
    (root / "Beat Saber.exe").write_bytes(b"exe")
    (root / "winhttp.dll").write_bytes(b"proxy")
    (root / "LICENSE").write_bytes(b"license")

    (root / "Plugins" / "SongCore.dll").write_bytes(b"songcore")
    (root / "Plugins" / "Sub" / "Helper.dll").write_bytes(b"helper")

    managed = root / "Beat Saber_Data" / "Managed"
    (managed / "Assembly-CSharp.dll").write_bytes(b"game")
    (managed / "0Harmony.dll").write_bytes(b"harmony")
    (managed / "UnityEngine.dll").write_bytes(b"unity")

    (root / "Beat Saber_Data" / "Plugins" / "x86_64" / "steam_api64.dll").write_bytes(b"steam")

    return root


@pytest.fixture
def install_digests() -> Dict[str, str]:
    """Expected digests of the fake install, keyed by file name."""
    return {
        "BeatSaberVersion.txt": sha1_of(b"1.29.1"),
        "Beat Saber.exe": sha1_of(b"exe"),
        "winhttp.dll": sha1_of(b"proxy"),
        "SongCore.dll": sha1_of(b"songcore"),
        "Helper.dll": sha1_of(b"helper"),
        "Assembly-CSharp.dll": sha1_of(b"game"),
        "0Harmony.dll": sha1_of(b"harmony"),
        "steam_api64.dll": sha1_of(b"steam"),
    }
