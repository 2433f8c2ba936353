from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path normalization, user data directory resolution,
and the read/write primitives used by the manifest scanner and the report
writer. Acts as an abstraction over the 'os' module to ensure uniform
behavior across Windows and Unix-like systems.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "BSManifest"
UNIX_APP_DIR_NAME = ".bsmanifest"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/BSManifest
    - Linux/Mac: ~/.bsmanifest

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def to_posix_relative(path: str, start: str) -> str:
    """Express 'path' relative to 'start' using '/' separators."""
    return os.path.relpath(path, start).replace(os.sep, "/")

# -----------------------------------------------------------------------------
# READ PRIMITIVES
# -----------------------------------------------------------------------------

def exists(path: str) -> bool:
    return os.path.exists(path)


def is_file(path: str) -> bool:
    """True for regular files (symlinks to files included)."""
    return os.path.isfile(path)


def read_bytes(path: str) -> bytes:
    """Read a whole file as bytes. I/O errors propagate."""
    with open(path, "rb") as f:
        return f.read()


def read_text(path: str) -> str:
    """
    Read a whole file as UTF-8 text without newline translation.

    Undecodable sequences are replaced rather than raised.
    """
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()

# -----------------------------------------------------------------------------
# WRITE PRIMITIVES
# -----------------------------------------------------------------------------

def write_text(path: str, content: str) -> str:
    """
    Persist text to disk, creating parent folders as needed.

    Args:
        path: Target file path.
        content: Text to write.

    Returns:
        str: Absolute path of the written file.
    """
    abs_path = os.path.abspath(path)
    parent = os.path.dirname(abs_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(abs_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)
    return abs_path
