from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the fixed install topology scanned by the manifest generator,
the digest geometry used by the renderer, and configuration versioning.
"""

from typing import FrozenSet, Tuple

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# INSTALL TOPOLOGY
# -----------------------------------------------------------------------------

DEFAULT_APP_NAME = "Beat Saber"
DATA_DIR_SUFFIX = "_Data"

PLUGINS_DIR = "Plugins"
MANAGED_DIR = "Managed"

VERSION_FILE = "BeatSaberVersion.txt"
VERSION_MISSING = "Version Missing"

# Only the game assemblies that mods patch are tracked under Managed/
MANAGED_ALLOW_LIST: FrozenSet[str] = frozenset({
    "0Harmony.dll",
    "Assembly-CSharp.dll",
    "Assembly-CSharp-firstpass.dll",
})

# -----------------------------------------------------------------------------
# DIGEST & RENDERING
# -----------------------------------------------------------------------------

HASH_LEN = 40

CONNECTOR_MID = "├── "
CONNECTOR_LAST = "└── "
INDENT_MID = "│   "
INDENT_LAST = "    "

# -----------------------------------------------------------------------------
# CONFLICT RESOLUTION
# -----------------------------------------------------------------------------

POLICY_ERROR = "error"
POLICY_OVERWRITE = "overwrite"
CONFLICT_POLICIES: Tuple[str, ...] = (POLICY_ERROR, POLICY_OVERWRITE)


def data_dir_name(app_name: str) -> str:
    """Return the Unity data folder name for an app, e.g. 'Beat Saber_Data'."""
    return f"{app_name}{DATA_DIR_SUFFIX}"
