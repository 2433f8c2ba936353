from __future__ import annotations

"""
File Discovery Service.

Enumerates the candidate files of one install subdirectory, applying the
extension-style name rule, regular-file check and optional allow-list,
and reports paths relative to the scanned folder.
"""

import logging
import os
from typing import Collection, List, Optional

from bsmanifest.infra import fs

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def scan_files(
        directory: str,
        recursive: bool = True,
        name_filter: Optional[Collection[str]] = None,
) -> List[str]:
    """
    List the files under 'directory' that belong in the manifest.

    Only names carrying an extension-style dot are candidates. Hidden
    entries are neither matched nor descended into. Directories and other
    non-regular entries are skipped, as is any file whose base name is not
    in 'name_filter' when one is given.

    Args:
        directory: Folder to enumerate.
        recursive: Descend into subfolders when True.
        name_filter: Optional allow-list of base file names.

    Returns:
        List[str]: Sorted '/'-separated paths relative to 'directory'.

    Raises:
        OSError: On any traversal or stat failure below an existing folder.
    """
    root_abs = os.path.abspath(directory)
    if not os.path.isdir(root_abs):
        logger.debug(f"Scan target absent, nothing to list: {root_abs}")
        return []

    found: List[str] = []

    for current, dirs, files in os.walk(root_abs, onerror=_raise_walk_error):
        # In-place pruning keeps os.walk out of hidden folders
        dirs[:] = sorted(d for d in dirs if not _is_hidden(d))

        for name in sorted(dirs + files):
            if not _is_candidate(name):
                continue

            full_path = os.path.join(current, name)
            if not fs.is_file(full_path):
                continue
            if name_filter is not None and name not in name_filter:
                continue

            found.append(fs.to_posix_relative(full_path, root_abs))

        if not recursive:
            break

    found.sort()
    logger.debug(f"Scanned {root_abs}: {len(found)} files (recursive={recursive})")
    return found

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _is_candidate(name: str) -> bool:
    """Names like 'x.dll' qualify; 'LICENSE' and '.hidden' do not."""
    return not _is_hidden(name) and "." in name


def _raise_walk_error(error: OSError) -> None:
    raise error
