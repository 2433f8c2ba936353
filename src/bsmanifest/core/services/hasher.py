from __future__ import annotations

"""
Content Digest Service.

Computes the fixed-length SHA-1 fingerprints that identify file contents in
the manifest, and fans hashing out over a thread pool when one is supplied.
"""

import hashlib
import logging
import os
from concurrent.futures import Executor
from typing import List, Optional, Sequence

from bsmanifest.domain.tree_models import FileEntry
from bsmanifest.infra import fs

logger = logging.getLogger(__name__)


def compute_digest(data: bytes) -> str:
    """Return the 40-character hex SHA-1 digest of 'data'."""
    return hashlib.sha1(data).hexdigest()


def hash_file(file_path: str) -> str:
    """Read a file and return its content digest."""
    return compute_digest(fs.read_bytes(file_path))


def hash_entries(
        directory: str,
        rel_paths: Sequence[str],
        executor: Optional[Executor] = None,
) -> List[FileEntry]:
    """
    Hash every relative path under 'directory' into FileEntry records.

    With an executor, files are read and hashed concurrently. Results keep
    the order of 'rel_paths'; the first read failure propagates.

    Args:
        directory: Base directory the paths are relative to.
        rel_paths: Forward-slash relative file paths.
        executor: Optional pool used to hash files in parallel.

    Returns:
        List[FileEntry]: One entry per input path.
    """
    abs_paths = [os.path.join(directory, *p.split("/")) for p in rel_paths]

    if executor is None:
        digests = [hash_file(p) for p in abs_paths]
    else:
        # map() re-raises the first failing call when results are consumed
        digests = list(executor.map(hash_file, abs_paths))

    logger.debug(f"Hashed {len(digests)} files under {directory}")
    return [FileEntry.from_relative(rel, d) for rel, d in zip(rel_paths, digests)]
