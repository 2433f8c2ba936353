from __future__ import annotations

"""
Manifest Tree Builder.

Folds flat FileEntry records into a nested Directory tree and splices
subtrees together under an explicit conflict policy. All walks use an
explicit stack so arbitrarily deep installs never hit the recursion limit.
"""

import logging
from typing import Iterable, Iterator, List, Tuple

from bsmanifest.domain.constants import CONFLICT_POLICIES, POLICY_ERROR, POLICY_OVERWRITE
from bsmanifest.domain.tree_models import (
    Directory,
    FileEntry,
    Leaf,
    TreeConflictError,
    TreeNode,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(entries: Iterable[FileEntry]) -> Directory:
    """
    Aggregate file entries into a Directory keyed by path segment.

    Each entry contributes exactly one Leaf. Intermediate folders are
    created on demand.

    Args:
        entries: Flat scanned entries.

    Returns:
        Directory: Root of the aggregated tree.

    Raises:
        TreeConflictError: If a path is needed as a folder where a file
            already sits, or as a file where a folder already sits.
    """
    root = Directory()

    for entry in entries:
        if not entry.parts:
            raise TreeConflictError("", "Cannot place an entry with an empty path")

        level = root
        for depth, segment in enumerate(entry.parts[:-1]):
            node = level.children.get(segment)
            if node is None:
                node = Directory()
                level.children[segment] = node
            elif isinstance(node, Leaf):
                raise TreeConflictError(
                    "/".join(entry.parts[:depth + 1]),
                    f"'{entry.rel_path}' needs a folder where a file is already recorded",
                )
            level = node

        name = entry.parts[-1]
        if isinstance(level.children.get(name), Directory):
            raise TreeConflictError(
                entry.rel_path,
                f"'{entry.rel_path}' is already recorded as a folder",
            )
        level.children[name] = Leaf(entry.digest)

    return root


def splice(target: Directory, source: Directory, policy: str = POLICY_ERROR) -> Directory:
    """
    Copy every top-level key of 'source' onto 'target'.

    Args:
        target: Tree receiving the keys (mutated and returned).
        source: Tree whose top-level children are copied.
        policy: 'error' to reject colliding keys, 'overwrite' to let
            'source' win.

    Returns:
        Directory: The updated target.

    Raises:
        TreeConflictError: On a collision under the 'error' policy.
        ValueError: On an unknown policy.
    """
    if policy not in CONFLICT_POLICIES:
        raise ValueError(f"Unknown conflict policy '{policy}'. Expected one of {CONFLICT_POLICIES}.")

    collisions = [name for name in source.children if name in target.children]
    if collisions and policy == POLICY_ERROR:
        # Reject before mutating so the target is never left half-merged
        name = collisions[0]
        raise TreeConflictError(name, f"Top-level entry '{name}' collides with an existing key")

    for name in collisions:
        logger.warning(f"Overwriting top-level entry '{name}' during merge ({POLICY_OVERWRITE})")
    target.children.update(source.children)

    return target


def iter_leaves(root: Directory) -> Iterator[Tuple[str, str]]:
    """
    Yield (path, digest) for every leaf in pre-order, children sorted by name.
    """
    stack: List[Tuple[str, TreeNode]] = [("", root)]
    while stack:
        path, node = stack.pop()
        if isinstance(node, Leaf):
            yield path, node.digest
            continue

        # Reverse so that popping restores ascending order
        for name in sorted(node.children, reverse=True):
            stack.append((f"{path}/{name}" if path else name, node.children[name]))


def count_directories(root: Directory) -> int:
    """Count the folders below 'root' (the root itself excluded)."""
    count = 0
    stack: List[Directory] = [root]
    while stack:
        node = stack.pop()
        for child in node.children.values():
            if isinstance(child, Directory):
                count += 1
                stack.append(child)
    return count
