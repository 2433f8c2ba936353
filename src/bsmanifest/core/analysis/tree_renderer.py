from __future__ import annotations

"""
Manifest Tree Renderer.

Converts a Directory tree into the aligned text manifest: a blank-padded
title header followed by one row per node, each row starting with the
file digest (or blanks for folders) and ending with the tree-drawn name.
"""

from typing import List, Tuple

from bsmanifest.domain.constants import (
    CONNECTOR_LAST,
    CONNECTOR_MID,
    HASH_LEN,
    INDENT_LAST,
    INDENT_MID,
)
from bsmanifest.domain.tree_models import Directory, Leaf, RenderLine, TreeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_report(title: str, root: Directory, hash_width: int = HASH_LEN) -> str:
    """
    Render a titled tree into the final manifest text.

    Args:
        title: Header text, usually the install version.
        root: Tree to render.
        hash_width: Digest column width; rows reserve one extra separator column.

    Returns:
        str: Newline-joined report without a trailing newline.
    """
    header = " " * (hash_width + 1) + title
    return "\n".join([header] + render_lines(root, hash_width))


def render_lines(root: Directory, hash_width: int = HASH_LEN) -> List[str]:
    """Format every node of 'root' as an aligned '<digest> <glyphs><name>' row."""
    return [
        f"{(line.digest or ''):<{hash_width}} {line.prefix}{line.name}"
        for line in walk_tree(root)
    ]


def walk_tree(root: Directory) -> List[RenderLine]:
    """
    Flatten a tree into display records in depth-first pre-order.

    Children are ordered by name. Uses standard connectors (├──, └──) and
    carries '│   ' under non-final siblings so nested rows line up.

    Args:
        root: Tree to flatten. The root itself produces no row.

    Returns:
        List[RenderLine]: One record per file or folder.
    """
    lines: List[RenderLine] = []
    # (indent inherited from ancestors, name, node, is last sibling)
    stack: List[Tuple[str, str, TreeNode, bool]] = _children_of(root, "")

    while stack:
        indent, name, node, is_last = stack.pop()
        connector = CONNECTOR_LAST if is_last else CONNECTOR_MID

        if isinstance(node, Leaf):
            lines.append(RenderLine(prefix=indent + connector, name=name, digest=node.digest))
            continue

        lines.append(RenderLine(prefix=indent + connector, name=name))
        child_indent = indent + (INDENT_LAST if is_last else INDENT_MID)
        stack.extend(_children_of(node, child_indent))

    return lines

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _children_of(node: Directory, indent: str) -> List[Tuple[str, str, TreeNode, bool]]:
    """Stack frames for a folder's children, reversed so pops come out sorted."""
    names = sorted(node.children)
    total = len(names)
    frames = [
        (indent, name, node.children[name], i == total - 1)
        for i, name in enumerate(names)
    ]
    frames.reverse()
    return frames
