from __future__ import annotations

"""
Manifest Tree Data Models.

Provides the tagged node types used to aggregate hashed files into a
hierarchical manifest, plus the flat entry and render records that flow
into and out of the tree.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

# -----------------------------------------------------------------------------
# FLAT RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileEntry:
    """
    A single scanned file and its content digest.

    Attributes:
        parts: Path segments relative to the scanned directory.
        digest: Hex content digest of the file.
    """
    parts: Tuple[str, ...]
    digest: str

    @classmethod
    def from_relative(cls, rel_path: str, digest: str) -> "FileEntry":
        """Build an entry from a forward-slash relative path."""
        return cls(parts=tuple(p for p in rel_path.split("/") if p), digest=digest)

    @property
    def rel_path(self) -> str:
        return "/".join(self.parts)

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Leaf:
    """
    Represents a file in the manifest tree.

    Attributes:
        digest: Hex content digest of the file.
    """
    digest: str


@dataclass
class Directory:
    """
    Represents a folder in the manifest tree.

    Attributes:
        children: Mapping of segment name to child node.
    """
    children: Dict[str, "TreeNode"] = field(default_factory=dict)

    def to_mapping(self) -> Dict[str, Any]:
        """
        Convert the subtree into plain nested dictionaries.

        Leaves become their digest string. Used for JSON output.
        """
        out: Dict[str, Any] = {}
        stack = [(self, out)]
        while stack:
            node, target = stack.pop()
            for name, child in node.children.items():
                if isinstance(child, Directory):
                    nested: Dict[str, Any] = {}
                    target[name] = nested
                    stack.append((child, nested))
                else:
                    target[name] = child.digest
        return out


TreeNode = Union[Leaf, Directory]

# -----------------------------------------------------------------------------
# REPORTING RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RenderLine:
    """
    One display row produced by walking the tree.

    Attributes:
        prefix: Connector glyphs preceding the name.
        name: Segment name of the node.
        digest: File digest, or None for directory rows.
    """
    prefix: str
    name: str
    digest: Optional[str] = None


@dataclass(frozen=True)
class Report:
    """A titled manifest tree ready for rendering."""
    title: str
    root: Directory

# -----------------------------------------------------------------------------
# ERRORS
# -----------------------------------------------------------------------------

class TreeConflictError(ValueError):
    """
    Raised when one path is addressed both as a file and as a folder,
    or when merging subtrees collides on a key.
    """

    def __init__(self, path: str, message: str = ""):
        self.path = path
        super().__init__(message or f"Conflicting tree entry at '{path}'")
