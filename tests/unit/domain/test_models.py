from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies:
1. FileEntry path splitting.
2. Directory to plain-mapping conversion.
3. Immutability of frozen dataclasses and result factories.
"""

import dataclasses

import pytest

from bsmanifest.domain.constants import data_dir_name
from bsmanifest.domain.pipeline_models import create_error_result, create_success_result
from bsmanifest.domain.tree_models import (
    Directory,
    FileEntry,
    Leaf,
    TreeConflictError,
)


def test_file_entry_from_relative_splits_segments():
    entry = FileEntry.from_relative("Plugins/Sub/Helper.dll", "a" * 40)

    assert entry.parts == ("Plugins", "Sub", "Helper.dll")
    assert entry.rel_path == "Plugins/Sub/Helper.dll"
    assert entry.digest == "a" * 40


def test_leaf_is_immutable():
    leaf = Leaf("abc")
    with pytest.raises(dataclasses.FrozenInstanceError):
        leaf.digest = "def"  # type: ignore[misc]


def test_directory_to_mapping_nests_plain_dicts():
    tree = Directory({
        "a.txt": Leaf("h1"),
        "sub": Directory({"b.txt": Leaf("h2"), "deep": Directory({"c.txt": Leaf("h3")})}),
    })

    assert tree.to_mapping() == {
        "a.txt": "h1",
        "sub": {"b.txt": "h2", "deep": {"c.txt": "h3"}},
    }


def test_tree_conflict_error_carries_path():
    err = TreeConflictError("sub/a.txt")

    assert isinstance(err, ValueError)
    assert err.path == "sub/a.txt"
    assert "sub/a.txt" in str(err)


def test_data_dir_name():
    assert data_dir_name("Beat Saber") == "Beat Saber_Data"


def test_result_factories():
    ok = create_success_result("/game", "1.0", "text", {"a": "h"}, summary_extra={"files": 1})
    bad = create_error_result("boom", "/game")

    assert ok.ok is True and ok.error == "" and ok.summary == {"files": 1}
    assert bad.ok is False and bad.text == "" and bad.tree == {}
