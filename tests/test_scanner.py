"""Tests for the directory scanner and size aggregation."""

from __future__ import annotations

import os
import sys
import threading
import time

import pytest

from duview.core.scanner import ScanCancelled, ScanError, scan
from duview.models.tree import DirectoryNode

from conftest import make_file


def _walk(node: DirectoryNode):
    yield node
    for sub in node.subdirs:
        yield from _walk(sub)


class TestScan:
    def test_scenario_sizes_and_order(self, scenario_tree):
        root = scan(str(scenario_tree))
        assert root.size == 450
        assert [d.name for d in root.subdirs] == ["A", "B"]
        assert [d.size for d in root.subdirs] == [300, 100]
        assert root.file_names() == ["f1"]

    def test_aggregate_invariant_everywhere(self, scenario_tree):
        root = scan(str(scenario_tree))
        for node in _walk(root):
            assert node.size == sum(f.size for f in node.files) + sum(d.size for d in node.subdirs)

    def test_orderings_are_non_increasing(self, tmp_path):
        for i, size in enumerate((10, 500, 70, 70, 3)):
            make_file(tmp_path / f"file{i}", size)
            make_file(tmp_path / f"dir{i}" / "x", size * 2)
        root = scan(str(tmp_path))
        file_sizes = [f.size for f in root.files]
        dir_sizes = [d.size for d in root.subdirs]
        assert file_sizes == sorted(file_sizes, reverse=True)
        assert dir_sizes == sorted(dir_sizes, reverse=True)

    def test_node_identity(self, scenario_tree):
        root = scan(str(scenario_tree))
        assert root.name == "root"
        assert root.path == str(scenario_tree)
        a = root.subdirs[0]
        assert a.path == os.path.join(str(scenario_tree), "A")

    def test_empty_directory(self, tmp_path):
        root = scan(str(tmp_path))
        assert root.size == 0
        assert root.subdirs == []
        assert root.files == []

    def test_missing_root_is_fatal(self, tmp_path):
        with pytest.raises(ScanError):
            scan(str(tmp_path / "nope"))

    @pytest.mark.skipif(os.geteuid() == 0, reason="root can read anything")
    def test_unreadable_subdirectory_is_omitted(self, scenario_tree):
        locked = scenario_tree / "locked"
        make_file(locked / "secret", 1000)
        locked.chmod(0)
        try:
            root = scan(str(scenario_tree))
        finally:
            locked.chmod(0o755)
        assert root.size == 450
        assert "locked" not in [d.name for d in root.subdirs]

    def test_symlinks_not_followed(self, scenario_tree):
        os.symlink(scenario_tree / "A", scenario_tree / "link")
        root = scan(str(scenario_tree))
        assert [d.name for d in root.subdirs] == ["A", "B"]
        link = next((f for f in root.files if f.name == "link"), None)
        assert link is not None
        assert link.mode.startswith("l")

    def test_does_not_touch_existing_tree(self, scenario_tree):
        first = scan(str(scenario_tree))
        make_file(scenario_tree / "B" / "b2", 1000)
        second = scan(str(scenario_tree))
        assert first.size == 450
        assert second.size == 1450
        assert second.subdirs[0].name == "B"

    def test_deeply_nested_tree(self, tmp_path):
        deepest = tmp_path
        for _ in range(400):
            deepest = deepest / "a"
        deepest.mkdir(parents=True)
        make_file(tmp_path / "a" / "top", 4)
        make_file(deepest / "bottom", 6)

        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(250)
        try:
            root = scan(str(tmp_path))
        finally:
            sys.setrecursionlimit(limit)

        assert root.size == 10
        node, depth = root, 0
        while node.subdirs:
            node = node.subdirs[0]
            depth += 1
            assert node.size == 10
        assert depth == 400
        assert node.file_names() == ["bottom"]

    def test_cancelled_scan(self, scenario_tree):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(ScanCancelled):
            scan(str(scenario_tree), cancel=cancel)


class TestRecencyFilter:
    def test_boundary_is_strict(self, tmp_path):
        now = float(int(time.time()))
        make_file(tmp_path / "exact", 10, age_seconds=5 * 60, now=now)
        make_file(tmp_path / "inside", 20, age_seconds=5 * 60 - 1, now=now)
        root = scan(str(tmp_path), 5, now=now)
        assert root.file_names() == ["inside"]
        assert root.size == 20

    @pytest.mark.parametrize("minutes", [0, -1])
    def test_disabled_keeps_everything(self, tmp_path, minutes):
        now = float(int(time.time()))
        make_file(tmp_path / "ancient", 10, age_seconds=365 * 24 * 3600, now=now)
        make_file(tmp_path / "fresh", 20, now=now)
        root = scan(str(tmp_path), minutes, now=now)
        assert sorted(root.file_names()) == ["ancient", "fresh"]
        assert root.size == 30

    def test_scenario_old_and_new(self, tmp_path):
        now = float(int(time.time()))
        make_file(tmp_path / "old", 100, age_seconds=10 * 60, now=now)
        make_file(tmp_path / "new", 7, age_seconds=60, now=now)
        root = scan(str(tmp_path), 5, now=now)
        assert root.file_names() == ["new"]
        assert root.size == 7

    def test_filter_applies_in_subdirectories(self, tmp_path):
        now = float(int(time.time()))
        make_file(tmp_path / "sub" / "old", 100, age_seconds=3600, now=now)
        make_file(tmp_path / "sub" / "new", 5, now=now)
        root = scan(str(tmp_path), 30, now=now)
        assert root.size == 5
        assert root.subdirs[0].file_names() == ["new"]
