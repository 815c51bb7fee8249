"""Tests for the tree walker."""

import os
from unittest.mock import patch

import pytest

from sizeup.models import EntryKind
from sizeup.walker import iter_tree, walk_tree


class TestWalkTree:
    def test_includes_root_and_all_descendants(self, sample_tree):
        entries = walk_tree(sample_tree)
        paths = {e.path for e in entries}

        assert paths == {
            sample_tree,
            sample_tree / "a.bin",
            sample_tree / "b.bin",
            sample_tree / "sub",
            sample_tree / "sub" / "c.bin",
            sample_tree / "sub" / "deeper",
            sample_tree / "sub" / "deeper" / "d.bin",
            sample_tree / "empty",
        }

    def test_reports_entry_kinds(self, sample_tree):
        kinds = {e.path: e.kind for e in walk_tree(sample_tree)}

        assert kinds[sample_tree] == EntryKind.DIR
        assert kinds[sample_tree / "sub"] == EntryKind.DIR
        assert kinds[sample_tree / "a.bin"] == EntryKind.FILE

    def test_root_comes_first(self, sample_tree):
        assert walk_tree(sample_tree)[0].path == sample_tree

    def test_file_root(self, tmp_path):
        f = tmp_path / "only.txt"
        f.write_text("x")

        entries = walk_tree(f)
        assert len(entries) == 1
        assert entries[0].is_file

    def test_missing_root_yields_nothing(self, tmp_path):
        assert walk_tree(tmp_path / "missing") == []

    def test_is_lazy(self, sample_tree):
        it = iter_tree(sample_tree)
        assert next(it).path == sample_tree


class TestUnreadableEntries:
    def test_unreadable_directory_is_skipped(self, sample_tree):
        with patch("sizeup.walker.os.scandir", side_effect=PermissionError("Access denied")):
            entries = walk_tree(sample_tree)

        # Only the root itself could be read
        assert [e.path for e in entries] == [sample_tree]

    def test_one_unreadable_subdirectory(self, sample_tree):
        real_scandir = os.scandir
        blocked = sample_tree / "sub"

        def fake_scandir(path):
            if os.fspath(path) == os.fspath(blocked):
                raise PermissionError("Access denied")
            return real_scandir(path)

        with patch("sizeup.walker.os.scandir", side_effect=fake_scandir):
            paths = {e.path for e in walk_tree(sample_tree)}

        assert blocked in paths
        assert blocked / "c.bin" not in paths
        assert sample_tree / "a.bin" in paths


class TestSymlinks:
    def test_symlinks_are_not_followed(self, sample_tree):
        link = sample_tree / "loop"
        try:
            link.symlink_to(sample_tree, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("Symlinks not supported")

        entries = walk_tree(sample_tree)
        kinds = {e.path: e.kind for e in entries}

        assert kinds[link] == EntryKind.OTHER
        assert not any(str(e.path).startswith(str(link) + os.sep) for e in entries)
