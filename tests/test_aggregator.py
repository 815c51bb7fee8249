"""Tests for folder size aggregation."""

import threading
from unittest.mock import patch

import pytest

from sizeup.aggregator import compute_folder_totals, get_folder_size
from sizeup.metadata import get_file_size
from sizeup.walker import walk_tree


class TestGetFolderSize:
    def test_empty_folder(self, tmp_path):
        assert get_folder_size(tmp_path) == 0

    def test_sums_all_nested_files(self, sample_tree):
        assert get_folder_size(sample_tree) == 100 + 2000 + 3000 + 5000

    def test_subfolder(self, sample_tree):
        assert get_folder_size(sample_tree / "sub") == 8000

    def test_no_double_counting(self, tmp_path):
        """Files in a subfolder count once toward the parent."""
        child = tmp_path / "child"
        child.mkdir()
        (child / "f.bin").write_bytes(b"x" * 700)

        assert get_folder_size(tmp_path) == 700

    def test_parallel_fan_out_matches_sequential(self, tmp_path):
        for i in range(600):
            (tmp_path / f"f{i}.bin").write_bytes(b"x" * (i % 17))
        expected = sum(i % 17 for i in range(600))

        assert get_folder_size(tmp_path, max_workers=8) == expected
        assert get_folder_size(tmp_path, max_workers=1) == expected

    def test_unreadable_files_count_zero(self, sample_tree):
        def flaky_size(path):
            if path.name == "d.bin":
                return 0
            return get_file_size(path)

        with patch("sizeup.aggregator.get_file_size", side_effect=flaky_size):
            assert get_folder_size(sample_tree) == 5100

    def test_symlinks_contribute_nothing(self, tmp_path):
        target = tmp_path / "target.bin"
        target.write_bytes(b"x" * 50)
        folder = tmp_path / "folder"
        folder.mkdir()
        try:
            (folder / "link.bin").symlink_to(target)
        except (OSError, NotImplementedError):
            pytest.skip("Symlinks not supported")

        assert get_folder_size(folder) == 0

    def test_preset_cancel_sums_nothing(self, tmp_path):
        for i in range(600):
            (tmp_path / f"f{i}.bin").write_bytes(b"x")
        cancel = threading.Event()
        cancel.set()

        with patch("sizeup.aggregator._sum_sizes") as sum_sizes:
            assert get_folder_size(tmp_path, max_workers=4, cancel_event=cancel) == 0
        sum_sizes.assert_not_called()

    def test_cancel_mid_way_stops_remaining_chunks(self, tmp_path):
        # 600 files make 5 chunks of at most 128
        for i in range(600):
            (tmp_path / f"f{i}.bin").write_bytes(b"x")
        cancel = threading.Event()

        def sum_and_cancel(chunk):
            cancel.set()
            return len(chunk)

        with patch("sizeup.aggregator._sum_sizes", side_effect=sum_and_cancel) as sum_sizes:
            total = get_folder_size(tmp_path, max_workers=2, cancel_event=cancel)

        assert sum_sizes.call_count < 5
        assert total < 600


class TestComputeFolderTotals:
    def test_matches_rewalk(self, sample_tree):
        entries = walk_tree(sample_tree)
        sizes = {e.path: get_file_size(e.path) for e in entries if e.is_file}

        totals = compute_folder_totals(entries, sizes)

        for folder, total in totals.items():
            assert total == get_folder_size(folder)

    def test_known_totals(self, sample_tree):
        entries = walk_tree(sample_tree)
        sizes = {e.path: get_file_size(e.path) for e in entries if e.is_file}

        totals = compute_folder_totals(entries, sizes)

        assert totals[sample_tree] == 10100
        assert totals[sample_tree / "sub"] == 8000
        assert totals[sample_tree / "sub" / "deeper"] == 5000
        assert totals[sample_tree / "empty"] == 0

    def test_only_folders_in_result(self, sample_tree):
        entries = walk_tree(sample_tree)
        totals = compute_folder_totals(entries, {})

        assert sample_tree / "a.bin" not in totals
        assert all(total == 0 for total in totals.values())

    def test_file_root(self, tmp_path):
        f = tmp_path / "f.bin"
        f.write_bytes(b"x" * 10)
        entries = walk_tree(f)

        assert compute_folder_totals(entries, {f: 10}) == {}
