"""Tests for best-effort metadata access."""

import os
from datetime import datetime, timedelta
from unittest.mock import patch

from sizeup.metadata import (
    get_creation_date,
    get_file_size,
    get_modified_date,
    read_metadata,
)


class TestGetFileSize:
    def test_existing_file(self, tmp_path):
        f = tmp_path / "f.txt"
        f.write_text("Hello, World!")
        assert get_file_size(f) == 13

    def test_missing_file_is_zero(self, tmp_path):
        assert get_file_size(tmp_path / "missing") == 0

    def test_permission_error_is_zero(self, tmp_path):
        f = tmp_path / "f.txt"
        f.write_text("data")
        with patch("sizeup.metadata.os.stat", side_effect=PermissionError("denied")):
            assert get_file_size(f) == 0


class TestTimestamps:
    def test_modified_date(self, tmp_path):
        f = tmp_path / "f.txt"
        f.write_text("data")
        when = datetime(2020, 1, 2, 3, 4, 5)
        os.utime(f, (when.timestamp(), when.timestamp()))

        assert get_modified_date(f) == when

    def test_creation_date_is_a_datetime(self, tmp_path):
        f = tmp_path / "f.txt"
        f.write_text("data")
        assert isinstance(get_creation_date(f), datetime)

    def test_missing_entry_defaults_to_now(self, tmp_path):
        before = datetime.now()
        created = get_creation_date(tmp_path / "missing")
        modified = get_modified_date(tmp_path / "missing")
        after = datetime.now()

        assert before <= created <= after
        assert before <= modified <= after


class TestReadMetadata:
    def test_reads_all_fields(self, tmp_path):
        f = tmp_path / "f.bin"
        f.write_bytes(b"x" * 42)

        meta = read_metadata(f)
        assert meta.size == 42
        assert abs(meta.modified_date - datetime.now()) < timedelta(minutes=5)

    def test_defaults_on_failure(self, tmp_path):
        before = datetime.now()
        with patch("sizeup.metadata.os.stat", side_effect=OSError("gone")):
            meta = read_metadata(tmp_path)

        assert meta.size == 0
        assert meta.creation_date >= before
        assert meta.modified_date >= before

    def test_falls_back_to_ctime_without_birthtime(self, tmp_path):
        f = tmp_path / "f.bin"
        f.write_bytes(b"x")
        st = os.stat(f)

        class NoBirthtime:
            st_size = st.st_size
            st_ctime = 1_000_000.0
            st_mtime = st.st_mtime

        with patch("sizeup.metadata.os.stat", return_value=NoBirthtime()):
            meta = read_metadata(f)

        assert meta.creation_date == datetime.fromtimestamp(1_000_000.0)
