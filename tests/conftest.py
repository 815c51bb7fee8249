"""Shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def sample_tree(tmp_path) -> Path:
    """
    A small tree with known sizes:

        root/a.bin              100
        root/b.bin             2000
        root/sub/c.bin         3000
        root/sub/deeper/d.bin  5000
        root/empty/
    """
    root = tmp_path / "root"
    deeper = root / "sub" / "deeper"
    deeper.mkdir(parents=True)
    (root / "empty").mkdir()

    (root / "a.bin").write_bytes(b"a" * 100)
    (root / "b.bin").write_bytes(b"b" * 2000)
    (root / "sub" / "c.bin").write_bytes(b"c" * 3000)
    (deeper / "d.bin").write_bytes(b"d" * 5000)
    return root
