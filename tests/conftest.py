"""Shared fixtures for foldersync tests."""

import os

import pytest
from click.testing import CliRunner


def write(path, data="x", mtime=None):
    """Write *data* to *path* (creating parents) and optionally pin its mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, bytes):
        path.write_bytes(data)
    else:
        path.write_text(data)
    if mtime is not None:
        set_mtime(path, mtime)
    return path


def set_mtime(path, seconds):
    ns = int(seconds * 1_000_000_000)
    os.utime(path, ns=(ns, ns))


@pytest.fixture
def src(tmp_path):
    d = tmp_path / "src"
    d.mkdir()
    return d


@pytest.fixture
def dst(tmp_path):
    d = tmp_path / "dst"
    d.mkdir()
    return d


@pytest.fixture
def lines():
    """A reporter that records every progress line."""
    class Lines(list):
        def __call__(self, line):
            self.append(line)
    return Lines()


# ---------------------------------------------------------------------------
# CLI fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tree(tmp_path):
    """A small source tree for CLI tests.

    Tree:
        readme.txt, build.log,
        src/main.py, src/util.py,
        obj/cache.bin
    """
    root = tmp_path / "tree"
    write(root / "readme.txt", "readme")
    write(root / "build.log", "log")
    write(root / "src" / "main.py", "main")
    write(root / "src" / "util.py", "util")
    write(root / "obj" / "cache.bin", b"\x00\x01")
    return root
