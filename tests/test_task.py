"""Tests for the build-task wrapper."""

from foldersync import SyncTask
from foldersync.sync import _exec

from conftest import write


class TestSyncTask:
    def test_header_lines(self, src, dst, lines):
        task = SyncTask(str(src), str(dst), exclude_folders="obj;bin", exclude_files="*.user")
        assert task.execute(reporter=lines) is True
        assert lines[:3] == [
            f"Sync Folders {src} to {dst}",
            "Ignoring folders obj;bin",
            "Ignoring files *.user",
        ]

    def test_no_patterns(self, src, dst, lines):
        SyncTask(str(src), str(dst)).execute(reporter=lines)
        assert lines[1:3] == ["Ignoring folders ", "Ignoring files "]

    def test_syncs_with_excludes_and_mirror(self, src, dst, lines):
        write(src / "app.csproj")
        write(src / "main.cs")
        write(src / "obj" / "x.dll")
        write(dst / "stale.cs")
        SyncTask(str(src), str(dst), mirror=True,
                 exclude_folders="obj", exclude_files="*.csproj").execute(reporter=lines)
        assert sorted(p.name for p in dst.iterdir()) == ["main.cs"]

    def test_returns_false_on_failure(self, src, dst, lines, monkeypatch):
        write(src / "a.txt")

        def copy_file(source, target):
            raise OSError(5, "I/O error", target)

        monkeypatch.setattr(_exec, "copy_file", copy_file)
        assert SyncTask(str(src), str(dst)).execute(reporter=lines) is False
