"""Filesystem primitives used by the differ and the executor."""

from __future__ import annotations

import os
import shutil


def mtime_ns(entry: os.DirEntry) -> int | None:
    """Modification time of *entry* in nanoseconds, ``None`` if unreadable."""
    try:
        return entry.stat().st_mtime_ns
    except OSError:
        return None


def list_dir(path: str, *, missing_ok: bool = False) -> tuple[list[os.DirEntry], list[os.DirEntry]]:
    """Split the immediate children of *path* into ``(folders, files)``.

    Symlinks are classified by what they point at.  Anything that is not
    a directory (including dangling links) counts as a file.
    """
    folders: list[os.DirEntry] = []
    files: list[os.DirEntry] = []
    try:
        with os.scandir(path) as it:
            for entry in it:
                if entry.is_dir():
                    folders.append(entry)
                else:
                    files.append(entry)
    except FileNotFoundError:
        if not missing_ok:
            raise
    return folders, files


def make_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def copy_file(source: str, target: str) -> None:
    """Copy bytes from *source* to *target*, then match its timestamps.

    A symlink at *target* is replaced, never written through.
    """
    if os.path.islink(target):
        os.unlink(target)
    shutil.copyfile(source, target)
    st = os.stat(source)
    os.utime(target, ns=(st.st_atime_ns, st.st_mtime_ns))


def delete_file(path: str) -> None:
    os.unlink(path)


def delete_folder(path: str) -> None:
    """Remove *path* recursively.  A symlinked folder loses only the link."""
    if os.path.islink(path):
        os.unlink(path)
        return
    if not os.path.isdir(path):
        raise FileNotFoundError(2, "No such directory", path)
    shutil.rmtree(path)


def is_case_sensitive(path: str) -> bool:
    """Check whether names under *path* are case-sensitive.

    Walks up to the nearest existing ancestor whose name has letters and
    checks whether the case-swapped spelling resolves to the same entry.
    """
    current = os.path.abspath(path)
    while True:
        head, name = os.path.split(current)
        if name and os.path.exists(current) and name.swapcase() != name:
            swapped = os.path.join(head, name.swapcase())
            if not os.path.exists(swapped):
                return True
            try:
                return not os.path.samefile(current, swapped)
            except OSError:
                return True
        if not name or head == current:
            return os.path.normcase("A") == "A"
        current = head


def folder_id(path: str) -> tuple[int, int]:
    """``(st_dev, st_ino)`` of the folder *path* resolves to."""
    st = os.stat(path)
    return st.st_dev, st.st_ino
