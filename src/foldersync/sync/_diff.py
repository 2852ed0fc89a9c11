"""Tree differ: decide what one directory pair needs.

``diff_folder`` compares the immediate children of a source and a
target directory and yields the operations that make the target match.
Subfolders are yielded as :class:`EnterFolder` operations, so the walk
only goes deeper when the executor runs them.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Callable, Iterator

from ..exceptions import EnumerationError
from ._io import is_case_sensitive, list_dir, make_dir, mtime_ns
from ._types import CopyFile, DeleteFile, DeleteFolder, EnterFolder, Operation

if TYPE_CHECKING:
    from ..config import SyncConfig

logger = logging.getLogger(__name__)

NameKey = Callable[[str], str]


def _exact(name: str) -> str:
    return name


def name_key_for(config: SyncConfig, root: str) -> NameKey:
    """Return the function that turns an entry name into its index key."""
    sensitive = config.case_sensitive
    if sensitive is None:
        sensitive = is_case_sensitive(root)
        logger.debug("Checked %s: case %ssensitive", root, "" if sensitive else "in")
    return _exact if sensitive else str.casefold


def _index(entries: list[os.DirEntry], config: SyncConfig, key: NameKey,
           *, is_dir: bool) -> dict[str, os.DirEntry]:
    """Drop excluded names and key the rest by name."""
    excludes = config.excludes
    result: dict[str, os.DirEntry] = {}
    for entry in entries:
        if excludes.is_excluded(entry.name, is_dir=is_dir):
            continue
        result[key(entry.name)] = entry
    return result


def _list(path: str, *, missing_ok: bool) -> tuple[list[os.DirEntry], list[os.DirEntry]]:
    try:
        return list_dir(path, missing_ok=missing_ok)
    except OSError as exc:
        raise EnumerationError(path, f"Cannot list {path}: {exc.strerror or exc}") from exc


def diff_folder(
    source: str,
    target: str,
    config: SyncConfig,
    *,
    create: bool = True,
    name_key: NameKey | None = None,
    reporter: Callable[[str], None] | None = None,
    ancestors: frozenset[tuple[int, int]] = frozenset(),
) -> Iterator[Operation]:
    """Yield the operations that bring *target* in line with *source*.

    Args:
        source: Source directory.  Raises :class:`EnumerationError` if
            it cannot be listed.
        target: Target directory.  Created up front when *create* is
            true; otherwise a missing target lists as empty.
        config: A :class:`~foldersync.SyncConfig` (compiled on demand).
        name_key: Entry name to index key; detected from *target* if omitted.
        reporter: Receives ``Comparing`` lines when ``config.verbose``.
        ancestors: Folder ids of *source* and every source folder above
            it; handed on to each yielded :class:`EnterFolder`.

    The generator reads the filesystem when first advanced, so every
    traversal sees the live state of both directories.
    """
    if create and not os.path.isdir(target):
        make_dir(target)
    key = name_key or name_key_for(config, target)
    verbose = config.verbose and reporter is not None

    src_dir_entries, src_file_entries = _list(source, missing_ok=False)
    tgt_dir_entries, tgt_file_entries = _list(target, missing_ok=True)

    src_dirs = _index(src_dir_entries, config, key, is_dir=True)
    src_files = _index(src_file_entries, config, key, is_dir=False)
    tgt_dirs = _index(tgt_dir_entries, config, key, is_dir=True)
    tgt_files = _index(tgt_file_entries, config, key, is_dir=False)

    # Folders
    for k, entry in src_dirs.items():
        target_path = os.path.join(target, entry.name)
        if verbose:
            reporter(f"Comparing {entry.path} -> {target_path}")
        yield EnterFolder(source=entry.path, target=target_path, ancestors=ancestors)
        tgt_dirs.pop(k, None)

    if config.mirror:
        for k, entry in tgt_dirs.items():
            if k in src_files:
                # CopyFile over this folder reports the conflict
                continue
            yield DeleteFolder(path=entry.path)

    # Files
    for k, entry in src_files.items():
        target_path = os.path.join(target, entry.name)
        if verbose:
            reporter(f"Comparing {entry.path} -> {target_path}")
        existing = tgt_files.pop(k, None)
        if existing is None:
            yield CopyFile(source=entry.path, target=target_path)
            continue
        src_mtime = mtime_ns(entry)
        dst_mtime = mtime_ns(existing)
        if src_mtime is None or dst_mtime is None or src_mtime > dst_mtime:
            yield CopyFile(source=entry.path, target=target_path)

    if config.mirror:
        for k, entry in tgt_files.items():
            if k in src_dirs:
                # EnterFolder on this file reports the conflict
                continue
            yield DeleteFile(path=entry.path)
