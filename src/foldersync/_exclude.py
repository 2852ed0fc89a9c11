"""Exclude-filter support for folder sync.

Combines the file patterns (``--xf``), folder patterns (``--xd``) and an
optional ``--exclude-from`` pattern file into two compiled pattern sets.

Pattern syntax is the case-insensitive name glob implemented in
:mod:`foldersync._glob`.  Patterns match bare names, never paths.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ._glob import NamePattern, compile_pattern, is_excluded


def read_pattern_file(path: str) -> tuple[list[str], list[str]]:
    """Read ``(file_patterns, folder_patterns)`` from a pattern file.

    Blank lines and ``#`` comments are skipped.  A line ending in ``/``
    names folders; every other line names files.
    """
    files: list[str] = []
    folders: list[str] = []
    for raw in Path(path).read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.endswith("/"):
            folders.append(line.rstrip("/"))
        else:
            files.append(line)
    return files, folders


class ExcludeFilter:
    """Combines file patterns, folder patterns and an exclude-from file."""

    def __init__(
        self,
        *,
        files: Sequence[str] | None = None,
        folders: Sequence[str] | None = None,
        exclude_from: str | None = None,
    ) -> None:
        file_lines = list(files or ())
        folder_lines = list(folders or ())
        if exclude_from is not None:
            extra_files, extra_folders = read_pattern_file(exclude_from)
            file_lines.extend(extra_files)
            folder_lines.extend(extra_folders)
        self.file_patterns: tuple[NamePattern, ...] = tuple(
            compile_pattern(p) for p in file_lines
        )
        self.folder_patterns: tuple[NamePattern, ...] = tuple(
            compile_pattern(p) for p in folder_lines
        )

    # ------------------------------------------------------------------
    @property
    def active(self) -> bool:
        """True if any filtering is configured."""
        return bool(self.file_patterns or self.folder_patterns)

    # ------------------------------------------------------------------
    def is_excluded(self, name: str, *, is_dir: bool = False) -> bool:
        """Check a bare *name* against the folder or file pattern set."""
        patterns = self.folder_patterns if is_dir else self.file_patterns
        return is_excluded(name, patterns)
