"""Run configuration for a folder sync."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Sequence

from ._exclude import ExcludeFilter
from ._glob import NamePattern
from .exceptions import ConfigurationError


def split_patterns(value: str | None) -> list[str]:
    """Split a ``;``-separated pattern list, dropping empty segments."""
    if not value:
        return []
    return [p for p in value.split(";") if p]


@dataclass
class SyncConfig:
    """Everything one sync run needs.

    Attributes:
        source: Source root directory.
        destination: Destination root directory (created if missing).
        exclude_files: Glob patterns for file names to skip.
        exclude_folders: Glob patterns for folder names to skip.
        exclude_from: Optional pattern file (see
            :func:`~foldersync._exclude.read_pattern_file`).
        mirror: Delete destination entries missing from the source.
        verbose: Report a ``Comparing`` line for every entry considered.
        workers: Worker pool width; ``None`` uses the pool default.
        case_sensitive: Name correspondence between source and
            destination; ``None`` tests the destination filesystem.
    """
    source: str
    destination: str
    exclude_files: Sequence[str] = ()
    exclude_folders: Sequence[str] = ()
    exclude_from: str | None = None
    mirror: bool = False
    verbose: bool = False
    workers: int | None = None
    case_sensitive: bool | None = None
    _filter: ExcludeFilter | None = field(
        default=None, init=False, repr=False, compare=False,
    )

    @classmethod
    def from_strings(
        cls,
        source: str,
        destination: str,
        *,
        exclude_files: str | None = None,
        exclude_folders: str | None = None,
        **kwargs,
    ) -> SyncConfig:
        """Build a config from ``;``-separated pattern strings."""
        return cls(
            source, destination,
            exclude_files=split_patterns(exclude_files),
            exclude_folders=split_patterns(exclude_folders),
            **kwargs,
        )

    # ------------------------------------------------------------------
    def compile(self) -> SyncConfig:
        """Compile the exclusion patterns.  Only the first call does work."""
        if self._filter is None:
            try:
                self._filter = ExcludeFilter(
                    files=self.exclude_files,
                    folders=self.exclude_folders,
                    exclude_from=self.exclude_from,
                )
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigurationError(
                    f"Cannot read exclude file {self.exclude_from}: {exc}"
                ) from exc
        return self

    @property
    def excludes(self) -> ExcludeFilter:
        self.compile()
        return self._filter

    @property
    def file_excludes(self) -> tuple[NamePattern, ...]:
        return self.excludes.file_patterns

    @property
    def folder_excludes(self) -> tuple[NamePattern, ...]:
        return self.excludes.folder_patterns

    # ------------------------------------------------------------------
    def validate(self) -> None:
        """Raise :class:`ConfigurationError` if the run cannot start."""
        if not os.path.exists(self.source):
            raise ConfigurationError(f"Source folder {self.source} not found.")
        if not os.path.isdir(self.source):
            raise ConfigurationError(f"Source is not a folder: {self.source}")
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError("workers must be at least 1")
        if self._destination_in_source():
            raise ConfigurationError(
                f"Destination {self.destination} is inside source {self.source}"
            )

    def _destination_in_source(self) -> bool:
        """True if the destination is the source or a non-excluded folder
        beneath it, which would make every run copy into itself."""
        src = os.path.normcase(os.path.realpath(self.source))
        dst = os.path.normcase(os.path.realpath(self.destination))
        try:
            if os.path.commonpath([src, dst]) != src:
                return False
        except ValueError:
            # different drives
            return False
        rel = os.path.relpath(dst, src)
        if rel == os.curdir:
            return True
        excludes = self.excludes
        return not any(excludes.is_excluded(part, is_dir=True)
                       for part in rel.split(os.sep))
