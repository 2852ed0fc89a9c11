"""Build-task style wrapper around :func:`~foldersync.sync_folders`.

Takes ``;``-separated pattern strings, the way build tool task
parameters are usually written.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import SyncConfig, split_patterns
from .sync import Reporter, stdout_reporter, sync_folders


@dataclass
class SyncTask:
    source_folder: str
    destination_folder: str
    mirror: bool = False
    exclude_folders: str | None = None
    exclude_files: str | None = None
    verbose: bool = False

    def execute(self, reporter: Reporter | None = None) -> bool:
        """Run the sync.  Returns True when no operation failed."""
        reporter = reporter or stdout_reporter
        config = SyncConfig.from_strings(
            self.source_folder, self.destination_folder,
            exclude_files=self.exclude_files,
            exclude_folders=self.exclude_folders,
            mirror=self.mirror,
            verbose=self.verbose,
        )
        reporter(f"Sync Folders {config.source} to {config.destination}")
        reporter(f"Ignoring folders {';'.join(split_patterns(self.exclude_folders))}")
        reporter(f"Ignoring files {';'.join(split_patterns(self.exclude_files))}")
        report = sync_folders(config, reporter=reporter, raise_on_error=False)
        return report.ok
