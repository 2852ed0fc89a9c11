"""Folder sync engine: diff two trees, then run the operations.

Make a destination directory match a source directory
(``sync_folders``), or report what that would do
(``sync_folders_dry_run``).
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from ..exceptions import SyncFailedError
from ._diff import diff_folder, name_key_for
from ._exec import Executor, Reporter, plan_operations, stdout_reporter
from ._types import (
    ActionKind,
    CopyFile,
    DeleteFile,
    DeleteFolder,
    EnterFolder,
    Operation,
    OperationError,
    SyncAction,
    SyncReport,
)

if TYPE_CHECKING:
    from ..config import SyncConfig

logger = logging.getLogger(__name__)

__all__ = [
    "sync_folders", "sync_folders_dry_run", "diff_folder", "name_key_for",
    "Executor", "Reporter", "stdout_reporter",
    "Operation", "EnterFolder", "CopyFile", "DeleteFile", "DeleteFolder",
    "SyncReport", "SyncAction", "ActionKind", "OperationError",
]


def _root_operation(config: SyncConfig, reporter: Reporter) -> EnterFolder | None:
    """Compile *config* and return the root operation, or ``None`` if the
    source root is missing."""
    config.compile()
    if not os.path.isdir(config.source):
        logger.info("Source folder %s not found, nothing to do", config.source)
        if config.verbose:
            reporter(f"Source folder {config.source} not found.")
        return None
    config.validate()
    return EnterFolder(
        source=os.path.abspath(config.source),
        target=os.path.abspath(config.destination),
    )


def sync_folders(
    config: SyncConfig,
    *,
    reporter: Reporter | None = None,
    raise_on_error: bool = True,
) -> SyncReport:
    """Make ``config.destination`` match ``config.source``.

    Blocks until every operation has finished.  A missing source root is
    not an error: nothing is created and an empty report is returned.

    Raises:
        SyncFailedError: if any operation failed and *raise_on_error* is
            true.  Raised only after all other operations completed.
    """
    reporter = reporter or stdout_reporter
    root = _root_operation(config, reporter)
    if root is None:
        return SyncReport()
    logger.debug("Sync %s -> %s (mirror=%s)", root.source, root.target, config.mirror)
    report = Executor(config, reporter).run(root)
    if report.errors and raise_on_error:
        raise SyncFailedError(report)
    return report


def sync_folders_dry_run(
    config: SyncConfig,
    *,
    reporter: Reporter | None = None,
) -> SyncReport:
    """Compute what ``sync_folders`` would do without writing."""
    reporter = reporter or stdout_reporter
    root = _root_operation(config, reporter)
    if root is None:
        return SyncReport()
    return plan_operations(config, root, reporter)
