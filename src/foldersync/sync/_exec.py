"""Execute an operation tree on a shared worker pool."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Callable

from ..exceptions import (
    ConflictError,
    CopyError,
    CreateError,
    DeleteError,
    EnumerationError,
    OperationFailedError,
    SymlinkLoopError,
)
from ._diff import NameKey, diff_folder, name_key_for
from ._io import copy_file, delete_file, delete_folder, folder_id, make_dir
from ._types import (
    CopyFile,
    DeleteFile,
    DeleteFolder,
    EnterFolder,
    Operation,
    OperationError,
    SyncReport,
    operation_path,
)

if TYPE_CHECKING:
    from ..config import SyncConfig

logger = logging.getLogger(__name__)

Reporter = Callable[[str], None]


def stdout_reporter(line: str) -> None:
    """Default reporter: one line on standard output."""
    print(line, flush=True)


class _SerializedReporter:
    """Wraps a reporter so concurrent callers never interleave lines."""

    def __init__(self, reporter: Reporter) -> None:
        self._reporter = reporter
        self._lock = threading.Lock()

    def __call__(self, line: str) -> None:
        with self._lock:
            self._reporter(line)


# ---------------------------------------------------------------------------
# Single-operation actions
# ---------------------------------------------------------------------------

def _enter_folder(op: EnterFolder, report: Reporter) -> bool:
    """Make sure ``op.target`` is a directory.  Returns True if created."""
    if os.path.isdir(op.target):
        return False
    if os.path.lexists(op.target):
        raise ConflictError(op.target, f"Cannot create folder, a file is in the way: {op.target}")
    report(f"+{op.target}")
    try:
        make_dir(op.target)
    except OSError as exc:
        raise CreateError(op.target, f"Cannot create {op.target}: {exc.strerror or exc}") from exc
    return True


def _source_chain(op: EnterFolder) -> frozenset[tuple[int, int]]:
    """Ids of ``op.source`` and its ancestors; refuses a folder that is
    already on the chain."""
    try:
        fid = folder_id(op.source)
    except OSError as exc:
        raise EnumerationError(op.source, f"Cannot list {op.source}: {exc.strerror or exc}") from exc
    if fid in op.ancestors:
        raise SymlinkLoopError(op.source, f"Skipping {op.source}: it links back to a parent folder")
    return op.ancestors | {fid}


def _is_real_dir(path: str) -> bool:
    return os.path.isdir(path) and not os.path.islink(path)


def _copy_file(op: CopyFile, report: Reporter) -> None:
    if _is_real_dir(op.target):
        raise ConflictError(op.target, f"Cannot copy file over folder: {op.target}")
    report(f"={op.source} -> {op.target}")
    try:
        copy_file(op.source, op.target)
    except OSError as exc:
        raise CopyError(op.target, f"Cannot copy {op.source}: {exc.strerror or exc}") from exc


def _delete(op: DeleteFile | DeleteFolder, report: Reporter) -> None:
    report(f"-{op.path}")
    try:
        if isinstance(op, DeleteFolder):
            delete_folder(op.path)
        else:
            delete_file(op.path)
    except OSError as exc:
        raise DeleteError(op.path, f"Cannot delete {op.path}: {exc.strerror or exc}") from exc


def _error_entry(op: Operation, exc: Exception) -> OperationError:
    path = getattr(exc, "path", None) or operation_path(op)
    return OperationError(path, str(exc), type(exc).__name__)


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------

class Executor:
    """Runs an operation tree to completion.

    Every operation is one task on a :class:`ThreadPoolExecutor`.  An
    :class:`EnterFolder` task creates its target, then submits the
    children that :func:`diff_folder` yields and returns without waiting
    for them, so even a one-worker pool makes progress.  :meth:`run`
    returns once no task is pending; failures are collected, never
    raised early.
    """

    def __init__(
        self,
        config: SyncConfig,
        reporter: Reporter | None = None,
        *,
        workers: int | None = None,
        name_key: NameKey | None = None,
    ) -> None:
        self._config = config.compile()
        self._report_line = _SerializedReporter(reporter or stdout_reporter)
        self._workers = workers if workers is not None else config.workers
        self._name_key = name_key
        self._pool: ThreadPoolExecutor | None = None
        self._pending = 0
        self._done = threading.Condition()
        self._result_lock = threading.Lock()
        self.report = SyncReport()

    # ------------------------------------------------------------------
    def run(self, root: Operation) -> SyncReport:
        """Execute *root* and everything it expands into."""
        if self._name_key is None:
            self._name_key = name_key_for(self._config, operation_path(root))
        with ThreadPoolExecutor(max_workers=self._workers,
                                thread_name_prefix="foldersync") as pool:
            self._pool = pool
            self._submit(root)
            with self._done:
                while self._pending:
                    self._done.wait()
        self._pool = None
        return self.report

    # ------------------------------------------------------------------
    def _submit(self, op: Operation) -> None:
        with self._done:
            self._pending += 1
        self._pool.submit(self._run_one, op)

    def _run_one(self, op: Operation) -> None:
        try:
            self.execute(op)
        except (OperationFailedError, OSError) as exc:
            self._record_error(op, exc)
        except Exception as exc:
            logger.exception("Unexpected failure in %r", op)
            self._record_error(op, exc)
        finally:
            with self._done:
                self._pending -= 1
                if not self._pending:
                    self._done.notify_all()

    def _record_error(self, op: Operation, exc: Exception) -> None:
        entry = _error_entry(op, exc)
        logger.warning("%s: %s", entry.path, entry.error)
        with self._result_lock:
            self.report.errors.append(entry)

    def _record(self, bucket: list[str], path: str) -> None:
        with self._result_lock:
            bucket.append(path)

    # ------------------------------------------------------------------
    def execute(self, op: Operation) -> None:
        """Perform *op*.  Children of an :class:`EnterFolder` are submitted."""
        report = self._report_line
        if isinstance(op, EnterFolder):
            chain = _source_chain(op)
            if _enter_folder(op, report):
                self._record(self.report.created, op.target)
            children = diff_folder(op.source, op.target, self._config,
                                   name_key=self._name_key, reporter=report,
                                   ancestors=chain)
            for child in children:
                self._submit(child)
        elif isinstance(op, CopyFile):
            _copy_file(op, report)
            self._record(self.report.copied, op.target)
        elif isinstance(op, (DeleteFile, DeleteFolder)):
            _delete(op, report)
            self._record(self.report.deleted, op.path)
        else:
            raise TypeError(f"Unknown operation: {op!r}")


# ---------------------------------------------------------------------------
# Dry run
# ---------------------------------------------------------------------------

def plan_operations(
    config: SyncConfig,
    root: EnterFolder,
    reporter: Reporter | None = None,
    *,
    name_key: NameKey | None = None,
) -> SyncReport:
    """Walk the operation tree rooted at *root* without changing anything.

    Reports the same lines a real run would and records what would change.
    """
    config.compile()
    report_line = reporter or stdout_reporter
    key = name_key or name_key_for(config, root.target)
    result = SyncReport()
    stack: list[Operation] = [root]
    while stack:
        op = stack.pop()
        try:
            if isinstance(op, EnterFolder):
                chain = _source_chain(op)
                if not os.path.isdir(op.target):
                    if os.path.lexists(op.target):
                        raise ConflictError(op.target, f"Cannot create folder, a file is in the way: {op.target}")
                    report_line(f"+{op.target}")
                    result.created.append(op.target)
                children = list(diff_folder(op.source, op.target, config, create=False,
                                            name_key=key, reporter=report_line,
                                            ancestors=chain))
                stack.extend(reversed(children))
            elif isinstance(op, CopyFile):
                if _is_real_dir(op.target):
                    raise ConflictError(op.target, f"Cannot copy file over folder: {op.target}")
                report_line(f"={op.source} -> {op.target}")
                result.copied.append(op.target)
            else:
                report_line(f"-{op.path}")
                result.deleted.append(op.path)
        except OperationFailedError as exc:
            result.errors.append(_error_entry(op, exc))
    return result
