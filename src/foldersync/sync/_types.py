"""Operation model and run report for folder sync."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EnterFolder:
    """Create *target* if needed, then sync the *source* folder into it.

    *ancestors* holds the ``(st_dev, st_ino)`` of every source folder
    above this one, so a symlink back up the chain can be refused.
    """
    source: str
    target: str
    ancestors: frozenset[tuple[int, int]] = field(
        default=frozenset(), compare=False, repr=False,
    )


@dataclass(frozen=True)
class CopyFile:
    """Copy *source* over *target* and carry the timestamps across."""
    source: str
    target: str


@dataclass(frozen=True)
class DeleteFile:
    """Remove one destination file."""
    path: str


@dataclass(frozen=True)
class DeleteFolder:
    """Remove one destination folder and everything beneath it."""
    path: str


Operation = Union[EnterFolder, CopyFile, DeleteFile, DeleteFolder]


def operation_path(op: Operation) -> str:
    """The destination-side path an operation acts on."""
    if isinstance(op, (EnterFolder, CopyFile)):
        return op.target
    return op.path


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

class ActionKind(str, Enum):
    """Kind of completed action: ``CREATE``, ``COPY``, or ``DELETE``."""
    CREATE = "create"
    COPY = "copy"
    DELETE = "delete"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass
class SyncAction:
    """A single create/copy/delete action in a :class:`SyncReport`."""
    path: str
    action: ActionKind


@dataclass
class OperationError:
    """An operation that failed during a run.

    Attributes:
        path: The path that caused the error.
        error: Human-readable error message.
        kind: Error class name (``CopyError``, ``DeleteError``, ...).
    """
    path: str
    error: str
    kind: str = "OSError"


@dataclass
class SyncReport:
    """Result of a sync run (real or dry-run).

    Attributes:
        created: Destination folders created.
        copied: Destination files written.
        deleted: Destination files and folders removed.
        errors: Per-operation failures.
    """
    created: list[str] = field(default_factory=list)
    copied: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    errors: list[OperationError] = field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        """``True`` if nothing was created, copied or deleted."""
        return not self.created and not self.copied and not self.deleted

    @property
    def total(self) -> int:
        return len(self.created) + len(self.copied) + len(self.deleted)

    @property
    def ok(self) -> bool:
        return not self.errors

    def actions(self) -> list[SyncAction]:
        """Return all actions as a flat list sorted by path."""
        result: list[SyncAction] = []
        for p in self.created:
            result.append(SyncAction(path=p, action=ActionKind.CREATE))
        for p in self.copied:
            result.append(SyncAction(path=p, action=ActionKind.COPY))
        for p in self.deleted:
            result.append(SyncAction(path=p, action=ActionKind.DELETE))
        result.sort(key=lambda a: a.path)
        return result
