"""Exceptions for foldersync."""


class FolderSyncError(Exception):
    """Base class for every error raised by foldersync."""


class ConfigurationError(FolderSyncError):
    """Raised when a :class:`~foldersync.SyncConfig` cannot be used.

    The most common cause is a source root that does not exist.
    """


class OperationFailedError(FolderSyncError):
    """A single sync operation failed.

    Attributes:
        path: The filesystem path the operation was working on.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path


class EnumerationError(OperationFailedError):
    """A directory could not be listed; only its subtree is skipped."""


class CreateError(OperationFailedError):
    """A destination folder could not be created; its subtree is skipped."""


class CopyError(OperationFailedError):
    """A file could not be copied."""


class DeleteError(OperationFailedError):
    """A file or folder could not be deleted."""


class ConflictError(OperationFailedError):
    """A name is a folder on one side and a file on the other."""


class SymlinkLoopError(OperationFailedError):
    """A source folder links back to one of its own ancestors."""


class SyncFailedError(FolderSyncError):
    """Raised after a run in which at least one operation failed.

    Every other operation has finished by the time this is raised.  The
    full :class:`~foldersync.SyncReport` is available as :attr:`report`.
    """

    def __init__(self, report) -> None:
        errors = report.errors
        first = errors[0] if errors else None
        msg = f"{len(errors)} operation(s) failed"
        if first is not None:
            msg += f"; first: {first.path}: {first.error}"
        super().__init__(msg)
        self.report = report
