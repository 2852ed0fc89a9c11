from .config import SyncConfig, split_patterns
from .exceptions import (
    FolderSyncError, ConfigurationError, OperationFailedError, EnumerationError,
    CreateError, CopyError, DeleteError, ConflictError, SymlinkLoopError, SyncFailedError,
)
from ._glob import NamePattern, compile_pattern, is_excluded
from ._exclude import ExcludeFilter
from .sync import sync_folders, sync_folders_dry_run, diff_folder
from .sync import (
    Operation, EnterFolder, CopyFile, DeleteFile, DeleteFolder,
    SyncReport, SyncAction, ActionKind, OperationError, Executor,
)
from .task import SyncTask

__all__ = [
    "SyncConfig", "split_patterns",
    "FolderSyncError", "ConfigurationError", "OperationFailedError", "EnumerationError",
    "CreateError", "CopyError", "DeleteError", "ConflictError", "SymlinkLoopError",
    "SyncFailedError",
    "NamePattern", "compile_pattern", "is_excluded", "ExcludeFilter",
    "sync_folders", "sync_folders_dry_run", "diff_folder",
    "Operation", "EnterFolder", "CopyFile", "DeleteFile", "DeleteFolder",
    "SyncReport", "SyncAction", "ActionKind", "OperationError", "Executor",
    "SyncTask",
]
