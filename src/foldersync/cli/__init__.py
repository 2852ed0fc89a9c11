"""foldersync CLI: mirror one directory tree into another."""

from ._helpers import main  # noqa: F401 (entry point)

# Import command modules to register Click commands with the main group.
from . import _sync  # noqa: F401
