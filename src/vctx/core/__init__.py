"""Core module exports."""

from vctx.core.errors import (
    ConfigError,
    ErrorCode,
    StorageError,
    VctxError,
    WorkspaceNotFound,
)
from vctx.core.languages import fence_language
from vctx.core.logging import configure_logging

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "StorageError",
    "VctxError",
    "WorkspaceNotFound",
    # Logging
    "configure_logging",
    # Languages
    "fence_language",
]
