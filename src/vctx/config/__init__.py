"""Config module exports."""

from vctx.config.loader import load_config
from vctx.config.models import (
    LoggingConfig,
    ProcessConfig,
    RefreshConfig,
    StorageConfig,
    VctxConfig,
)

__all__ = [
    "load_config",
    "VctxConfig",
    "LoggingConfig",
    "StorageConfig",
    "RefreshConfig",
    "ProcessConfig",
]
