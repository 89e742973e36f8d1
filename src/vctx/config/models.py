"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (VCTX__SECTION__KEY)
3. Global YAML (~/.config/vctx/config.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    VCTX__<SECTION>__<KEY>=<VALUE>

Examples:
    VCTX__STORAGE__PRODUCT="Code - Insiders"
    VCTX__REFRESH__ENABLED=false
    VCTX__LOGGING__LEVEL=DEBUG
"""

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        VCTX__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG shows every skipped workspace and tab.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class StorageConfig(BaseModel):
    """Location of the editor's per-workspace storage.

    Env vars:
        VCTX__STORAGE__ROOT: Explicit workspaceStorage directory
        VCTX__STORAGE__PRODUCT: Editor product directory name (default: Code)
    """

    root: str | None = Field(
        default=None,
        description="Explicit workspaceStorage directory. Derived from product when unset.",
    )
    product: str = Field(
        default="Code",
        description="Editor product directory, e.g. 'Code', 'Code - Insiders', 'Cursor'.",
    )

    def resolve_root(self) -> Path:
        """Return the workspaceStorage directory for this platform."""
        if self.root:
            return Path(self.root).expanduser()
        if sys.platform == "darwin":
            base = Path("~/Library/Application Support").expanduser()
        elif sys.platform == "win32":
            base = Path(os.environ.get("APPDATA", "~/AppData/Roaming")).expanduser()
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
        return base / self.product / "User" / "workspaceStorage"


class RefreshConfig(BaseModel):
    """Focus-bounce refresh that nudges the editor into flushing its state.

    Env vars:
        VCTX__REFRESH__ENABLED: Run the refresh before reading (default: true)
        VCTX__REFRESH__SETTLE_DELAY_SEC: Wait after the bounce
    """

    enabled: bool = Field(
        default=True,
        description="Briefly switch application focus before reading state (macOS only).",
    )
    settle_delay_sec: float = Field(
        default=0.2,
        description="Delay after the focus bounce so the editor can persist state.",
    )
    editor_app: str = Field(
        default="Visual Studio Code",
        description="Application name re-activated after the bounce.",
    )
    bounce_app: str = Field(
        default="Finder",
        description="Application briefly activated to make the editor lose focus.",
    )

    @field_validator("settle_delay_sec")
    @classmethod
    def validate_settle_delay(cls, v: float) -> float:
        if not (0 <= v <= 5):
            raise ValueError(f"Settle delay must be 0-5 seconds, got {v}")
        return v


class ProcessConfig(BaseModel):
    """Live terminal process inspection.

    Env vars:
        VCTX__PROCESS__LOOKUP_TIMEOUT_SEC: Bound on the working-directory lookup
    """

    lookup_timeout_sec: float = Field(
        default=1.0,
        description="Give up on a terminal's live working directory after this long.",
    )

    @field_validator("lookup_timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Lookup timeout must be positive, got {v}")
        return v


class VctxConfig(BaseModel):
    """Root configuration for vctx."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    refresh: RefreshConfig = Field(default_factory=RefreshConfig)
    process: ProcessConfig = Field(default_factory=ProcessConfig)
