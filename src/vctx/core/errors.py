"""vctx error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Storage
- 4xxx: Workspace

Only these errors cross component boundaries. Everything below the top
level degrades to empty results instead of raising.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Storage (3xxx)
    STORAGE_NOT_FOUND = 3001

    # Workspace (4xxx)
    WORKSPACE_NOT_FOUND = 4001


@dataclass(frozen=True, slots=True)
class VctxError(Exception):
    """Base for failures reported to the user (CLI exit status 1)."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """Code name, e.g. ``WORKSPACE_NOT_FOUND``."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Structured form for logs and JSON consumers."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(VctxError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Cannot parse config file {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Bad config value for {field}: {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class StorageError(VctxError):
    """The editor's workspace storage root is unusable."""

    @classmethod
    def root_not_found(cls, root: str) -> "StorageError":
        return cls(
            code=ErrorCode.STORAGE_NOT_FOUND,
            message=f"VS Code workspace storage not found: {root}",
            details={"root": root},
        )


class WorkspaceNotFound(VctxError):
    """No tracked workspace contains the requested file."""

    @classmethod
    def for_file(cls, path: str) -> "WorkspaceNotFound":
        return cls(
            code=ErrorCode.WORKSPACE_NOT_FOUND,
            message=f"No workspace found for file: {path}",
            details={"path": path},
        )

