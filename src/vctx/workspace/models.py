"""Workspace value objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class Workspace:
    """One ``workspaceStorage/<id>`` entry tracked by the editor.

    Attributes:
        id: Opaque storage directory name
        folder_path: Absolute path of the workspace folder
        store_path: Path to the workspace's ``state.vscdb``
    """

    id: str
    folder_path: str
    store_path: Path

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "folderPath": self.folder_path}
