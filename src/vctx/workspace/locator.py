"""Workspace discovery over the editor's workspaceStorage directory."""

from __future__ import annotations

import json
import os
from pathlib import Path

import structlog

from vctx.config.constants import STATE_STORE_FILE, WORKSPACE_MAPPING_FILE
from vctx.core.errors import StorageError, WorkspaceNotFound
from vctx.core.paths import file_uri_to_path
from vctx.workspace.models import Workspace

log = structlog.get_logger()


def _load_workspace(entry: Path) -> Workspace | None:
    mapping_path = entry / WORKSPACE_MAPPING_FILE
    store_path = entry / STATE_STORE_FILE
    if not (mapping_path.is_file() and store_path.is_file()):
        return None

    try:
        mapping = json.loads(mapping_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        log.debug("workspace_mapping_unreadable", workspace_id=entry.name, error=str(e))
        return None

    folder = mapping.get("folder") if isinstance(mapping, dict) else None
    folder_path = file_uri_to_path(folder) if isinstance(folder, str) else None
    if folder_path is None:
        log.debug("workspace_without_local_folder", workspace_id=entry.name)
        return None

    return Workspace(id=entry.name, folder_path=folder_path, store_path=store_path)


def discover_workspaces(root: Path) -> list[Workspace]:
    """Scan ``root`` for workspace records.

    Entries lacking a mapping document or a state store, or whose mapping
    does not parse, are skipped. Order follows filesystem enumeration.

    Raises:
        StorageError: If ``root`` does not exist.
    """
    if not root.is_dir():
        raise StorageError.root_not_found(str(root))

    workspaces: list[Workspace] = []
    for entry in root.iterdir():
        if not entry.is_dir():
            continue
        workspace = _load_workspace(entry)
        if workspace is not None:
            workspaces.append(workspace)

    log.debug("workspaces_discovered", root=str(root), count=len(workspaces))
    return workspaces


def _contains(folder_path: str, file_path: str) -> bool:
    folder = folder_path.rstrip("/\\")
    if not folder:
        # filesystem root
        return file_path.startswith(folder_path)
    if file_path == folder:
        return True
    return file_path.startswith(folder) and file_path[len(folder)] in ("/", os.sep)


def find_workspace_for_file(path: str | Path, workspaces: list[Workspace]) -> Workspace:
    """Return the first workspace whose folder contains ``path``.

    Matching is on path-component boundaries: a workspace at ``/a/b`` owns
    ``/a/b`` and ``/a/b/c.py`` but not ``/a/bc/c.py``.

    Raises:
        WorkspaceNotFound: If no workspace folder contains the path.
    """
    resolved = os.path.abspath(path)
    for workspace in workspaces:
        if _contains(workspace.folder_path, resolved):
            return workspace
    raise WorkspaceNotFound.for_file(str(path))
