"""Workspace discovery and state store access."""

from vctx.workspace.locator import discover_workspaces, find_workspace_for_file
from vctx.workspace.models import Workspace
from vctx.workspace.store import read_key

__all__ = [
    "Workspace",
    "discover_workspaces",
    "find_workspace_for_file",
    "read_key",
]
