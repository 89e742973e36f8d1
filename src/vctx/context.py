"""Context snapshot assembly.

Pipeline: locate workspace -> optional state refresh -> concurrent store
reads (open tabs, selections, active tab) -> join -> attach selections to
tabs, materialize selected text, scope selections.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import structlog

from vctx.config.constants import EDITOR_LAYOUT_KEY, TEXT_EDITOR_STATE_KEY
from vctx.config.models import VctxConfig
from vctx.core.paths import path_key
from vctx.editor.layout import parse_open_tabs, resolve_active_tab
from vctx.editor.models import FileSelections, Tab
from vctx.editor.processes import CwdResolver, make_cwd_resolver
from vctx.editor.refresh import attempt_state_refresh
from vctx.editor.selections import parse_selections, with_content
from vctx.workspace.locator import discover_workspaces, find_workspace_for_file
from vctx.workspace.models import Workspace
from vctx.workspace.store import read_key

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class ContextOptions:
    """What to gather for a snapshot.

    Attributes:
        all_selections: Keep selections of every open file instead of only
            the active one
        with_content: Re-read files to attach the selected text
        refresh: Run the state refresh before reading (if enabled in config)
    """

    all_selections: bool = False
    with_content: bool = True
    refresh: bool = True


@dataclass(frozen=True, slots=True)
class ContextSnapshot:
    """Request-scoped view of the editor's UI state for one workspace."""

    workspace: Workspace
    tabs: tuple[Tab, ...]
    active_tab_path: str | None
    selections: tuple[FileSelections, ...]

    @property
    def pinned_tabs(self) -> tuple[Tab, ...]:
        return tuple(tab for tab in self.tabs if tab.pinned)

    def to_dict(self) -> dict[str, Any]:
        return {
            "workspace": self.workspace.to_dict(),
            "tabs": [tab.to_dict() for tab in self.tabs],
            "pinnedTabs": [tab.to_dict() for tab in self.pinned_tabs],
            "activeTabPath": self.active_tab_path,
            "selections": [sel.to_dict() for sel in self.selections],
        }


def locate_workspace(path: str | Path, config: VctxConfig) -> Workspace:
    """Find the workspace owning ``path``.

    Raises:
        StorageError: If the storage root does not exist.
        WorkspaceNotFound: If no workspace folder contains ``path``.
    """
    workspaces = discover_workspaces(config.storage.resolve_root())
    return find_workspace_for_file(path, workspaces)


def _attach_selections(tabs: list[Tab], selections: list[FileSelections]) -> tuple[Tab, ...]:
    ranges_by_path = {path_key(sel.path): sel.ranges for sel in selections}
    return tuple(
        replace(tab, selections=ranges_by_path.get(path_key(tab.path), ())) if tab.is_file else tab
        for tab in tabs
    )


def _scope_selections(
    selections: list[FileSelections],
    tabs: tuple[Tab, ...],
    active_tab_path: str | None,
    all_selections: bool,
) -> tuple[FileSelections, ...]:
    if all_selections:
        open_paths = {path_key(tab.path) for tab in tabs if tab.is_file}
        return tuple(sel for sel in selections if path_key(sel.path) in open_paths)
    if active_tab_path is None:
        return ()
    active = path_key(active_tab_path)
    return tuple(sel for sel in selections if path_key(sel.path) == active)


def build_context(
    path: str | Path,
    options: ContextOptions | None = None,
    *,
    config: VctxConfig | None = None,
    refresh: Callable[[], bool] | None = None,
    resolve_cwd: CwdResolver | None = None,
) -> ContextSnapshot:
    """Gather a context snapshot for the workspace that owns ``path``.

    Args:
        path: Any file or directory inside the workspace
        options: What to gather (defaults: active-file selections with text)
        config: Resolved configuration (defaults when None)
        refresh: Replacement for the focus-bounce refresh
        resolve_cwd: Replacement for the live terminal cwd lookup

    Raises:
        StorageError: If the storage root does not exist.
        WorkspaceNotFound: If no workspace folder contains ``path``.
    """
    options = options or ContextOptions()
    config = config or VctxConfig()
    resolve_cwd = resolve_cwd or make_cwd_resolver(config.process.lookup_timeout_sec)

    workspace = locate_workspace(path, config)
    log.debug("workspace_located", workspace_id=workspace.id, folder=workspace.folder_path)

    if options.refresh and config.refresh.enabled:
        refreshed = refresh() if refresh is not None else attempt_state_refresh(config.refresh)
        log.debug("state_refresh", refreshed=refreshed)

    store = workspace.store_path
    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="vctx-read") as executor:
        tabs_future = executor.submit(
            lambda: parse_open_tabs(read_key(store, EDITOR_LAYOUT_KEY), resolve_cwd)
        )
        selections_future = executor.submit(
            lambda: parse_selections(read_key(store, TEXT_EDITOR_STATE_KEY))
        )
        active_future = executor.submit(
            lambda: resolve_active_tab(read_key(store, EDITOR_LAYOUT_KEY))
        )
        open_tabs = tabs_future.result()
        selections = selections_future.result()
        active_tab_path = active_future.result()

    tabs = _attach_selections(open_tabs, selections)
    scoped = _scope_selections(selections, tabs, active_tab_path, options.all_selections)
    if options.with_content:
        scoped = tuple(with_content(sel) for sel in scoped)

    log.debug(
        "context_built",
        tabs=len(tabs),
        selections=len(scoped),
        active_tab=active_tab_path,
    )
    return ContextSnapshot(
        workspace=workspace,
        tabs=tabs,
        active_tab_path=active_tab_path,
        selections=scoped,
    )
