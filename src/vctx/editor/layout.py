"""Editor grid decoding: open tabs, pinned state and the active tab.

The editor persists its layout under ``memento/workbench.parts.editor`` as::

    {"editorpart.state": {
        "serializedGrid": {"root": <node>, ...},
        "activeGroup": <group id>,
        ...}}

where each node is either a branch ``{"type": "branch", "data": [<node>...]}``
or a leaf ``{"type": "leaf", "data": {"id", "editors", "mru", "sticky"}}``.
Each editor entry is ``{"id": <editor type>, "value": <JSON string>}``.

Decoding is lenient throughout: malformed nodes and editor entries are
dropped individually, and an undecodable document yields no tabs.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import structlog

from vctx.config.constants import FILE_EDITOR_TYPE, TERMINAL_EDITOR_TYPE
from vctx.editor.models import Tab, TabKind, TerminalInfo
from vctx.editor.processes import CwdResolver, make_cwd_resolver

log = structlog.get_logger()


# =============================================================================
# Editor inputs
# =============================================================================


@dataclass(frozen=True, slots=True)
class FileInput:
    path: str


@dataclass(frozen=True, slots=True)
class TerminalInput:
    pid: int | None
    title: str | None
    cwd: str | None
    terminal_id: int | str | None


@dataclass(frozen=True, slots=True)
class UnknownInput:
    """Editor types we do not render (settings, diff, webviews, ...)."""

    type_id: str


EditorInput = FileInput | TerminalInput | UnknownInput


# =============================================================================
# Grid nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Leaf:
    """One editor group. ``editors`` keeps None where an entry was malformed
    so that positions still line up with ``sticky`` and ``mru``."""

    group_id: int | str | None
    editors: tuple[EditorInput | None, ...]
    sticky: int
    mru: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class Branch:
    children: tuple[GridNode, ...]


GridNode = Leaf | Branch


@dataclass(frozen=True, slots=True)
class EditorLayout:
    root: GridNode
    active_group: int | str | None


def _decode_file(payload: dict[str, Any]) -> FileInput | None:
    resource = payload.get("resourceJSON")
    if not isinstance(resource, dict):
        return None
    fs_path = resource.get("fsPath")
    if isinstance(fs_path, str) and fs_path:
        return FileInput(fs_path)
    if resource.get("scheme") == "file" and isinstance(resource.get("path"), str):
        return FileInput(resource["path"])
    return None


def _decode_terminal(payload: dict[str, Any]) -> TerminalInput:
    pid = payload.get("pid")
    title = payload.get("title")
    cwd = payload.get("cwd")
    return TerminalInput(
        pid=pid if isinstance(pid, int) else None,
        title=title if isinstance(title, str) else None,
        cwd=cwd if isinstance(cwd, str) and cwd else None,
        terminal_id=payload.get("id"),
    )


def decode_editor(entry: Any) -> EditorInput | None:
    """Decode one serialized editor entry. Returns None if malformed."""
    if not isinstance(entry, dict):
        return None
    type_id = entry.get("id")
    raw_value = entry.get("value")
    if not isinstance(type_id, str):
        return None
    if type_id not in (FILE_EDITOR_TYPE, TERMINAL_EDITOR_TYPE):
        return UnknownInput(type_id)
    if not isinstance(raw_value, str):
        return None

    try:
        payload = json.loads(raw_value)
    except json.JSONDecodeError:
        log.debug("editor_value_unparseable", type_id=type_id)
        return None
    if not isinstance(payload, dict):
        return None

    if type_id == FILE_EDITOR_TYPE:
        return _decode_file(payload)
    return _decode_terminal(payload)


def _int_list(value: Any) -> tuple[int, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, int) and not isinstance(v, bool))


def decode_node(node: Any) -> GridNode | None:
    """Decode a grid node recursively. Returns None if malformed."""
    if not isinstance(node, dict):
        return None
    node_type = node.get("type")
    data = node.get("data")

    if node_type == "branch" and isinstance(data, list):
        children = (decode_node(child) for child in data)
        return Branch(tuple(c for c in children if c is not None))

    if node_type == "leaf" and isinstance(data, dict):
        editors = data.get("editors")
        sticky = data.get("sticky")
        return Leaf(
            group_id=data.get("id"),
            editors=tuple(decode_editor(e) for e in editors) if isinstance(editors, list) else (),
            sticky=sticky if isinstance(sticky, int) and sticky > 0 else 0,
            mru=_int_list(data.get("mru")),
        )

    return None


def decode_layout(raw: str | None) -> EditorLayout | None:
    """Decode the serialized editor part state. Returns None if unusable."""
    if not raw:
        return None
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        log.debug("editor_layout_unparseable", error=str(e))
        return None

    state = document.get("editorpart.state") if isinstance(document, dict) else None
    if not isinstance(state, dict):
        return None
    grid = state.get("serializedGrid")
    root = decode_node(grid.get("root")) if isinstance(grid, dict) else None
    if root is None:
        return None
    return EditorLayout(root=root, active_group=state.get("activeGroup"))


def iter_leaves(node: GridNode) -> Iterator[Leaf]:
    """Yield leaves depth-first, in document order."""
    if isinstance(node, Leaf):
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)


def _terminal_tab(
    terminal: TerminalInput, leaf: Leaf, index: int, resolve_cwd: CwdResolver
) -> Tab:
    live_cwd = resolve_cwd(terminal.pid) if terminal.pid else None
    cwd = live_cwd or terminal.cwd
    title = terminal.title or "Unknown"
    pid = terminal.pid if terminal.pid is not None else "N/A"
    path = f"Terminal: {title} (PID: {pid})"
    if cwd:
        path += f" @ {cwd}"
    return Tab(
        path=path,
        kind=TabKind.TERMINAL,
        pinned=index < leaf.sticky,
        group_id=leaf.group_id,
        order_index=index,
        terminal=TerminalInfo(
            pid=terminal.pid, title=terminal.title, cwd=cwd, terminal_id=terminal.terminal_id
        ),
    )


def leaf_tabs(leaf: Leaf, resolve_cwd: CwdResolver) -> list[Tab]:
    """Tabs of one group, pinned iff their position is below the sticky count."""
    tabs: list[Tab] = []
    for index, editor in enumerate(leaf.editors):
        if isinstance(editor, FileInput):
            tabs.append(
                Tab(
                    path=editor.path,
                    kind=TabKind.FILE,
                    pinned=index < leaf.sticky,
                    group_id=leaf.group_id,
                    order_index=index,
                )
            )
        elif isinstance(editor, TerminalInput):
            tabs.append(_terminal_tab(editor, leaf, index, resolve_cwd))
        elif isinstance(editor, UnknownInput):
            log.debug("editor_type_skipped", type_id=editor.type_id, group_id=leaf.group_id)
    return tabs


def flatten_tabs(node: GridNode, resolve_cwd: CwdResolver) -> list[Tab]:
    """All tabs under ``node``, group by group in depth-first order."""
    return [tab for leaf in iter_leaves(node) for tab in leaf_tabs(leaf, resolve_cwd)]


def parse_open_tabs(
    raw_layout: str | None, resolve_cwd: CwdResolver | None = None
) -> list[Tab]:
    """Flatten the serialized editor grid into an ordered list of tabs.

    Terminal cwd lookups share one deadline unless ``resolve_cwd`` is given.
    """
    layout = decode_layout(raw_layout)
    if layout is None:
        return []
    return flatten_tabs(layout.root, resolve_cwd or make_cwd_resolver())


def resolve_active_tab(raw_layout: str | None) -> str | None:
    """Return the file path of the focused tab in the active group.

    The active tab is the first entry of the active group's MRU list.
    Returns None when that tab is not a file tab (terminal, settings, ...).
    """
    layout = decode_layout(raw_layout)
    if layout is None:
        return None

    for leaf in iter_leaves(layout.root):
        if leaf.group_id != layout.active_group:
            continue
        if not leaf.mru or not (0 <= leaf.mru[0] < len(leaf.editors)):
            return None
        editor = leaf.editors[leaf.mru[0]]
        return editor.path if isinstance(editor, FileInput) else None
    return None
