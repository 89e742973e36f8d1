"""Text rendering of context snapshots for LLM and human consumption.

Renderers return ``rich.text.Text``: colour lives in spans and
``Text.plain`` is the exact report, file and selection text included
byte for byte (tabs and control characters are never rewritten).

Layout::

    === VS CODE RAW CONTEXT ===
    WORKSPACE: /repo
    WORKSPACE_ID: 3f2a...

    OPEN_EDITORS:
      1. /repo/README.md [PINNED]
      2. /repo/src/a.js [SELECTED:L8:C1-L10:C5]

    The user selected the following lines from /repo/src/a.js:
    ...

    TOTAL_OPEN: 2
    TOTAL_PINNED: 1
    TOTAL_SELECTED: 1
    === END RAW CONTEXT ===
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from rich.text import Text

from vctx.context import ContextSnapshot
from vctx.core.languages import fence_language
from vctx.editor.models import FileSelections, Tab, TabKind
from vctx.workspace.models import Workspace

_LABEL = "bright_black"
_BANNER = "blue"
_PINNED = "yellow"
_SELECTED = "cyan"
_SELECTION_HEADER = "magenta"
_SELECTION_TEXT = "#86efac"

_FILE_INDENT = "     "
_SNIPPET_INDENT = "        "

NO_SELECTIONS = "SELECTIONS: none\n"


def _emit(out: Text, content: str, style: str | None = None) -> None:
    # Text.append strips control characters; tokens are kept verbatim
    out.append_tokens([(content, style)])


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Independent switches for text rendering.

    Attributes:
        include_terminals: List terminal tabs and count them
        include_file_content: Embed the body of every listed file
        legacy_selection_format: Numbered ranges with fenced snippets
        reduce_redundant_sections: Drop the pinned section (pinned tabs are
            tagged inline anyway) and zero counts
    """

    include_terminals: bool = False
    include_file_content: bool = False
    legacy_selection_format: bool = False
    reduce_redundant_sections: bool = True


def visible_tabs(tabs: Sequence[Tab], include_terminals: bool) -> list[Tab]:
    if include_terminals:
        return list(tabs)
    return [tab for tab in tabs if tab.kind is not TabKind.TERMINAL]


def _fenced(out: Text, body: str, language: str, indent: str) -> None:
    _emit(out, f"{indent}```{language}\n")
    for line in body.split("\n"):
        _emit(out, f"{indent}{line}\n")
    _emit(out, f"{indent}```\n")


def _file_body(out: Text, path: str) -> None:
    file_path = Path(path)
    if not file_path.exists():
        return
    try:
        body = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _emit(out, f"{_FILE_INDENT}[Error reading file: {e}]\n")
        return
    _fenced(out, body, fence_language(path), _FILE_INDENT)


def render_workspace(workspace: Workspace) -> Text:
    out = Text()
    _emit(out, "WORKSPACE:", style=_LABEL)
    _emit(out, f" {workspace.folder_path}\n")
    _emit(out, "WORKSPACE_ID:", style=_LABEL)
    _emit(out, f" {workspace.id}\n")
    return out


def render_tab_list(
    tabs: Sequence[Tab],
    title: str = "EDITORS",
    *,
    include_content: bool = False,
    include_pinned_content: bool = False,
) -> Text:
    """Numbered tab listing with status tags and optional file bodies."""
    out = Text()
    if not tabs:
        _emit(out, f"{title}: none\n")
        return out

    _emit(out, f"{title}:", style=_LABEL)
    _emit(out, "\n")
    for number, tab in enumerate(tabs, start=1):
        _emit(out, f"  {number}. {tab.path}")
        if tab.pinned:
            _emit(out, " ")
            _emit(out, "[PINNED]", style=_PINNED)
        if tab.kind is TabKind.TERMINAL:
            _emit(out, " [TERMINAL]")
        if tab.selections:
            labels = ",".join(r.label for r in tab.selections)
            _emit(out, " ")
            _emit(out, f"[SELECTED:{labels}]", style=_SELECTED)
        _emit(out, "\n")

        wants_body = include_content or (include_pinned_content and tab.pinned)
        if wants_body and tab.is_file:
            _file_body(out, tab.path)
    return out


def _render_legacy_selections(selections: Sequence[FileSelections]) -> Text:
    out = Text("SELECTIONS:\n")
    for number, selection in enumerate(selections, start=1):
        _emit(out, f"  {number}. {selection.path}\n")
        language = fence_language(selection.path)
        for sub, rng in enumerate(selection.ranges, start=1):
            _emit(out, f"{_FILE_INDENT}{sub}. {rng.label}\n")
            item = selection.content_for(rng)
            if item is not None:
                _fenced(out, item.text, language, _SNIPPET_INDENT)
    return out


def render_selections(selections: Sequence[FileSelections], *, legacy: bool = False) -> Text:
    """Selections in IDE style (default) or the legacy numbered style."""
    if not selections:
        return Text(NO_SELECTIONS)
    if legacy:
        return _render_legacy_selections(selections)

    out = Text()
    for number, selection in enumerate(selections, start=1):
        header = f"The user selected the following lines from {selection.path}:"
        _emit(out, header, style=_SELECTION_HEADER)
        _emit(out, "\n")
        if selection.content is not None:
            for item in selection.content:
                for line in item.text.split("\n"):
                    _emit(out, f"{line}\n", style=_SELECTION_TEXT)
        else:
            for rng in selection.ranges:
                _emit(out, f"{rng.label}\n", style=_SELECTION_TEXT)
        if number < len(selections):
            _emit(out, "\n")
    return out


def render_raw(snapshot: ContextSnapshot, options: RenderOptions | None = None) -> Text:
    """Full context report: workspace, tabs, selections, totals."""
    options = options or RenderOptions()
    open_tabs = visible_tabs(snapshot.tabs, options.include_terminals)
    pinned_tabs = visible_tabs(snapshot.pinned_tabs, options.include_terminals)
    reduce = options.reduce_redundant_sections

    out = Text()
    _emit(out, "=== VS CODE RAW CONTEXT ===", style=_BANNER)
    _emit(out, "\n")
    out.append_text(render_workspace(snapshot.workspace))
    _emit(out, "\n")

    # Pinned file bodies are always embedded
    out.append_text(
        render_tab_list(
            open_tabs,
            "OPEN_EDITORS",
            include_content=options.include_file_content,
            include_pinned_content=True,
        )
    )
    _emit(out, "\n")

    if not reduce and pinned_tabs:
        out.append_text(
            render_tab_list(
                pinned_tabs, "PINNED_EDITORS", include_content=options.include_file_content
            )
        )
        _emit(out, "\n")

    if snapshot.selections:
        out.append_text(
            render_selections(snapshot.selections, legacy=options.legacy_selection_format)
        )
        _emit(out, "\n")

    counts = (
        ("TOTAL_OPEN", len(open_tabs)),
        ("TOTAL_PINNED", len(pinned_tabs)),
        ("TOTAL_SELECTED", len(snapshot.selections)),
    )
    for label, count in counts:
        if reduce and count == 0:
            continue
        _emit(out, f"{label}:", style=_LABEL)
        _emit(out, f" {count}\n")

    _emit(out, "=== END RAW CONTEXT ===", style=_BANNER)
    _emit(out, "\n")
    return out
