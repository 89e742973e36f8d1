"""Editor state decoding: layout, tabs, selections."""

from vctx.editor.layout import parse_open_tabs, resolve_active_tab
from vctx.editor.models import (
    FileSelections,
    Position,
    Range,
    SelectionContent,
    Tab,
    TabKind,
    TerminalInfo,
)
from vctx.editor.selections import extract_content, parse_selections

__all__ = [
    "FileSelections",
    "Position",
    "Range",
    "SelectionContent",
    "Tab",
    "TabKind",
    "TerminalInfo",
    "extract_content",
    "parse_open_tabs",
    "parse_selections",
    "resolve_active_tab",
]
