"""Selection recovery from per-file editor view state.

The text editor persists view state under
``memento/workbench.editors.files.textFileEditor`` as::

    {"textEditorViewState": [
        [<file URI>, {<group id>: {"cursorState": [
            {"inSelectionMode": true,
             "selectionStart": {"lineNumber": 10, "column": 5},
             "position": {"lineNumber": 8, "column": 1}}], ...}}],
        ...]}

``selectionStart`` is the anchor and ``position`` the moving end, so a
selection dragged upwards is stored backwards.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

from vctx.core.paths import file_uri_to_path
from vctx.editor.models import FileSelections, Position, Range, SelectionContent

log = structlog.get_logger()


def _position(value: Any) -> Position | None:
    if not isinstance(value, dict):
        return None
    line = value.get("lineNumber")
    column = value.get("column")
    if not (isinstance(line, int) and isinstance(column, int)):
        return None
    if line < 1 or column < 1:
        return None
    return Position(line, column)


def selection_range(cursor: Any) -> Range | None:
    """Range for one cursor descriptor, or None if it is not a selection."""
    if not isinstance(cursor, dict) or cursor.get("inSelectionMode") is not True:
        return None
    anchor = _position(cursor.get("selectionStart"))
    position = _position(cursor.get("position"))
    if anchor is None or position is None:
        return None
    rng = Range.between(anchor, position)
    return None if rng.is_empty else rng


def _view_state_ranges(states: Any) -> list[Range]:
    ranges: list[Range] = []
    if not isinstance(states, dict):
        return ranges
    for state in states.values():
        cursors = state.get("cursorState") if isinstance(state, dict) else None
        if not isinstance(cursors, list):
            continue
        for cursor in cursors:
            rng = selection_range(cursor)
            if rng is not None:
                ranges.append(rng)
    return ranges


def parse_selections(raw_view_state: str | None) -> list[FileSelections]:
    """Collect selection ranges per file from the serialized view state.

    Files without any real selection are omitted. Ranges keep the order of
    the view states they came from.
    """
    if not raw_view_state:
        return []
    try:
        document = json.loads(raw_view_state)
    except json.JSONDecodeError as e:
        log.debug("view_state_unparseable", error=str(e))
        return []

    entries = document.get("textEditorViewState") if isinstance(document, dict) else None
    if not isinstance(entries, list):
        return []

    by_path: dict[str, list[Range]] = {}
    for entry in entries:
        if not (isinstance(entry, list) and len(entry) == 2 and isinstance(entry[0], str)):
            continue
        path = file_uri_to_path(entry[0])
        if path is None:
            continue
        ranges = _view_state_ranges(entry[1])
        if ranges:
            by_path.setdefault(path, []).extend(ranges)

    return [FileSelections(path=path, ranges=tuple(ranges)) for path, ranges in by_path.items()]


def slice_range(lines: list[str], rng: Range) -> str | None:
    """Text covered by ``rng`` (end column inclusive), or None if out of bounds."""
    if rng.end_line > len(lines):
        return None
    start = lines[rng.start_line - 1]
    if rng.start_line == rng.end_line:
        return start[rng.start_col - 1 : rng.end_col]
    interior = lines[rng.start_line : rng.end_line - 1]
    end = lines[rng.end_line - 1]
    return "\n".join([start[rng.start_col - 1 :], *interior, end[: rng.end_col]])


def extract_content(
    file_path: str | Path, ranges: Sequence[Range]
) -> list[SelectionContent] | None:
    """Re-read ``file_path`` and slice out each range's current text.

    Ranges past the end of the file, or whose text is blank, are dropped.
    Returns None if the file cannot be read.
    """
    try:
        text = Path(file_path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.debug("selection_file_unreadable", path=str(file_path), error=str(e))
        return None

    lines = [line.removesuffix("\r") for line in text.split("\n")]
    results: list[SelectionContent] = []
    for rng in ranges:
        selected = slice_range(lines, rng)
        if selected is None or not selected.strip():
            continue
        results.append(SelectionContent(range=rng, text=selected, line_count=rng.line_count))
    return results


def with_content(selection: FileSelections) -> FileSelections:
    """Attach extracted text to ``selection`` when the file is readable."""
    content = extract_content(selection.path, selection.ranges)
    if content is None:
        return selection
    return FileSelections(path=selection.path, ranges=selection.ranges, content=tuple(content))
