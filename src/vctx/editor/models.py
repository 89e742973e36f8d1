"""Editor state value objects: tabs, selection ranges, selected text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TabKind(Enum):
    """Kind of an open tab."""

    FILE = "file"
    TERMINAL = "terminal"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """1-based line/column position in a text document."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Range:
    """Normalized selection span, 1-based, start <= end.

    Both ends are inclusive: ``end_col`` is the column of the last selected
    character on ``end_line``.
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    @classmethod
    def between(cls, anchor: Position, position: Position) -> Range:
        """Build a range from two ends in either order."""
        start, end = (anchor, position) if anchor <= position else (position, anchor)
        return cls(start.line, start.column, end.line, end.column)

    @property
    def start(self) -> Position:
        return Position(self.start_line, self.start_col)

    @property
    def end(self) -> Position:
        return Position(self.end_line, self.end_col)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    @property
    def label(self) -> str:
        """Compact label: ``L8:C1-5`` or ``L8:C1-L10:C5``."""
        if self.start_line == self.end_line:
            return f"L{self.start_line}:C{self.start_col}-{self.end_col}"
        return f"L{self.start_line}:C{self.start_col}-L{self.end_line}:C{self.end_col}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "startLine": self.start_line,
            "startCol": self.start_col,
            "endLine": self.end_line,
            "endCol": self.end_col,
            "label": self.label,
        }


@dataclass(frozen=True, slots=True)
class TerminalInfo:
    """Details of a terminal tab. ``cwd`` prefers the live process value."""

    pid: int | None
    title: str | None
    cwd: str | None
    terminal_id: int | str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"pid": self.pid, "title": self.title, "cwd": self.cwd, "id": self.terminal_id}


@dataclass(frozen=True, slots=True)
class Tab:
    """An open editor or terminal tab.

    ``path`` is the absolute file path for file tabs and a display
    descriptor for terminals. ``order_index`` is the tab's position in its
    group; the first ``sticky`` positions of a group are pinned.
    """

    path: str
    kind: TabKind
    pinned: bool
    group_id: int | str | None
    order_index: int
    selections: tuple[Range, ...] = ()
    terminal: TerminalInfo | None = None

    @property
    def is_file(self) -> bool:
        return self.kind is TabKind.FILE

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": self.path,
            "kind": self.kind.value,
            "pinned": self.pinned,
            "groupId": self.group_id,
            "orderIndex": self.order_index,
            "selections": [r.to_dict() for r in self.selections],
        }
        if self.terminal is not None:
            data["terminal"] = self.terminal.to_dict()
        return data


@dataclass(frozen=True, slots=True)
class SelectionContent:
    """Text currently found in a file at a selection range."""

    range: Range
    text: str
    line_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"range": self.range.to_dict(), "text": self.text, "lineCount": self.line_count}


@dataclass(frozen=True, slots=True)
class FileSelections:
    """All selection ranges recorded for one file, with optional text."""

    path: str
    ranges: tuple[Range, ...]
    content: tuple[SelectionContent, ...] | None = None

    def content_for(self, rng: Range) -> SelectionContent | None:
        for item in self.content or ():
            if item.range == rng:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": self.path,
            "ranges": [r.to_dict() for r in self.ranges],
        }
        if self.content is not None:
            data["content"] = [c.to_dict() for c in self.content]
        return data
