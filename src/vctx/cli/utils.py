"""CLI utilities shared by the subcommands."""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
from rich.color import ColorSystem
from rich.style import Style
from rich.text import Text

from vctx.config.models import VctxConfig
from vctx.context import ContextOptions, ContextSnapshot, build_context
from vctx.core.errors import VctxError
from vctx.editor.models import Tab
from vctx.formatting import RenderOptions, visible_tabs


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the subcommand, shared by all of them."""

    config: VctxConfig
    as_json: bool = False
    content: bool = False
    terminals: bool = False
    legacy_format: bool = False
    all_selections: bool = False
    smart: bool = True
    refresh: bool = True
    color: bool = True

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(
            include_terminals=self.terminals,
            include_file_content=self.content,
            legacy_selection_format=self.legacy_format,
            reduce_redundant_sections=self.smart,
        )

    def visible(self, tabs: tuple[Tab, ...]) -> list[Tab]:
        return visible_tabs(tabs, self.terminals)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn vctx errors into click errors (stderr message, exit code 1)."""
    try:
        yield
    except VctxError as e:
        raise click.ClickException(e.message) from e


def load_snapshot(opts: GlobalOptions, file: Path) -> ContextSnapshot:
    """Build the snapshot for FILE according to the global options."""
    options = ContextOptions(all_selections=opts.all_selections, refresh=opts.refresh)
    with reported_errors():
        return build_context(file, options, config=opts.config)


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


def styled(text: Text) -> str:
    """ANSI-coloured form of ``text``, characters untouched (no wrapping)."""
    plain = text.plain
    pieces: list[str] = []
    position = 0
    for span in sorted(text.spans, key=lambda s: s.start):
        start = max(span.start, position)
        if start >= span.end:
            continue
        pieces.append(plain[position:start])
        style = Style.parse(span.style) if isinstance(span.style, str) else span.style
        pieces.append(style.render(plain[start : span.end], color_system=ColorSystem.TRUECOLOR))
        position = span.end
    pieces.append(plain[position:])
    return "".join(pieces)


def echo_text(opts: GlobalOptions, text: Text) -> None:
    """Print a rendered report. Colour only on a terminal, never with NO_COLOR."""
    if not opts.color or "NO_COLOR" in os.environ:
        click.echo(text.plain, nl=False)
    else:
        # click drops the ANSI codes again when stdout is not a terminal
        click.echo(styled(text), nl=False)
