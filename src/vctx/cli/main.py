"""vctx CLI - editor context extractor for AI assistants."""

from __future__ import annotations

import click

from vctx import __version__
from vctx.cli.commands import (
    open_command,
    pinned_command,
    raw_command,
    selections_command,
    workspace_command,
)
from vctx.cli.shorthand import expand_shorthand
from vctx.cli.utils import GlobalOptions, reported_errors
from vctx.config.loader import load_config
from vctx.core.logging import configure_logging

_EPILOG = """\
\b
Quick commands:
  -r     Full context (raw)
  -s     Text selections
  -o     Open files
  -p     Pinned files
  -w     Workspace info
  -rc    Raw + content          -sc  Selections + content
  -oc    Open files + content   -pc  Pinned + content

\b
Examples:
  vctx          Full context for the current directory
  vctx -sc      Selections with content
  vctx -o       Just open files

\b
Notes:
  Auto-refreshes editor state (brief app switch, macOS only).
  Shows selections from the visible file only (use --all-selections for all).
  File paths default to the current directory.
"""


class ShorthandGroup(click.Group):
    """Group that accepts ``-r``/``-sc``-style shorthands and implies ``raw``."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        return super().parse_args(ctx, expand_shorthand(args, self.commands))


@click.group(
    cls=ShorthandGroup,
    epilog=_EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, "-V", "--version", prog_name="vctx")
@click.option("-j", "--json", "as_json", is_flag=True, help="Output in JSON format")
@click.option("-c", "--content", is_flag=True, help="Include full file content for listed files")
@click.option("-t", "--terminals", is_flag=True, help="Include terminals in output")
@click.option("--legacy-format", is_flag=True, help="Use legacy selection format")
@click.option(
    "--all-selections", is_flag=True, help="Show selections from all open files (not just visible)"
)
@click.option("--smart/--no-smart", default=True, help="Hide redundant sections")
@click.option("--refresh/--no-refresh", default=True, help="Refresh editor state before reading")
@click.option("--color/--no-color", default=True, help="Colored output on terminals")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    as_json: bool,
    content: bool,
    terminals: bool,
    legacy_format: bool,
    all_selections: bool,
    smart: bool,
    refresh: bool,
    color: bool,
    verbose: bool,
) -> None:
    """vctx - VS Code context extractor for AI assistants."""
    with reported_errors():
        config = load_config()
    configure_logging(config=config.logging, level="DEBUG" if verbose else None)
    ctx.obj = GlobalOptions(
        config=config,
        as_json=as_json,
        content=content,
        terminals=terminals,
        legacy_format=legacy_format,
        all_selections=all_selections,
        smart=smart,
        refresh=refresh,
        color=color,
    )


cli.add_command(raw_command, name="raw")
cli.add_command(open_command, name="open")
cli.add_command(pinned_command, name="pinned")
cli.add_command(selections_command, name="selections")
cli.add_command(workspace_command, name="workspace")


if __name__ == "__main__":
    cli()
