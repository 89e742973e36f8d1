"""vctx subcommands: raw, open, pinned, selections, workspace."""

from pathlib import Path

import click

from vctx.cli.utils import (
    GlobalOptions,
    echo_json,
    echo_text,
    load_snapshot,
    reported_errors,
)
from vctx.context import locate_workspace
from vctx.formatting import render_raw, render_selections, render_tab_list, render_workspace

_file_argument = click.argument("file", default=".", type=click.Path(path_type=Path))


@click.command()
@_file_argument
@click.pass_obj
def raw_command(opts: GlobalOptions, file: Path) -> None:
    """Full context: workspace, open editors, selections (recommended).

    FILE is any path inside the workspace (default: current directory).
    """
    snapshot = load_snapshot(opts, file)
    if opts.as_json:
        echo_json(snapshot.to_dict())
    else:
        echo_text(opts, render_raw(snapshot, opts.render_options))


@click.command()
@_file_argument
@click.pass_obj
def open_command(opts: GlobalOptions, file: Path) -> None:
    """Show open editors in the workspace."""
    snapshot = load_snapshot(opts, file)
    tabs = opts.visible(snapshot.tabs)
    if opts.as_json:
        echo_json({"workspace": snapshot.workspace.to_dict(), "tabs": [t.to_dict() for t in tabs]})
    else:
        echo_text(opts, render_tab_list(tabs, "OPEN_EDITORS", include_content=opts.content))


@click.command()
@_file_argument
@click.pass_obj
def pinned_command(opts: GlobalOptions, file: Path) -> None:
    """Show pinned editors in the workspace."""
    snapshot = load_snapshot(opts, file)
    tabs = opts.visible(snapshot.pinned_tabs)
    if opts.as_json:
        echo_json(
            {"workspace": snapshot.workspace.to_dict(), "pinnedTabs": [t.to_dict() for t in tabs]}
        )
    else:
        echo_text(opts, render_tab_list(tabs, "PINNED_EDITORS", include_content=opts.content))


@click.command()
@_file_argument
@click.pass_obj
def selections_command(opts: GlobalOptions, file: Path) -> None:
    """Show text selections (active file only unless --all-selections)."""
    snapshot = load_snapshot(opts, file)
    if opts.as_json:
        echo_json(
            {
                "workspace": snapshot.workspace.to_dict(),
                "activeTabPath": snapshot.active_tab_path,
                "selections": [s.to_dict() for s in snapshot.selections],
            }
        )
    else:
        echo_text(opts, render_selections(snapshot.selections, legacy=opts.legacy_format))


@click.command()
@_file_argument
@click.pass_obj
def workspace_command(opts: GlobalOptions, file: Path) -> None:
    """Show the workspace that owns FILE."""
    with reported_errors():
        workspace = locate_workspace(file, opts.config)
    if opts.as_json:
        echo_json(workspace.to_dict())
    else:
        echo_text(opts, render_workspace(workspace))
