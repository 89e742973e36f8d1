"""Shorthand argument rewriting.

``vctx -sc src/app.py`` is short for
``vctx --content selections src/app.py``. The first argument may combine a
command letter (r=raw, o=open, p=pinned, s=selections, w=workspace) with
modifiers (c=--content, t=--terminals). Without any subcommand, ``raw`` is
implied and FILE defaults to the current directory.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Sequence

SHORTHAND_COMMANDS = {
    "r": "raw",
    "o": "open",
    "p": "pinned",
    "s": "selections",
    "w": "workspace",
}

DEFAULT_COMMAND = "raw"

_SHORTHAND_RE = re.compile(r"^-([ropws])([ct]*)$")
_PASSTHROUGH = frozenset({"-h", "--help", "-V", "--version"})
_MODIFIER_FLAGS = {"c": "--content", "t": "--terminals"}


def _split_file(rest: list[str]) -> tuple[str, list[str]]:
    """First positional in ``rest`` is FILE (default "."); the rest are options."""
    for index, arg in enumerate(rest):
        if not arg.startswith("-"):
            return arg, [*rest[:index], *rest[index + 1 :]]
    return ".", rest


def expand_shorthand(args: Sequence[str], command_names: Collection[str]) -> list[str]:
    """Rewrite shorthand invocations into ``[global options] COMMAND FILE``."""
    args = list(args)
    first = args[0] if args else None
    if first in _PASSTHROUGH:
        return args

    if first == "-c" and (len(args) < 2 or not args[1].startswith("-")):
        if len(args) < 2 or args[1] not in command_names:
            file_arg, rest = _split_file(args[1:])
            return ["--content", *rest, DEFAULT_COMMAND, file_arg]

    match = _SHORTHAND_RE.match(first) if first else None
    if match:
        letter, modifiers = match.groups()
        flags = [_MODIFIER_FLAGS[m] for m in dict.fromkeys(modifiers)]
        file_arg, rest = _split_file(args[1:])
        return [*flags, *rest, SHORTHAND_COMMANDS[letter], file_arg]

    if any(arg in command_names for arg in args):
        return args

    # No subcommand: imply raw before the first positional (FILE), if any
    for index, arg in enumerate(args):
        if not arg.startswith("-"):
            return [*args[:index], DEFAULT_COMMAND, *args[index:]]
    return [*args, DEFAULT_COMMAND]
