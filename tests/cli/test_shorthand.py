"""Tests for shorthand argument rewriting."""

from __future__ import annotations

import pytest

from vctx.cli.shorthand import SHORTHAND_COMMANDS, expand_shorthand

COMMANDS = frozenset(SHORTHAND_COMMANDS.values())


def expand(*args: str) -> list[str]:
    return expand_shorthand(list(args), COMMANDS)


class TestCommandLetters:
    @pytest.mark.parametrize(
        ("flag", "command"),
        [
            ("-r", "raw"),
            ("-o", "open"),
            ("-p", "pinned"),
            ("-s", "selections"),
            ("-w", "workspace"),
        ],
    )
    def test_letter_selects_command(self, flag: str, command: str) -> None:
        assert expand(flag) == [command, "."]

    def test_file_argument_kept(self) -> None:
        assert expand("-s", "src/app.py") == ["selections", "src/app.py"]

    def test_content_modifier(self) -> None:
        assert expand("-sc", "src/app.py") == ["--content", "selections", "src/app.py"]

    def test_content_and_terminals(self) -> None:
        assert expand("-rct") == ["--content", "--terminals", "raw", "."]

    def test_repeated_modifier_once(self) -> None:
        assert expand("-occ") == ["--content", "open", "."]

    def test_trailing_options_move_before_command(self) -> None:
        assert expand("-o", "--json", "--no-refresh") == ["--json", "--no-refresh", "open", "."]
        assert expand("-p", "x.py", "-j") == ["-j", "pinned", "x.py"]

    def test_options_before_file(self) -> None:
        assert expand("-o", "--json", "src/a.js") == ["--json", "open", "src/a.js"]
        assert expand("-sc", "-j", "--no-refresh", "x.py") == [
            "--content",
            "-j",
            "--no-refresh",
            "selections",
            "x.py",
        ]

    def test_options_on_both_sides_of_file(self) -> None:
        assert expand("-p", "-j", "x.py", "--no-smart") == ["-j", "--no-smart", "pinned", "x.py"]

    def test_unknown_letters_untouched(self) -> None:
        assert expand("-x") == ["-x", "raw"]


class TestContentFlag:
    def test_lone_content_flag_implies_raw(self) -> None:
        assert expand("-c") == ["--content", "raw", "."]

    def test_content_flag_with_file(self) -> None:
        assert expand("-c", "src/app.py") == ["--content", "raw", "src/app.py"]

    def test_content_flag_before_command(self) -> None:
        assert expand("-c", "open") == ["-c", "open"]


class TestDefaults:
    def test_no_arguments(self) -> None:
        assert expand() == ["raw"]

    def test_options_only(self) -> None:
        assert expand("--json", "--no-refresh") == ["--json", "--no-refresh", "raw"]

    def test_bare_file(self) -> None:
        assert expand("--json", "src/app.py") == ["--json", "raw", "src/app.py"]

    def test_explicit_command_unchanged(self) -> None:
        assert expand("--json", "open", "src") == ["--json", "open", "src"]

    @pytest.mark.parametrize("flag", ["-h", "--help", "-V", "--version"])
    def test_help_and_version_pass_through(self, flag: str) -> None:
        assert expand(flag) == [flag]
