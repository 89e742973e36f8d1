"""Tests for the vctx command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from vscode_state import (
    cursor,
    file_editor,
    layout_json,
    leaf,
    state_items,
    terminal_editor,
    view_state_json,
    write_workspace,
)

from vctx import __version__
from vctx.cli.main import cli

runner = CliRunner()


@pytest.fixture
def cli_env(storage_root: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Environment pointing the CLI at ``storage_root`` with no global config."""
    monkeypatch.setattr("vctx.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-config.yaml")
    return {
        "VCTX__STORAGE__ROOT": str(storage_root),
        "VCTX__REFRESH__ENABLED": "false",
        "NO_COLOR": "1",
    }


@pytest.fixture
def workspace_repo(storage_root: Path, repo: Path) -> Path:
    """Workspace with README pinned, a.js active with a selection, one terminal."""
    a_js = str(repo / "src" / "a.js")
    readme = str(repo / "README.md")
    layout = layout_json(
        leaf(
            1,
            [file_editor(readme), file_editor(a_js), terminal_editor(pid=None, title="zsh")],
            sticky=1,
            mru=[1, 0, 2],
        ),
        active_group=1,
    )
    view_state = view_state_json({Path(a_js).as_uri(): [cursor((4, 8), (3, 10))]})
    write_workspace(storage_root, "ws42", repo, state_items(layout, view_state))
    return repo


class TestRawCommand:
    """vctx raw / implied raw."""

    def test_given_workspace_when_raw_then_full_report(
        self, cli_env: dict[str, str], workspace_repo: Path
    ) -> None:
        result = runner.invoke(cli, ["--no-refresh", "raw", str(workspace_repo)], env=cli_env)

        assert result.exit_code == 0, result.output
        out = result.output
        assert out.startswith("=== VS CODE RAW CONTEXT ===\n")
        assert f"WORKSPACE: {workspace_repo}\n" in out
        assert "WORKSPACE_ID: ws42\n" in out
        assert f"  1. {workspace_repo / 'README.md'} [PINNED]\n" in out
        assert "     ```markdown\n" in out
        assert f"  2. {workspace_repo / 'src' / 'a.js'} [SELECTED:L3:C10-L4:C8]\n" in out
        assert "Terminal" not in out
        assert "main() {\n  return\n" in out
        assert "TOTAL_OPEN: 2\nTOTAL_PINNED: 1\nTOTAL_SELECTED: 1\n" in out
        assert out.endswith("=== END RAW CONTEXT ===\n")

    def test_given_no_command_when_invoked_then_raw_for_cwd(
        self, cli_env: dict[str, str], workspace_repo: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(workspace_repo)
        result = runner.invoke(cli, ["--no-refresh"], env=cli_env)

        assert result.exit_code == 0, result.output
        assert "WORKSPACE_ID: ws42\n" in result.output

    def test_given_terminals_flag_then_terminals_listed(
        self, cli_env: dict[str, str], workspace_repo: Path
    ) -> None:
        result = runner.invoke(cli, ["--no-refresh", "-t", str(workspace_repo)], env=cli_env)

        assert result.exit_code == 0, result.output
        assert "  3. Terminal: zsh (PID: N/A) [TERMINAL]\n" in result.output
        assert "TOTAL_OPEN: 3\n" in result.output

    def test_given_no_smart_then_pinned_section_shown(
        self, cli_env: dict[str, str], workspace_repo: Path
    ) -> None:
        result = runner.invoke(
            cli, ["--no-refresh", "--no-smart", "raw", str(workspace_repo)], env=cli_env
        )
        assert result.exit_code == 0, result.output
        assert "PINNED_EDITORS:\n" in result.output

    def test_given_json_flag_then_snapshot_dict(
        self, cli_env: dict[str, str], workspace_repo: Path
    ) -> None:
        result = runner.invoke(cli, ["--no-refresh", "-j", "raw", str(workspace_repo)], env=cli_env)

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["workspace"]["id"] == "ws42"
        assert data["activeTabPath"] == str(workspace_repo / "src" / "a.js")
        assert [t["kind"] for t in data["tabs"]] == ["file", "file", "terminal"]
        assert data["selections"][0]["ranges"][0]["label"] == "L3:C10-L4:C8"


class TestOtherCommands:
    """open, pinned, selections and workspace subcommands."""

    def test_open(self, cli_env: dict[str, str], workspace_repo: Path) -> None:
        result = runner.invoke(cli, ["--no-refresh", "open", str(workspace_repo)], env=cli_env)

        assert result.exit_code == 0, result.output
        assert result.output.startswith("OPEN_EDITORS:\n")
        assert "```" not in result.output

    def test_open_shorthand_with_content(
        self, cli_env: dict[str, str], workspace_repo: Path
    ) -> None:
        result = runner.invoke(cli, ["-oc", str(workspace_repo), "--no-refresh"], env=cli_env)

        assert result.exit_code == 0, result.output
        assert "     ```javascript\n" in result.output
        assert "     ```markdown\n" in result.output

    def test_pinned(self, cli_env: dict[str, str], workspace_repo: Path) -> None:
        result = runner.invoke(cli, ["-p", str(workspace_repo), "--no-refresh"], env=cli_env)

        assert result.exit_code == 0, result.output
        assert result.output == f"PINNED_EDITORS:\n  1. {workspace_repo / 'README.md'} [PINNED]\n"

    def test_shorthand_with_option_before_file(
        self, cli_env: dict[str, str], workspace_repo: Path
    ) -> None:
        args = ["-o", "--json", "--no-refresh", str(workspace_repo)]
        result = runner.invoke(cli, args, env=cli_env)

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["workspace"]["id"] == "ws42"

    def test_pinned_json(self, cli_env: dict[str, str], workspace_repo: Path) -> None:
        result = runner.invoke(
            cli, ["--no-refresh", "--json", "pinned", str(workspace_repo)], env=cli_env
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [t["path"] for t in data["pinnedTabs"]] == [str(workspace_repo / "README.md")]

    def test_selections(self, cli_env: dict[str, str], workspace_repo: Path) -> None:
        result = runner.invoke(cli, ["-s", str(workspace_repo), "--no-refresh"], env=cli_env)

        assert result.exit_code == 0, result.output
        assert result.output == (
            f"The user selected the following lines from {workspace_repo / 'src' / 'a.js'}:\n"
            "main() {\n"
            "  return\n"
        )

    def test_selections_legacy(self, cli_env: dict[str, str], workspace_repo: Path) -> None:
        result = runner.invoke(
            cli,
            ["--no-refresh", "--legacy-format", "selections", str(workspace_repo)],
            env=cli_env,
        )

        assert result.exit_code == 0, result.output
        assert result.output.startswith("SELECTIONS:\n")
        assert "     1. L3:C10-L4:C8\n        ```javascript\n" in result.output

    def test_selections_none(
        self, cli_env: dict[str, str], storage_root: Path, repo: Path
    ) -> None:
        write_workspace(storage_root, "empty", repo)
        result = runner.invoke(cli, ["--no-refresh", "selections", str(repo)], env=cli_env)

        assert result.exit_code == 0, result.output
        assert result.output == "SELECTIONS: none\n"

    def test_workspace(self, cli_env: dict[str, str], workspace_repo: Path) -> None:
        result = runner.invoke(cli, ["-w", str(workspace_repo / "src" / "a.js")], env=cli_env)

        assert result.exit_code == 0, result.output
        assert result.output == f"WORKSPACE: {workspace_repo}\nWORKSPACE_ID: ws42\n"

    def test_workspace_json(self, cli_env: dict[str, str], workspace_repo: Path) -> None:
        result = runner.invoke(cli, ["-j", "workspace", str(workspace_repo)], env=cli_env)

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"id": "ws42", "folderPath": str(workspace_repo)}


class TestErrors:
    """Failures exit with status 1 and a message."""

    def test_given_unknown_file_then_fails(
        self, cli_env: dict[str, str], workspace_repo: Path, tmp_path: Path
    ) -> None:
        stray = tmp_path / "elsewhere" / "x.py"
        result = runner.invoke(cli, ["--no-refresh", "raw", str(stray)], env=cli_env)

        assert result.exit_code == 1
        assert f"No workspace found for file: {stray}" in result.output

    def test_given_missing_storage_then_fails(
        self, cli_env: dict[str, str], tmp_path: Path
    ) -> None:
        env = {**cli_env, "VCTX__STORAGE__ROOT": str(tmp_path / "absent")}
        result = runner.invoke(cli, ["-w", str(tmp_path)], env=env)

        assert result.exit_code == 1
        assert "VS Code workspace storage not found" in result.output

    def test_given_invalid_config_value_then_fails(
        self, cli_env: dict[str, str], workspace_repo: Path
    ) -> None:
        env = {**cli_env, "VCTX__REFRESH__SETTLE_DELAY_SEC": "60"}
        result = runner.invoke(cli, ["-w", str(workspace_repo)], env=env)

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestMeta:
    def test_version(self) -> None:
        result = runner.invoke(cli, ["-V"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_quick_commands(self) -> None:
        result = runner.invoke(cli, ["-h"])

        assert result.exit_code == 0
        assert "Quick commands:" in result.output
        assert "selections" in result.output


class TestVerbatimOutput:
    """Selected text is printed exactly as it appears in the file."""

    GO_SOURCE = "package main\n\nfunc f() {\n\tx := 1\x0c\n\treturn\n}\n"

    @pytest.fixture
    def go_repo(self, storage_root: Path, tmp_path: Path) -> Path:
        root = tmp_path / "gorepo"
        root.mkdir()
        main_go = root / "main.go"
        main_go.write_text(self.GO_SOURCE)
        layout = layout_json(leaf(1, [file_editor(str(main_go))]), active_group=1)
        view_state = view_state_json({main_go.as_uri(): [cursor((4, 1), (5, 7))]})
        write_workspace(storage_root, "go", root, state_items(layout, view_state))
        return root

    def test_selection_keeps_tabs_and_control_characters(
        self, cli_env: dict[str, str], go_repo: Path
    ) -> None:
        result = runner.invoke(cli, ["-s", str(go_repo), "--no-refresh"], env=cli_env)

        assert result.exit_code == 0, result.output
        assert result.output == (
            f"The user selected the following lines from {go_repo / 'main.go'}:\n"
            "\tx := 1\x0c\n"
            "\treturn\n"
        )

    def test_coloured_mode_keeps_tabs(self, cli_env: dict[str, str], go_repo: Path) -> None:
        env: dict[str, str | None] = {**cli_env, "NO_COLOR": None}
        result = runner.invoke(cli, ["--color", "-s", str(go_repo), "--no-refresh"], env=env)

        assert result.exit_code == 0, result.output
        assert "\tx := 1\x0c\n\treturn\n" in result.output
