"""CLI tests for resolution, planning, and rename previews."""

import json
import os
from pathlib import Path
from typing import Any

from click.testing import CliRunner

from snap_organizer.cli import cli


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = dict(os.environ)
    env["HOME"] = str(tmp_path)
    return env


def test_cli_help_displays_commands() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Snap Organizer sorts project items" in result.output
    for command in ("check", "config", "plan", "rename", "resolve"):
        assert command in result.output


def test_resolve_reports_destinations(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["resolve", "clip.mp4", "notes.txt", "--json"], env=env)

    assert result.exit_code == 0
    assert '"02_Footage"' in result.output
    assert '"unmatched"' in result.output


def test_resolve_render_comp_by_type(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["resolve", "Main Comp", "--type", "comp", "--json"], env=env)

    assert result.exit_code == 0
    assert '"reason": "render"' in result.output


def test_resolve_reads_items_file(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    items = tmp_path / "items.json"
    items.write_text(
        json.dumps([{"id": 10, "name": "plate.0001.exr", "isSequenceMember": True}]),
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["resolve", "--items", str(items), "--json"], env=env)

    assert result.exit_code == 0
    assert '"category": "Footage"' in result.output


def test_resolve_requires_items(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["resolve"], env=_env_with_home(tmp_path))

    assert result.exit_code != 0
    assert "Provide item NAMES" in result.output


def test_plan_lists_destination_paths(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["plan", "clip.mp4", "music.wav", "--json"], env=env)

    assert result.exit_code == 0
    assert '"01_Source/02_Footage"' in result.output
    assert '"01_Source/04_Audio"' in result.output


def test_check_reports_clean_default_config(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["check"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert "No configuration warnings." in result.output


def test_rename_preview(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(
        cli,
        ["rename", "clip.mp4", "noext", "--prefix", "A_", "--suffix", "_v2", "--json"],
        env=env,
    )

    assert result.exit_code == 0
    assert '"A_clip_v2.mp4"' in result.output
    assert '"A_noext_v2"' in result.output
    assert '"hasChanges": true' in result.output


def test_rename_without_changes_warns(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["rename", "clip.mp4"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert "No changes to apply." in result.output


def test_tables_print_bracketed_names_verbatim(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    resolved = runner.invoke(cli, ["resolve", "shot[v2].mov", "take[/x].mov"], env=env)
    planned = runner.invoke(cli, ["plan", "shot[v2].mov"], env=env)
    renamed = runner.invoke(cli, ["rename", "shot[v2].mov", "--prefix", "A_"], env=env)

    assert resolved.exit_code == 0
    assert "shot[v2].mov" in resolved.output
    assert "take[/x].mov" in resolved.output
    assert planned.exit_code == 0
    assert "shot[v2].mov" in planned.output
    assert renamed.exit_code == 0
    assert "A_shot[v2].mov" in renamed.output
