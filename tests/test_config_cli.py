"""CLI tests for configuration commands."""

import json
import os
from pathlib import Path
from typing import Any

from click.testing import CliRunner

from snap_organizer.cli import cli
from snap_organizer.config import CURRENT_VERSION, ConfigManager


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = dict(os.environ)
    env["HOME"] = str(tmp_path)
    return env


def _config_path(tmp_path: Path) -> Path:
    return tmp_path / ".snap-organizer" / "config.json"


def test_config_view_creates_and_displays_config(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["config", "view"], env=env)

    assert result.exit_code == 0
    assert "settings:" in result.output
    assert _config_path(tmp_path).exists()


def test_config_view_json_uses_persisted_keys(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["config", "view", "--json"], env=env)

    assert result.exit_code == 0
    assert '"deleteEmptyFolders": true' in result.output


def test_config_set_updates_value_and_writes_diff(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(
        cli, ["config", "set", "settings.show_stats", "--value", "false"], env=env
    )

    assert result.exit_code == 0
    assert "Updated settings.show_stats." in result.output

    manager = ConfigManager(config_path=_config_path(tmp_path))
    config = manager.load(include_env=False)
    assert config.settings.show_stats is False


def test_config_set_rejects_invalid_value(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["config", "set", "settings.language", "--value", "fr"], env=env)

    assert result.exit_code != 0
    assert "Invalid configuration values" in result.output


def test_config_edit_applies_changes(tmp_path: Path, monkeypatch) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    manager = ConfigManager(config_path=_config_path(tmp_path))
    manager.ensure_exists()

    def _mock_edit(text: str, **_: Any) -> str:
        return text.replace('"showStats": true', '"showStats": false')

    monkeypatch.setattr("snap_organizer.cli.click.edit", _mock_edit)

    result = runner.invoke(cli, ["config", "edit"], env=env)

    assert result.exit_code == 0
    assert "Configuration updated successfully." in result.output
    assert manager.load(include_env=False).settings.show_stats is False


def test_config_edit_rejects_invalid_json(tmp_path: Path, monkeypatch) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    manager = ConfigManager(config_path=_config_path(tmp_path))
    manager.ensure_exists()
    original = manager.read_text()

    monkeypatch.setattr("snap_organizer.cli.click.edit", lambda text, **_: text + "}")

    result = runner.invoke(cli, ["config", "edit"], env=env)

    assert result.exit_code != 0
    assert "Invalid JSON" in result.output
    assert manager.read_text() == original


def test_config_migrate_upgrades_legacy_file(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    path = _config_path(tmp_path)
    path.parent.mkdir(parents=True)
    path.write_text(
        json.dumps(
            {
                "folders": [
                    {
                        "id": "media",
                        "name": "Media",
                        "categories": [
                            {
                                "type": "Footage",
                                "subcategories": [
                                    {"id": "s1", "name": "Drone", "keywords": ["drone"]}
                                ],
                            }
                        ],
                    }
                ]
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["config", "migrate", "--unify-filters"], env=env)

    assert result.exit_code == 0
    assert f"from version 1 to {CURRENT_VERSION}" in result.output
    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["version"] == CURRENT_VERSION
    subcategory = document["folders"][0]["categories"][0]["subcategories"][0]
    assert subcategory["filters"] == [{"type": "keyword", "value": "drone"}]


def test_config_export_then_import(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    target = tmp_path / "exported.json"

    exported = runner.invoke(cli, ["config", "export", str(target)], env=env)
    assert exported.exit_code == 0

    document = json.loads(target.read_text(encoding="utf-8"))
    document["renderCompIds"] = [42]
    target.write_text(json.dumps(document), encoding="utf-8")

    imported = runner.invoke(cli, ["config", "import", str(target)], env=env)

    assert imported.exit_code == 0
    manager = ConfigManager(config_path=_config_path(tmp_path))
    assert manager.load(include_env=False).render_comp_ids == [42]


def test_config_reset_requires_confirmation(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    runner.invoke(cli, ["config", "set", "settings.show_stats", "--value", "false"], env=env)

    aborted = runner.invoke(cli, ["config", "reset"], input="n\n", env=env)
    assert aborted.exit_code != 0

    result = runner.invoke(cli, ["config", "reset", "--yes"], env=env)
    assert result.exit_code == 0
    manager = ConfigManager(config_path=_config_path(tmp_path))
    assert manager.load(include_env=False).settings.show_stats is True
