"""Command line interface for Snap Organizer."""

from __future__ import annotations

import difflib
import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

import click
import yaml
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from snap_organizer.config import (
    CURRENT_VERSION,
    ConfigError,
    ConfigManager,
    VersionedConfig,
    default_config,
    resolve_with_precedence,
)
from snap_organizer.config.migration import document_version, migrate
from snap_organizer.organization.planner import OrganizerPlanner
from snap_organizer.rename.preview import RenameParams, build_previews, has_changes
from snap_organizer.rules.models import AssetDescriptor
from snap_organizer.rules.resolver import RuleResolver

console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_ITEMS_ADAPTER = TypeAdapter(list[AssetDescriptor])


def _load_config(*, include_env: bool = True) -> VersionedConfig:
    """Load the effective configuration, surfacing failures as click errors.

    Args:
        include_env: Whether environment overrides apply.

    Returns:
        VersionedConfig: Configuration after precedence rules.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        return manager.load(include_env=include_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _collect_items(
    names: Sequence[str],
    items_path: Optional[str],
    *,
    item_type: Optional[str] = None,
    sequence: bool = False,
) -> list[AssetDescriptor]:
    """Build asset descriptors from positional names and an optional JSON file.

    Args:
        names: Item names given on the command line.
        items_path: JSON file holding a list of item descriptors.
        item_type: Host item kind applied to positional names.
        sequence: Mark positional names as frame sequence members.

    Returns:
        list[AssetDescriptor]: Items from the file followed by positional names.

    Raises:
        click.ClickException: If the items file is not a valid descriptor list.
    """
    items: list[AssetDescriptor] = []
    if items_path:
        try:
            raw = json.loads(Path(items_path).read_text(encoding="utf-8"))
            items.extend(_ITEMS_ADAPTER.validate_python(raw))
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise click.ClickException(f"Unable to read items from {items_path}: {exc}") from exc

    next_id = max((item.id for item in items), default=0) + 1
    for offset, name in enumerate(names):
        items.append(
            AssetDescriptor(
                id=next_id + offset,
                name=name,
                item_type=item_type,
                is_sequence_member=sequence,
            )
        )
    return items


def _print_diff(before: list[str], after: list[str]) -> bool:
    diff = list(
        difflib.unified_diff(
            before,
            after,
            fromfile="config.json (before)",
            tofile="config.json (after)",
            lineterm="",
        )
    )
    if diff:
        console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    return bool(diff)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="snap-organizer")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="SNAPORG_LOG_LEVEL",
    show_default=True,
    help="Logging verbosity.",
)
def cli(log_level: str) -> None:
    """Snap Organizer sorts project items into folders using configurable rules.

    Args:
        log_level: Logging verbosity applied to the root logger.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def config() -> None:
    """Manage Snap Organizer configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
@click.option("--json", "json_output", is_flag=True, help="Emit the persisted JSON document.")
def config_view(no_env: bool, json_output: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Args:
        no_env: If True, ignore environment-derived overrides.
        json_output: Emit camelCase JSON instead of YAML.
    """
    config_model = _load_config(include_env=not no_env)
    if json_output:
        console.print_json(data=config_model.to_document())
        return

    yaml_text = yaml.safe_dump(
        config_model.model_dump(mode="json", exclude_none=True), sort_keys=False
    )
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path such as `settings.delete_empty_folders`.
        value: YAML-literal value to write into the configuration file.

    Raises:
        click.ClickException: If parsing or validation fails.
    """
    manager = ConfigManager()
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException(
            "KEY must specify a dotted path such as 'settings.show_stats'."
        )

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        manager.ensure_exists()
        before = manager.read_text().splitlines()
        updated = resolve_with_precedence(
            defaults=manager.load(include_env=False),
            cli_overrides={".".join(segments): parsed_value},
        )
        manager.save(updated)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if not _print_diff(before, manager.read_text().splitlines()):
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(f"[green]Updated {escape('.'.join(segments))}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an interactive editor session.

    Raises:
        click.ClickException: If edited content is invalid or cannot be saved.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".json")

    if edited is None:
        console.print("[yellow]Edit cancelled; no changes applied.[/yellow]")
        return

    if edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        parsed = json.loads(edited) if edited.strip() else {}
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON: {exc}") from exc

    if not isinstance(parsed, dict):
        raise click.ClickException("Configuration file must contain a top-level mapping.")

    try:
        resolve_with_precedence(defaults=default_config(), file_overrides=migrate(parsed))
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(parsed)

    console.print("[green]Configuration updated successfully.[/green]")


@config.command("reset")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
def config_reset(yes: bool) -> None:
    """Replace the stored configuration with the built-in defaults."""
    if not yes:
        click.confirm("Reset the configuration to defaults?", abort=True)
    manager = ConfigManager()
    manager.reset()
    console.print(f"[green]Configuration reset at {escape(str(manager.config_path))}.[/green]")


@config.command("migrate")
@click.option(
    "--unify-filters",
    is_flag=True,
    help="Rewrite legacy subcategory extensions/keywords into unified filters.",
)
def config_migrate(unify_filters: bool) -> None:
    """Upgrade the stored configuration file to the current schema version."""
    manager = ConfigManager()
    try:
        raw = manager.load_file_overrides()
        version = document_version(raw) if raw else CURRENT_VERSION
        if version >= CURRENT_VERSION and not unify_filters:
            console.print(f"[yellow]Configuration already at version {version}.[/yellow]")
            return
        config_model = manager.load(include_env=False)
        manager.save(config_model, unify_filters=unify_filters)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(
        f"[green]Configuration migrated from version {version} to {CURRENT_VERSION}.[/green]"
    )
    if unify_filters:
        console.print("[green]Subcategory filters rewritten in unified form.[/green]")


@config.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def config_export(path: Path) -> None:
    """Write the stored configuration to PATH as JSON."""
    manager = ConfigManager()
    config_model = _load_config(include_env=False)
    path.write_text(manager.export_json(config_model) + "\n", encoding="utf-8")
    console.print(f"[green]Exported configuration to {escape(str(path))}.[/green]")


@config.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def config_import(path: Path) -> None:
    """Replace the stored configuration with the JSON document at PATH."""
    manager = ConfigManager()
    try:
        manager.import_json(path.read_text(encoding="utf-8"))
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(f"[green]Imported configuration from {escape(str(path))}.[/green]")


@cli.command()
@click.option("--json", "json_output", is_flag=True, help="Emit warnings as JSON.")
def check(json_output: bool) -> None:
    """Report configuration warnings such as duplicate keywords."""
    warnings = RuleResolver(_load_config()).diagnostics()
    if json_output:
        console.print_json(
            data={"warnings": [warning.model_dump(mode="json") for warning in warnings]}
        )
        return

    if not warnings:
        console.print("[green]No configuration warnings.[/green]")
        return

    table = Table(title="Configuration warnings")
    table.add_column("Code", style="yellow")
    table.add_column("Folder")
    table.add_column("Category")
    table.add_column("Message", overflow="fold")
    for warning in warnings:
        table.add_row(
            warning.code,
            escape(warning.folder_id or "-"),
            escape(warning.category or "-"),
            escape(warning.message),
        )
    console.print(table)


@cli.command()
@click.argument("names", nargs=-1)
@click.option(
    "--items",
    "items_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with a list of item descriptors.",
)
@click.option(
    "--type",
    "item_type",
    type=click.Choice(["comp", "solid", "footage"]),
    help="Host item kind for NAMES.",
)
@click.option("--sequence", is_flag=True, help="Treat NAMES as frame sequence members.")
@click.option("--json", "json_output", is_flag=True, help="Emit assignments as JSON.")
def resolve(
    names: tuple[str, ...],
    items_path: Optional[str],
    item_type: Optional[str],
    sequence: bool,
    json_output: bool,
) -> None:
    """Show where each item in NAMES would be placed."""
    items = _collect_items(names, items_path, item_type=item_type, sequence=sequence)
    if not items:
        raise click.UsageError("Provide item NAMES or --items.")

    assignments = RuleResolver(_load_config()).resolve_many(items)
    if json_output:
        console.print_json(
            data={"assignments": [item.model_dump(mode="json") for item in assignments]}
        )
        return

    table = Table(title="Assignments")
    table.add_column("Item")
    table.add_column("Reason", style="cyan")
    table.add_column("Folder")
    table.add_column("Subfolder")
    for assignment in assignments:
        folder = assignment.folder_name
        table.add_row(
            escape(assignment.name),
            assignment.reason,
            escape(folder) if folder else "[dim]stays in place[/dim]",
            escape(assignment.subfolder_path or "-"),
        )
    console.print(table)


@cli.command()
@click.argument("names", nargs=-1)
@click.option(
    "--items",
    "items_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with a list of item descriptors.",
)
@click.option("--json", "json_output", is_flag=True, help="Emit the plan as JSON.")
def plan(names: tuple[str, ...], items_path: Optional[str], json_output: bool) -> None:
    """Preview the organization plan for NAMES."""
    items = _collect_items(names, items_path)
    if not items:
        raise click.UsageError("Provide item NAMES or --items.")

    organize_plan = OrganizerPlanner().build_plan(items, RuleResolver(_load_config()))
    if json_output:
        console.print_json(data=organize_plan.model_dump(mode="json"))
        return

    table = Table(title="Organization plan")
    table.add_column("Item")
    table.add_column("Destination")
    table.add_column("Reason", style="cyan")
    for move in organize_plan.moves:
        table.add_row(escape(move.name), escape(move.destination), move.reason)
    for skipped in organize_plan.skipped:
        table.add_row(escape(skipped.name), "[dim]stays in place[/dim]", escape(skipped.reason))
    console.print(table)

    for summary in organize_plan.summaries:
        console.print(f"{escape(summary.display_name)}: {summary.item_count} item(s)")
    for warning in organize_plan.warnings:
        console.print(f"[yellow]Warning: {escape(warning.message)}[/yellow]")
    for note in organize_plan.notes:
        console.print(f"[dim]{escape(note)}[/dim]")


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--find", "find_text", default="", help="Literal text to replace.")
@click.option("--replace", "replace_text", default="", help="Replacement for --find.")
@click.option("--prefix", default="", help="Text prepended to each name.")
@click.option("--suffix", default="", help="Text inserted before the extension.")
@click.option("--json", "json_output", is_flag=True, help="Emit previews as JSON.")
def rename(
    names: tuple[str, ...],
    find_text: str,
    replace_text: str,
    prefix: str,
    suffix: str,
    json_output: bool,
) -> None:
    """Preview batch renames of NAMES."""
    params = RenameParams(
        find_text=find_text,
        replace_text=replace_text,
        prefix=prefix,
        suffix=suffix,
    )
    previews = build_previews(_collect_items(names, None), params)
    if json_output:
        payload: dict[str, Any] = {
            "hasChanges": has_changes(previews),
            "previews": [
                {"id": item.id, "originalName": item.original_name, "newName": item.new_name}
                for item in previews
            ],
        }
        console.print_json(data=payload)
        return

    table = Table(title="Rename preview")
    table.add_column("Original")
    table.add_column("New")
    for preview in previews:
        style = "green" if preview.changed else "dim"
        new_name = escape(preview.new_name)
        table.add_row(escape(preview.original_name), f"[{style}]{new_name}[/{style}]")
    console.print(table)
    if not has_changes(previews):
        console.print("[yellow]No changes to apply.[/yellow]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
