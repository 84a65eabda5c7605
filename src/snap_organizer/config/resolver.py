"""Configuration resolution helpers."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Mapping

import yaml
from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from .exceptions import ConfigError
from .models import VersionedConfig

# Top-level lists whose entries carry a stable ``id``.
RECORD_LISTS = ("folders", "exceptions")


def resolve_with_precedence(
    *,
    defaults: VersionedConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> VersionedConfig:
    """Layer configuration sources over the defaults.

    The stored document is authoritative for the rule tree: a ``folders`` or
    ``exceptions`` list in any layer replaces the previous one outright, so
    deleting a folder from the file removes it. Environment and CLI layers may
    instead address a single record by id, for example
    ``folders.render.skipOrganization`` or ``SNAPORG__FOLDERS__RENDER__ORDER``,
    which patches that folder in place. ``settings`` merges key by key.

    Args:
        defaults: Baseline configuration.
        file_overrides: Migrated document read from disk.
        env_overrides: Nested overrides extracted from the environment.
        cli_overrides: Dotted-key overrides supplied on the command line.

    Returns:
        VersionedConfig: Validated configuration.

    Raises:
        ConfigError: If an override is malformed, names an unknown record, or
            the result fails validation.
    """
    document = defaults.model_dump(mode="python")
    for name, source in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("cli", cli_overrides),
    ):
        if source is None:
            continue
        document = _overlay(document, _expand(source, source_name=name), source_name=name)

    try:
        return VersionedConfig.model_validate(document)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_for_env(config: VersionedConfig) -> Dict[str, str]:
    """Flatten the config into `SNAPORG__SECTION__KEY` environment variable mappings.

    Folder and exception lists are rendered whole, as YAML flow sequences.
    """
    flat: Dict[str, str] = {}

    def _recurse(prefix: list[str], value: Any) -> None:
        if isinstance(value, dict):
            for key, child in value.items():
                _recurse(prefix + [str(key)], child)
            return
        env_key = "SNAPORG__" + "__".join(part.upper() for part in prefix)
        if isinstance(value, list):
            flat[env_key] = yaml.safe_dump(value, default_flow_style=True).strip()
        elif isinstance(value, bool):
            flat[env_key] = "true" if value else "false"
        else:
            flat[env_key] = "null" if value is None else str(value)

    for top_key, child_value in config.model_dump(mode="json").items():
        _recurse([str(top_key)], child_value)
    return flat


def normalize_keys(value: Any) -> Any:
    """Return a copy of ``value`` with every mapping key converted to snake_case."""
    if isinstance(value, MappingABC):
        return {to_snake(str(key)): normalize_keys(child) for key, child in value.items()}
    if isinstance(value, list):
        return [normalize_keys(child) for child in value]
    return value


def _record_key(value: Any) -> str:
    return to_snake(str(value)).replace("_", "").replace("-", "").lower()


def _expand(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    """Turn dotted keys into nested snake_case mappings."""
    label = source_name.capitalize()
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{label} overrides must be a mapping.")

    expanded: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{label} override keys must be strings.")
        *parents, leaf = [to_snake(segment) for segment in key.split(".")]
        node = expanded
        for segment in parents:
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                raise ConfigError(f"{label} override for {key} conflicts with existing value.")
            node = child
        if isinstance(value, MappingABC):
            nested = _expand(value, source_name=source_name)
            current = node.get(leaf)
            node[leaf] = _overlay(current, nested) if isinstance(current, dict) else nested
        else:
            node[leaf] = normalize_keys(value)
    return expanded


def _overlay(
    base: Mapping[str, Any],
    overrides: Mapping[str, Any],
    *,
    source_name: str = "",
) -> dict[str, Any]:
    merged = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if key in RECORD_LISTS and isinstance(current, list) and isinstance(value, MappingABC):
            merged[key] = _patch_records(key, current, value, source_name=source_name)
        elif isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = _overlay(current, value, source_name=source_name)
        else:
            merged[key] = deepcopy(value)
    return merged


def _patch_records(
    section: str,
    records: list[Any],
    patches: Mapping[str, Any],
    *,
    source_name: str,
) -> list[Any]:
    patched = deepcopy(records)
    index = {
        _record_key(record.get("id")): position
        for position, record in enumerate(patched)
        if isinstance(record, MappingABC)
    }
    for record_id, patch in patches.items():
        position = index.get(_record_key(record_id))
        if position is None:
            raise ConfigError(
                f"{source_name.capitalize() or 'Override'} override names unknown "
                f"{section} entry '{record_id}'."
            )
        if not isinstance(patch, MappingABC):
            raise ConfigError(f"Override for {section}.{record_id} must be a mapping of fields.")
        patched[position] = _overlay(patched[position], patch, source_name=source_name)
    return patched


__all__ = ["resolve_with_precedence", "flatten_for_env", "normalize_keys"]
