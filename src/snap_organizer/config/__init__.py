"""Configuration management for Snap Organizer."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .defaults import CURRENT_VERSION, default_config_data
from .exceptions import ConfigError, InvalidCategoryTypeError, MigrationError
from .migration import document_version, migrate
from .models import VersionedConfig, default_config
from .resolver import flatten_for_env, resolve_with_precedence

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.snap-organizer/config.json")
ENV_PREFIX = "SNAPORG__"


class ConfigManager:
    """Load and persist the rule set, migrating and applying precedence rules."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
        ensure_file: bool = True,
        env_overrides: Mapping[str, str] | None = None,
    ) -> VersionedConfig:
        """Load the configuration from disk, migrating it to the current version.

        Args:
            cli_overrides: Dotted-key overrides with the highest precedence.
            include_env: Whether `SNAPORG__*` environment variables apply.
            ensure_file: Create the default file when none exists.
            env_overrides: Explicit environment mapping used instead of `os.environ`.

        Returns:
            VersionedConfig: Validated configuration at the current version.

        Raises:
            ConfigError: If the stored document cannot be parsed, migrated, or validated.
        """
        if ensure_file:
            self.ensure_exists()

        file_data = self._read_file()
        if file_data:
            file_data = self._migrate(file_data)

        env_data: Mapping[str, str] | None
        if include_env:
            env_data = env_overrides if env_overrides is not None else self._env
        else:
            env_data = None

        return resolve_with_precedence(
            defaults=default_config(),
            file_overrides=file_data,
            env_overrides=self._extract_env(env_data) if env_data else None,
            cli_overrides=cli_overrides,
        )

    def load_file_overrides(self) -> dict[str, Any]:
        """Return the raw document stored on disk, without migration."""
        return self._read_file()

    def save(
        self,
        config: VersionedConfig | Mapping[str, Any],
        *,
        unify_filters: bool = False,
    ) -> None:
        """Persist configuration data to disk at the current schema version.

        Args:
            config: Configuration model or raw document to write.
            unify_filters: Rewrite legacy subcategory `extensions`/`keywords`
                into the unified `filters` field before writing.
        """
        if unify_filters:
            from snap_organizer.config.editing import unify_config_filters

            if isinstance(config, VersionedConfig):
                model = config
            else:
                model = self._validate(self._migrate(dict(config)))
            config = unify_config_filters(model)
        data = self._coerce_to_dict(config)
        data["version"] = CURRENT_VERSION
        self._write_file(data)

    def ensure_exists(self) -> Path:
        """Create a configuration file with defaults if one does not exist."""
        path = self._config_path
        if path.exists():
            return path

        self._write_file(default_config_data())
        return path

    def reset(self) -> VersionedConfig:
        """Overwrite the stored configuration with the compiled-in defaults."""
        self._write_file(default_config_data())
        return default_config()

    def read_text(self) -> str:
        """Return the current configuration file contents."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    def export_json(self, config: VersionedConfig) -> str:
        """Render a configuration as an indented JSON document."""
        return json.dumps(config.to_document(), indent=2, ensure_ascii=False)

    def import_json(self, text: str) -> VersionedConfig:
        """Parse, migrate, and persist a configuration exported as JSON.

        Args:
            text: JSON document produced by `export_json` or an older release.

        Returns:
            VersionedConfig: The imported configuration.

        Raises:
            ConfigError: If the document is not valid JSON or fails validation.
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Failed to parse imported configuration: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError("Imported configuration must contain a mapping at the top level.")

        config = self._validate(self._migrate(raw))
        self.save(config)
        return config

    # Internal helpers -------------------------------------------------

    def _migrate(self, data: dict[str, Any]) -> dict[str, Any]:
        version = document_version(data)
        if version > CURRENT_VERSION:
            LOGGER.warning(
                "Configuration version %d is newer than supported version %d; loading as-is.",
                version,
                CURRENT_VERSION,
            )
        elif version < CURRENT_VERSION:
            LOGGER.info("Upgrading configuration from version %d to %d.", version, CURRENT_VERSION)
        return migrate(data)

    def _validate(self, data: Mapping[str, Any]) -> VersionedConfig:
        try:
            return VersionedConfig.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration values: {exc}") from exc

    def _coerce_to_dict(self, value: VersionedConfig | Mapping[str, Any]) -> dict[str, Any]:
        if isinstance(value, VersionedConfig):
            return value.to_document()
        return self._migrate(dict(value)) if value else {}

    def _read_file(self) -> dict[str, Any]:
        if not self._config_path.exists():
            return {}

        text = self._config_path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")

        return raw

    def _write_file(self, data: Mapping[str, Any]) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        serialized = json.dumps(dict(data), indent=2, ensure_ascii=False)
        self._config_path.write_text(serialized + "\n", encoding="utf-8")

    def _extract_env(self, env: Mapping[str, str]) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        for key, raw_value in env.items():
            if not key.startswith(ENV_PREFIX):
                continue
            path = [segment for segment in key[len(ENV_PREFIX) :].split("__") if segment]
            if not path:
                continue
            parsed_value: Any
            try:
                parsed_value = yaml.safe_load(raw_value)
            except yaml.YAMLError:
                parsed_value = raw_value

            self._assign_nested(overrides, [segment.lower() for segment in path], parsed_value)

        return overrides

    def _assign_nested(self, target: dict[str, Any], path: list[str], value: Any) -> None:
        current = target
        for segment in path[:-1]:
            existing = current.get(segment)
            if not isinstance(existing, dict):
                existing = {}
                current[segment] = existing
            current = existing
        current[path[-1]] = value


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "CURRENT_VERSION",
    "VersionedConfig",
    "default_config",
    "resolve_with_precedence",
    "flatten_for_env",
    "ConfigError",
    "MigrationError",
    "InvalidCategoryTypeError",
]
