"""Upgrade persisted configuration documents to the current schema version.

Each step is a pure function taking a document at version ``N`` and returning
a new document at version ``N + 1``. Steps only add fields that did not exist
at the older version; folder names, filters, keywords, and exceptions written
by the user are carried over untouched.

Schema history:

* v1: folders and categories only; subcategories use ``filterType`` with
  ``extensions``/``keywords`` lists.
* v2: ``renderCompIds`` and the ``showStats``/``applyFolderLabelColor`` settings.
* v3: explicit ``order`` on categories and subcategories, ``createSubfolders``
  on every category.
* v4: ``skipOrganization`` and ``renderKeywords`` on render folders.
* v5: ``language``, ``isolateMissing``, and ``isolateUnused`` settings.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Callable, Dict, Mapping

from .defaults import CURRENT_VERSION, DEFAULT_RENDER_KEYWORDS
from .exceptions import MigrationError

LOGGER = logging.getLogger(__name__)

MigrationStep = Callable[[Dict[str, Any]], Dict[str, Any]]


def _settings(data: dict[str, Any]) -> dict[str, Any]:
    settings = data.get("settings")
    if not isinstance(settings, dict):
        settings = {}
        data["settings"] = settings
    return settings


def _folders(data: dict[str, Any]) -> list[dict[str, Any]]:
    folders = data.get("folders")
    if not isinstance(folders, list):
        return []
    return [folder for folder in folders if isinstance(folder, dict)]


def _categories(folder: dict[str, Any]) -> list[dict[str, Any]]:
    categories = folder.get("categories")
    if not isinstance(categories, list):
        return []
    return [category for category in categories if isinstance(category, dict)]


def _v1_to_v2(data: dict[str, Any]) -> dict[str, Any]:
    data.setdefault("renderCompIds", [])
    settings = _settings(data)
    settings.setdefault("showStats", True)
    settings.setdefault("applyFolderLabelColor", False)
    return data


def _v2_to_v3(data: dict[str, Any]) -> dict[str, Any]:
    for folder in _folders(data):
        for index, category in enumerate(_categories(folder)):
            category.setdefault("order", index)
            category.setdefault("createSubfolders", False)
            subcategories = category.get("subcategories")
            if isinstance(subcategories, list):
                for sub_index, subcategory in enumerate(subcategories):
                    if isinstance(subcategory, dict):
                        subcategory.setdefault("order", sub_index)
    return data


def _v3_to_v4(data: dict[str, Any]) -> dict[str, Any]:
    for folder in _folders(data):
        if not folder.get("isRenderFolder"):
            continue
        folder.setdefault("skipOrganization", True)
        folder.setdefault("renderKeywords", list(DEFAULT_RENDER_KEYWORDS))
    return data


def _v4_to_v5(data: dict[str, Any]) -> dict[str, Any]:
    settings = _settings(data)
    settings.setdefault("language", "auto")
    settings.setdefault("isolateMissing", False)
    settings.setdefault("isolateUnused", False)
    return data


MIGRATIONS: dict[int, MigrationStep] = {
    1: _v1_to_v2,
    2: _v2_to_v3,
    3: _v3_to_v4,
    4: _v4_to_v5,
}


def document_version(data: Mapping[str, Any]) -> int:
    """Return the schema version recorded in a persisted document.

    Args:
        data: Raw configuration mapping.

    Returns:
        int: Recorded version; documents without one are treated as version 1.

    Raises:
        MigrationError: If the recorded version is not a positive integer.
    """
    raw = data.get("version")
    if raw is None:
        return 1
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise MigrationError(f"Configuration version must be an integer, got {raw!r}.")
    if raw < 1:
        raise MigrationError(f"Configuration version must be at least 1, got {raw}.")
    return raw


def needs_migration(data: Mapping[str, Any], *, target_version: int = CURRENT_VERSION) -> bool:
    """Return whether the document is older than the target version."""
    return document_version(data) < target_version


def migrate(
    data: Mapping[str, Any],
    *,
    target_version: int = CURRENT_VERSION,
) -> dict[str, Any]:
    """Upgrade a persisted configuration document step by step.

    Args:
        data: Raw configuration mapping at any known version.
        target_version: Version to upgrade to; defaults to the current schema.

    Returns:
        dict[str, Any]: A new document at ``target_version``. Documents already
            at or above the target are returned as an unchanged copy.

    Raises:
        MigrationError: If the version is malformed or a step is missing.
    """
    if not isinstance(data, Mapping):
        raise MigrationError("Configuration document must be a mapping.")

    migrated = deepcopy(dict(data))
    version = document_version(migrated)
    if version >= target_version:
        return migrated

    while version < target_version:
        step = MIGRATIONS.get(version)
        if step is None:
            raise MigrationError(f"No migration registered for version {version}.")
        LOGGER.debug("Migrating configuration from version %d to %d.", version, version + 1)
        migrated = step(migrated)
        version += 1
        migrated["version"] = version

    return migrated


__all__ = ["MIGRATIONS", "document_version", "needs_migration", "migrate"]
