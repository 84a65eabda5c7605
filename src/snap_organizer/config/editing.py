"""Pure editing operations over a configuration snapshot.

Every function returns a new :class:`VersionedConfig`; the input snapshot is
never modified. Unknown folder, category, subcategory, or exception ids raise
:class:`ConfigError`.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from snap_organizer.rules.categories import ensure_category_type, recalculate_category_orders
from snap_organizer.rules.filters import subcategory_filters

from .exceptions import ConfigError
from .folders import recalculate_folder_orders
from .models import (
    CategoryConfig,
    ExceptionRule,
    FolderConfig,
    SubcategoryConfig,
    VersionedConfig,
    generate_id,
)
from .resolver import normalize_keys

ModelT = TypeVar("ModelT", bound=BaseModel)


def _updated(model: ModelT, updates: dict[str, Any]) -> ModelT:
    data = model.model_dump()
    data.update(normalize_keys(updates))
    try:
        return type(model).model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid {type(model).__name__} update: {exc}") from exc


def _move(items: list[ModelT], index: int, new_index: int) -> list[ModelT]:
    moved = list(items)
    item = moved.pop(index)
    moved.insert(max(0, min(new_index, len(moved))), item)
    return moved


def _folder_index(config: VersionedConfig, folder_id: str) -> int:
    for index, folder in enumerate(config.folders):
        if folder.id == folder_id:
            return index
    raise ConfigError(f"Unknown folder id {folder_id!r}.")


def _with_folder(
    config: VersionedConfig,
    folder_id: str,
    change: Callable[[FolderConfig], FolderConfig],
) -> VersionedConfig:
    index = _folder_index(config, folder_id)
    folders = list(config.folders)
    folders[index] = change(folders[index])
    return config.model_copy(update={"folders": folders}, deep=True)


def _category_index(folder: FolderConfig, category_type: str) -> int:
    for index, category in enumerate(folder.categories):
        if category.type == category_type:
            return index
    raise ConfigError(f"Folder {folder.id!r} has no {category_type} category.")


def _with_category(
    config: VersionedConfig,
    folder_id: str,
    category_type: str,
    change: Callable[[CategoryConfig], CategoryConfig],
) -> VersionedConfig:
    def _change_folder(folder: FolderConfig) -> FolderConfig:
        index = _category_index(folder, category_type)
        categories = list(folder.categories)
        categories[index] = change(categories[index])
        return folder.model_copy(update={"categories": categories})

    return _with_folder(config, folder_id, _change_folder)


def _subcategory_index(category: CategoryConfig, subcategory_id: str) -> int:
    for index, subcategory in enumerate(category.subcategories or []):
        if subcategory.id == subcategory_id:
            return index
    raise ConfigError(f"{category.type} has no subcategory {subcategory_id!r}.")


# Folders -------------------------------------------------------------


def add_folder(config: VersionedConfig, **fields: Any) -> VersionedConfig:
    """Append a folder built from ``fields`` (name, is_render_folder, ...)."""
    data: dict[str, Any] = {"id": generate_id(), "order": len(config.folders)}
    data.update(normalize_keys(fields))
    try:
        folder = FolderConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid folder: {exc}") from exc
    return config.model_copy(update={"folders": [*config.folders, folder]}, deep=True)


def update_folder(config: VersionedConfig, folder_id: str, **updates: Any) -> VersionedConfig:
    """Apply field updates to one folder."""
    return _with_folder(config, folder_id, lambda folder: _updated(folder, updates))


def delete_folder(config: VersionedConfig, folder_id: str) -> VersionedConfig:
    """Remove a folder and renumber the remaining folder orders."""
    _folder_index(config, folder_id)
    remaining = [folder for folder in config.folders if folder.id != folder_id]
    return config.model_copy(update={"folders": recalculate_folder_orders(remaining)}, deep=True)


def move_folder(config: VersionedConfig, folder_id: str, new_index: int) -> VersionedConfig:
    """Move a folder to ``new_index`` and renumber folder orders."""
    index = _folder_index(config, folder_id)
    folders = recalculate_folder_orders(_move(config.folders, index, new_index))
    return config.model_copy(update={"folders": folders}, deep=True)


# Categories ----------------------------------------------------------


def add_category(config: VersionedConfig, folder_id: str, category_type: str) -> VersionedConfig:
    """Append an enabled category of ``category_type`` to a folder.

    Raises:
        InvalidCategoryTypeError: If ``category_type`` is unknown.
    """
    valid_type = ensure_category_type(category_type)

    def _change(folder: FolderConfig) -> FolderConfig:
        category = CategoryConfig(type=valid_type, order=len(folder.categories))
        return folder.model_copy(update={"categories": [*folder.categories, category]})

    return _with_folder(config, folder_id, _change)


def update_category(
    config: VersionedConfig,
    folder_id: str,
    category_type: str,
    **updates: Any,
) -> VersionedConfig:
    """Apply field updates to a folder's category."""
    return _with_category(
        config, folder_id, category_type, lambda category: _updated(category, updates)
    )


def delete_category(config: VersionedConfig, folder_id: str, category_type: str) -> VersionedConfig:
    """Remove a category from a folder."""

    def _change(folder: FolderConfig) -> FolderConfig:
        _category_index(folder, category_type)
        categories = [item for item in folder.categories if item.type != category_type]
        return folder.model_copy(update={"categories": categories})

    return _with_folder(config, folder_id, _change)


def move_category(
    config: VersionedConfig,
    folder_id: str,
    category_type: str,
    new_index: int,
) -> VersionedConfig:
    """Move a category inside its folder and renumber category orders."""

    def _change(folder: FolderConfig) -> FolderConfig:
        index = _category_index(folder, category_type)
        categories = recalculate_category_orders(_move(folder.categories, index, new_index))
        return folder.model_copy(update={"categories": categories})

    return _with_folder(config, folder_id, _change)


# Subcategories -------------------------------------------------------


def unify_subcategory_filters(subcategory: SubcategoryConfig) -> SubcategoryConfig:
    """Return a copy storing legacy extensions/keywords in the `filters` field."""
    if subcategory.extensions is None and subcategory.keywords is None:
        return subcategory.model_copy(deep=True)
    return subcategory.model_copy(
        update={
            "filters": subcategory_filters(subcategory),
            "extensions": None,
            "keywords": None,
            "filter_type": None if subcategory.filter_type != "all" else "all",
        },
        deep=True,
    )


def unify_config_filters(config: VersionedConfig) -> VersionedConfig:
    """Return a copy with every subcategory using the unified `filters` field."""
    folders: list[FolderConfig] = []
    for folder in config.folders:
        categories = [
            category.model_copy(
                update={
                    "subcategories": [
                        unify_subcategory_filters(item) for item in category.subcategories
                    ]
                    if category.subcategories is not None
                    else None
                }
            )
            for category in folder.categories
        ]
        folders.append(folder.model_copy(update={"categories": categories}))
    return config.model_copy(update={"folders": folders}, deep=True)


def add_subcategory(
    config: VersionedConfig,
    folder_id: str,
    category_type: str,
    **fields: Any,
) -> VersionedConfig:
    """Append a subcategory to a folder's category."""

    def _change(category: CategoryConfig) -> CategoryConfig:
        existing = list(category.subcategories or [])
        data: dict[str, Any] = {"id": generate_id(), "order": len(existing)}
        data.update(normalize_keys(fields))
        try:
            subcategory = SubcategoryConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid subcategory: {exc}") from exc
        return category.model_copy(update={"subcategories": [*existing, subcategory]})

    return _with_category(config, folder_id, category_type, _change)


def update_subcategory(
    config: VersionedConfig,
    folder_id: str,
    category_type: str,
    subcategory_id: str,
    **updates: Any,
) -> VersionedConfig:
    """Apply field updates to a subcategory, saving its filters in unified form."""

    def _change(category: CategoryConfig) -> CategoryConfig:
        index = _subcategory_index(category, subcategory_id)
        subcategories = list(category.subcategories or [])
        subcategories[index] = _updated(unify_subcategory_filters(subcategories[index]), updates)
        return category.model_copy(update={"subcategories": subcategories})

    return _with_category(config, folder_id, category_type, _change)


def delete_subcategory(
    config: VersionedConfig,
    folder_id: str,
    category_type: str,
    subcategory_id: str,
) -> VersionedConfig:
    """Remove a subcategory."""

    def _change(category: CategoryConfig) -> CategoryConfig:
        _subcategory_index(category, subcategory_id)
        remaining = [item for item in category.subcategories or [] if item.id != subcategory_id]
        return category.model_copy(update={"subcategories": remaining})

    return _with_category(config, folder_id, category_type, _change)


def move_subcategory(
    config: VersionedConfig,
    folder_id: str,
    category_type: str,
    subcategory_id: str,
    new_index: int,
) -> VersionedConfig:
    """Move a subcategory and renumber sibling orders."""

    def _change(category: CategoryConfig) -> CategoryConfig:
        index = _subcategory_index(category, subcategory_id)
        moved = _move(list(category.subcategories or []), index, new_index)
        renumbered = [item.model_copy(update={"order": order}) for order, item in enumerate(moved)]
        return category.model_copy(update={"subcategories": renumbered})

    return _with_category(config, folder_id, category_type, _change)


# Exceptions and settings --------------------------------------------


def add_exception(config: VersionedConfig, **fields: Any) -> VersionedConfig:
    """Append an exception rule; the target defaults to the first folder."""
    data: dict[str, Any] = {
        "id": generate_id(),
        "target_folder_id": config.folders[0].id if config.folders else None,
    }
    data.update(normalize_keys(fields))
    try:
        rule = ExceptionRule.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid exception rule: {exc}") from exc
    return config.model_copy(update={"exceptions": [*config.exceptions, rule]}, deep=True)


def _exception_index(config: VersionedConfig, exception_id: str) -> int:
    for index, rule in enumerate(config.exceptions):
        if rule.id == exception_id:
            return index
    raise ConfigError(f"Unknown exception id {exception_id!r}.")


def update_exception(config: VersionedConfig, exception_id: str, **updates: Any) -> VersionedConfig:
    """Apply field updates to an exception rule."""
    index = _exception_index(config, exception_id)
    exceptions = list(config.exceptions)
    exceptions[index] = _updated(exceptions[index], updates)
    return config.model_copy(update={"exceptions": exceptions}, deep=True)


def delete_exception(config: VersionedConfig, exception_id: str) -> VersionedConfig:
    """Remove an exception rule."""
    _exception_index(config, exception_id)
    remaining = [rule for rule in config.exceptions if rule.id != exception_id]
    return config.model_copy(update={"exceptions": remaining}, deep=True)


def update_settings(config: VersionedConfig, **updates: Any) -> VersionedConfig:
    """Apply updates to the global settings."""
    return config.model_copy(update={"settings": _updated(config.settings, updates)}, deep=True)


def find_folder(config: VersionedConfig, folder_id: str) -> Optional[FolderConfig]:
    """Return the folder with ``folder_id``, if any."""
    return next((folder for folder in config.folders if folder.id == folder_id), None)


__all__ = [
    "add_folder",
    "update_folder",
    "delete_folder",
    "move_folder",
    "add_category",
    "update_category",
    "delete_category",
    "move_category",
    "unify_subcategory_filters",
    "unify_config_filters",
    "add_subcategory",
    "update_subcategory",
    "delete_subcategory",
    "move_subcategory",
    "add_exception",
    "update_exception",
    "delete_exception",
    "update_settings",
    "find_folder",
]
