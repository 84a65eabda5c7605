"""Configuration models describing the folder/category rule set."""

from __future__ import annotations

import secrets
import string
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .defaults import CURRENT_VERSION, default_config_data

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id() -> str:
    """Return a random 7-character alphanumeric identifier."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))


class SnapBaseModel(BaseModel):
    """Shared configuration for Snap Organizer Pydantic models.

    Attributes are snake_case in Python and camelCase when persisted; both
    spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SubcategoryFilter(SnapBaseModel):
    """A single filter applied to an asset file name.

    Attributes:
        kind: Filter flavour (`ext`, `prefix`, or `keyword`); persisted as `type`.
        value: Extension (without dot), file name prefix, or keyword.
    """

    kind: Literal["ext", "prefix", "keyword"] = Field(alias="type")
    value: str


class SubcategoryConfig(SnapBaseModel):
    """Free-form subfolder inside a category.

    Attributes:
        id: Stable identifier.
        name: Display name of the subfolder.
        order: Position among sibling subcategories.
        filters: Unified filter list (OR semantics).
        extensions: Legacy extension list, read as `ext` filters.
        keywords: Legacy keyword list, read as `keyword`/`prefix` filters.
        filter_type: Legacy filter mode; `all` marks the slot as catch-all.
        keyword_required: Legacy flag forbidding the catch-all behaviour.
        create_subfolders: Whether nested subfolders should be created.
        enable_label_color: Whether the label colour is applied.
        label_color: Host label colour index.
    """

    id: str = Field(default_factory=generate_id)
    name: str = "New Subcategory"
    order: int = 0
    filters: Optional[List[SubcategoryFilter]] = None
    extensions: Optional[List[str]] = None
    keywords: Optional[List[str]] = None
    filter_type: Optional[Literal["extension", "keyword", "all"]] = None
    keyword_required: Optional[bool] = None
    create_subfolders: bool = False
    enable_label_color: bool = False
    label_color: Optional[int] = Field(default=None, ge=1, le=16)


class CategoryConfig(SnapBaseModel):
    """Category rule within a folder.

    Attributes:
        type: Category type name; validated lazily by the rule layer.
        enabled: Whether the rule participates in resolution.
        order: Position within the folder.
        create_subfolders: Whether per-extension/sequence subfolders are created.
        detect_sequences: Whether image sequences are treated as footage.
        filters: Optional filters restricting which assets the rule claims.
        keywords: Legacy keyword restriction list.
        needs_keyword: Marks a duplicate category that must carry keywords.
        subcategories: Nested subcategory rules.
        enable_label_color: Whether the label colour is applied.
        label_color: Host label colour index.
    """

    type: str
    enabled: bool = True
    order: int = 0
    create_subfolders: bool = False
    detect_sequences: Optional[bool] = None
    filters: Optional[List[SubcategoryFilter]] = None
    keywords: Optional[List[str]] = None
    needs_keyword: Optional[bool] = None
    subcategories: Optional[List[SubcategoryConfig]] = None
    enable_label_color: bool = False
    label_color: Optional[int] = Field(default=None, ge=1, le=16)


class FolderConfig(SnapBaseModel):
    """Top-level project folder.

    Attributes:
        id: Stable identifier (`system` is always sorted last).
        name: Folder display name.
        order: Processing and display precedence.
        is_render_folder: Whether the folder collects render comps.
        render_keywords: Comp name keywords identifying render comps.
        skip_organization: Excludes the folder from category assignment.
        categories: Category rules held by the folder.
        enable_label_color: Whether the label colour is applied.
        label_color: Host label colour index.
    """

    id: str = Field(default_factory=generate_id)
    name: str = "New Folder"
    order: int = 0
    is_render_folder: bool = False
    render_keywords: Optional[List[str]] = None
    skip_organization: Optional[bool] = None
    categories: List[CategoryConfig] = Field(default_factory=list)
    enable_label_color: bool = False
    label_color: Optional[int] = Field(default=None, ge=1, le=16)

    @model_validator(mode="before")
    @classmethod
    def _null_categories(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("categories", []) is None:
            data = {**data, "categories": []}
        return data


class ExceptionRule(SnapBaseModel):
    """Override rule evaluated after category resolution.

    Attributes:
        id: Stable identifier.
        type: Match on a name substring or on the file extension.
        pattern: Substring or extension to match, case-insensitive.
        target_folder_id: Destination folder; `None` leaves the item in place.
        target_category: Optional category hint kept for the editor.
    """

    id: str = Field(default_factory=generate_id)
    type: Literal["nameContains", "extension"] = "nameContains"
    pattern: str = ""
    target_folder_id: Optional[str] = None
    target_category: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _from_pattern(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"type": "nameContains", "pattern": data}
        return data


class OrganizerSettings(SnapBaseModel):
    """Global organizer switches.

    Attributes:
        delete_empty_folders: Remove folders left empty after organizing.
        show_stats: Display project statistics.
        apply_folder_label_color: Apply folder label colours to items.
        language: UI language, `auto` follows the host.
        isolate_missing: Move missing footage into an isolation folder.
        isolate_unused: Move unused items into an isolation folder.
        merge_duplicates: Merge duplicate footage items.
        reload_before_organize: Reload footage before organizing.
    """

    delete_empty_folders: bool = True
    show_stats: bool = True
    apply_folder_label_color: bool = False
    language: Literal["en", "ko", "ja", "zh", "zh-TW", "auto"] = "auto"
    isolate_missing: bool = False
    isolate_unused: bool = False
    merge_duplicates: bool = False
    reload_before_organize: bool = False


def _default_folders() -> list[FolderConfig]:
    return [FolderConfig.model_validate(folder) for folder in default_config_data()["folders"]]


class VersionedConfig(SnapBaseModel):
    """Top-level configuration document.

    Attributes:
        version: Schema version of the document.
        folders: Folder rules in stored order.
        exceptions: Override rules evaluated last.
        render_comp_ids: Host item ids explicitly marked as render comps.
        settings: Global organizer switches.
    """

    version: int = CURRENT_VERSION
    folders: List[FolderConfig] = Field(default_factory=_default_folders)
    exceptions: List[ExceptionRule] = Field(default_factory=list)
    render_comp_ids: List[int] = Field(default_factory=list)
    settings: OrganizerSettings = Field(default_factory=OrganizerSettings)

    def to_document(self) -> dict[str, Any]:
        """Return the persistable camelCase representation.

        Returns:
            dict[str, Any]: JSON-compatible mapping using persisted key names.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def default_config() -> VersionedConfig:
    """Return the compiled-in default configuration."""
    return VersionedConfig()


__all__ = [
    "SnapBaseModel",
    "SubcategoryFilter",
    "SubcategoryConfig",
    "CategoryConfig",
    "FolderConfig",
    "ExceptionRule",
    "OrganizerSettings",
    "VersionedConfig",
    "default_config",
    "generate_id",
]
