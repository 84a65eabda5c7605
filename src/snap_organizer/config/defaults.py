"""Compiled-in defaults and reference tables for Snap Organizer configuration."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Literal, get_args

CURRENT_VERSION = 5

CategoryType = Literal["Comps", "Footage", "Images", "Audio", "Solids"]

ALL_CATEGORIES: tuple[CategoryType, ...] = get_args(CategoryType)

DEFAULT_RENDER_KEYWORDS = [
    "_render",
    "_final",
    "_output",
    "_export",
    "RENDER_",
    "[RENDER]",
    "Render",
]

# Host label palette fallback (label index -> hex colour).
DEFAULT_LABEL_COLORS: dict[int, str] = {
    1: "#ff0000",
    2: "#ffc500",
    3: "#ccff00",
    4: "#00ff00",
    5: "#00ffcc",
    6: "#00ccff",
    7: "#0066ff",
    8: "#6600ff",
    9: "#ff00ff",
    10: "#ff6699",
    11: "#ff9933",
    12: "#996633",
    13: "#669999",
    14: "#999966",
    15: "#666699",
    16: "#996699",
}

SYSTEM_FOLDER_ID = "system"
SYSTEM_FOLDER_ORDER = 99

_DEFAULT_CONFIG: dict[str, Any] = {
    "version": CURRENT_VERSION,
    "folders": [
        {
            "id": "render",
            "name": "Render",
            "order": 0,
            "isRenderFolder": True,
            "renderKeywords": ["Main", "Render"],
            "skipOrganization": True,
            "categories": [],
        },
        {
            "id": "source",
            "name": "Source",
            "order": 1,
            "isRenderFolder": False,
            "categories": [
                {"type": "Comps", "enabled": True, "order": 0, "createSubfolders": False},
                {
                    "type": "Footage",
                    "enabled": True,
                    "order": 1,
                    "createSubfolders": False,
                    "detectSequences": True,
                },
                {
                    "type": "Images",
                    "enabled": True,
                    "order": 2,
                    "createSubfolders": False,
                    "detectSequences": True,
                },
                {"type": "Audio", "enabled": True, "order": 3, "createSubfolders": False},
            ],
        },
        {
            "id": SYSTEM_FOLDER_ID,
            "name": "System",
            "order": SYSTEM_FOLDER_ORDER,
            "isRenderFolder": False,
            "categories": [
                {"type": "Solids", "enabled": True, "order": 0, "createSubfolders": False},
            ],
        },
    ],
    "exceptions": [],
    "renderCompIds": [],
    "settings": {
        "deleteEmptyFolders": True,
        "showStats": True,
        "applyFolderLabelColor": False,
        "language": "auto",
        "isolateMissing": False,
        "isolateUnused": False,
    },
}


def default_config_data() -> dict[str, Any]:
    """Return a fresh copy of the default configuration document.

    Returns:
        dict[str, Any]: Persistable (camelCase) configuration seeded with the
            Render, Source, and System folders.
    """
    return deepcopy(_DEFAULT_CONFIG)


__all__ = [
    "CURRENT_VERSION",
    "CategoryType",
    "ALL_CATEGORIES",
    "DEFAULT_RENDER_KEYWORDS",
    "DEFAULT_LABEL_COLORS",
    "SYSTEM_FOLDER_ID",
    "SYSTEM_FOLDER_ORDER",
    "default_config_data",
]
