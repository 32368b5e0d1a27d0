from __future__ import annotations

import re
from pathlib import PurePath

PATH_SEPARATOR_PATTERN = re.compile(r"[\\/]+")
SIDEGAME_PLUGIN_PATTERN = re.compile(r"^cm3d2plg_oh_", re.IGNORECASE)


def split_manifest_path(raw: str) -> list[str]:
    """Split a manifest path written with either slash style into its parts."""

    return [part for part in PATH_SEPARATOR_PATTERN.split(raw.strip()) if part]


def join_manifest_path(base: PurePath, raw: str) -> PurePath:
    return base.joinpath(*split_manifest_path(raw))


def normalize_folder_name(name: str) -> str:
    return name.strip().lower()


def is_contained_path(raw: str) -> bool:
    """True when *raw* is a relative manifest path that stays inside its base folder."""

    stripped = raw.strip()
    if not stripped or stripped[0] in "\\/" or ":" in stripped:
        return False
    return ".." not in split_manifest_path(stripped)
