from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

from .logging_utils import log_info, log_warn
from .manifest_codec import MANIFEST_NAME, ManifestFormatError, load_content_manifest
from .models import Classification, FolderKind, InstallerFolder
from .text_utils import SIDEGAME_PLUGIN_PATTERN, normalize_folder_name

COMPANION_FOLDER_NAMES = frozenset({"update", "com3d2_update", "sybaris", "bepinex", "unityinjector"})
NEW_FORMAT_FOLDER_NAME = "com3d2"
ALTERNATE_PRODUCT_PREFIXES = ("cm3d2", "com3d2oh", "com3d2en", "cr3d2")
LEGACY_COMBO_FOLDER_NAME = "com3d2dlc_combo"
PRIMARY_PREFIX = "com3d2"


@dataclass(slots=True, frozen=True)
class FolderRule:
    name: str
    matches: Callable[[str], bool]
    kind: FolderKind
    message: str = ""


def build_rules(extra_ignored: Iterable[str] = ()) -> List[FolderRule]:
    """Return the ordered rule table; the first matching rule decides."""

    ignored = COMPANION_FOLDER_NAMES | {normalize_folder_name(name) for name in extra_ignored}
    return [
        FolderRule("companion", lambda name: name in ignored, FolderKind.IGNORED),
        FolderRule(
            "new_format",
            lambda name: name == NEW_FORMAT_FOLDER_NAME,
            FolderKind.UNSUPPORTED_WARN,
            "uses the new package format and must be installed manually.",
        ),
        FolderRule(
            "sidegame_plugin",
            lambda name: SIDEGAME_PLUGIN_PATTERN.match(name) is not None,
            FolderKind.IGNORED,
        ),
        FolderRule(
            "alternate_product",
            lambda name: name.startswith(ALTERNATE_PRODUCT_PREFIXES),
            FolderKind.IGNORED,
        ),
        FolderRule(
            "legacy_combo",
            lambda name: name == LEGACY_COMBO_FOLDER_NAME,
            FolderKind.SUPPORTED,
        ),
        FolderRule(
            "primary",
            lambda name: name.startswith(PRIMARY_PREFIX) and name != NEW_FORMAT_FOLDER_NAME,
            FolderKind.SUPPORTED,
        ),
        FolderRule(
            "unrecognized",
            lambda name: True,
            FolderKind.UNSUPPORTED_WARN,
            "looks like an installer but has an unrecognized layout. Install it manually.",
        ),
    ]


DEFAULT_RULES: Sequence[FolderRule] = tuple(build_rules())


def classify(folder_name: str, rules: Sequence[FolderRule] = DEFAULT_RULES) -> Classification:
    normalized = normalize_folder_name(folder_name)
    for rule in rules:
        if rule.matches(normalized):
            return Classification(kind=rule.kind, rule=rule.name, message=rule.message)
    raise ValueError(f"No folder rule matched {folder_name!r}")


def discover_installer_dirs(scan_root: Path, exclude: Iterable[Path] = ()) -> List[Path]:
    """Return every directory under *scan_root* (itself included) holding a content manifest."""

    excluded = {path.resolve() for path in exclude}
    candidates = [scan_root, *(path for path in scan_root.rglob("*") if path.is_dir())]
    found: List[Path] = []
    for directory in sorted(candidates):
        if directory.resolve() in excluded:
            continue
        if (directory / MANIFEST_NAME).is_file():
            found.append(directory)
    return found


def collect_installer_folders(
    directories: Iterable[Path],
    rules: Sequence[FolderRule] = DEFAULT_RULES,
) -> List[InstallerFolder]:
    folders: List[InstallerFolder] = []
    for directory in directories:
        classification = classify(directory.name, rules)
        if classification.kind == FolderKind.IGNORED:
            continue
        if classification.kind == FolderKind.UNSUPPORTED_WARN:
            log_warn(f"'{directory.name}' {classification.message}")
            continue
        try:
            entries = load_content_manifest(directory / MANIFEST_NAME)
        except (ManifestFormatError, OSError, UnicodeDecodeError) as exc:
            log_warn(f"'{directory.name}' has an unreadable {MANIFEST_NAME}: {exc}")
            continue
        folders.append(InstallerFolder(name=directory.name, path=directory, entries=entries))
        log_info(f"{directory.name}: {len(entries)} entries", indent=2)
    return folders


__all__ = [
    "FolderRule",
    "DEFAULT_RULES",
    "build_rules",
    "classify",
    "discover_installer_dirs",
    "collect_installer_folders",
]
