from __future__ import annotations

import zlib
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping

from .logging_utils import log_warn
from .models import (
    DEFAULT_INSTALLED_VERSION,
    InstallCandidate,
    InstallerFolder,
    ManifestEntry,
    RejectReason,
    Rejection,
)
from .text_utils import is_contained_path, join_manifest_path

CRC_CHUNK_SIZE = 1024 * 1024

VersionComparator = Callable[[str, str], bool]


def string_greater(candidate: str, current: str) -> bool:
    """Raw string comparison, compatible with manifests written by the game's own updater."""

    return candidate > current


def numeric_greater(candidate: str, current: str) -> bool:
    if candidate.isdigit() and current.isdigit():
        return int(candidate) > int(current)
    return candidate > current


VERSION_COMPARATORS: Dict[str, VersionComparator] = {
    "string": string_greater,
    "numeric": numeric_greater,
}


def get_version_comparator(name: str) -> VersionComparator:
    try:
        return VERSION_COMPARATORS[name.strip().lower()]
    except KeyError as exc:
        choices = ", ".join(sorted(VERSION_COMPARATORS))
        raise ValueError(f"Unknown version comparison {name!r}; expected one of: {choices}") from exc


def compute_crc32(path: Path) -> str:
    checksum = 0
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(CRC_CHUNK_SIZE), b""):
            checksum = zlib.crc32(chunk, checksum)
    return f"{checksum & 0xFFFFFFFF:08X}"


def validate_entry(
    entry: ManifestEntry,
    folder: InstallerFolder,
    installed: Mapping[str, str],
    *,
    install_root: Path,
    verify_crc: bool = False,
    compare: VersionComparator = string_greater,
) -> InstallCandidate | Rejection:
    """Check one content-manifest entry against the installed state and the source file."""

    for raw_path in (entry.target_path, entry.resolved_source):
        if not is_contained_path(raw_path):
            return Rejection(
                entry,
                folder.name,
                RejectReason.UNSAFE_PATH,
                f"{entry.target_path}: path {raw_path!r} points outside its folder.",
            )

    source_file = join_manifest_path(folder.path, entry.resolved_source)
    current = installed.get(entry.target_path, DEFAULT_INSTALLED_VERSION)

    if not compare(entry.version, current):
        return Rejection(entry, folder.name, RejectReason.VERSION)

    try:
        observed_size = source_file.stat().st_size
    except OSError:
        return Rejection(
            entry,
            folder.name,
            RejectReason.MISSING,
            f"{entry.target_path}: source file {source_file} is missing.",
        )

    if observed_size != entry.size:
        return Rejection(
            entry,
            folder.name,
            RejectReason.SIZE,
            f"{entry.target_path}: size mismatch, expected {entry.size} bytes but found {observed_size}.",
        )

    if verify_crc:
        observed_crc = compute_crc32(source_file)
        if observed_crc != entry.crc32.upper():
            return Rejection(
                entry,
                folder.name,
                RejectReason.CRC,
                f"{entry.target_path}: CRC32 mismatch, expected {entry.crc32.upper()} but computed {observed_crc}.",
            )

    return InstallCandidate(
        target_path=entry.target_path,
        folder_name=folder.name,
        source_folder=folder.path,
        from_version=current,
        to_version=entry.version,
        source_file=source_file,
        destination_file=join_manifest_path(install_root, entry.target_path),
        size=observed_size,
    )


def collect_candidates(
    folders: Iterable[InstallerFolder],
    installed: Mapping[str, str],
    *,
    install_root: Path,
    verify_crc: bool = False,
    compare: VersionComparator = string_greater,
) -> tuple[List[InstallCandidate], List[Rejection]]:
    """Validate every entry of every folder, warning about the rejections worth reporting."""

    candidates: List[InstallCandidate] = []
    rejections: List[Rejection] = []
    for folder in folders:
        for entry in folder.entries:
            outcome = validate_entry(
                entry,
                folder,
                installed,
                install_root=install_root,
                verify_crc=verify_crc,
                compare=compare,
            )
            if isinstance(outcome, InstallCandidate):
                candidates.append(outcome)
                continue
            rejections.append(outcome)
            if not outcome.silent:
                log_warn(f"[{folder.name}] {outcome.message}", indent=2)
    return candidates, rejections


__all__ = [
    "VersionComparator",
    "string_greater",
    "numeric_greater",
    "get_version_comparator",
    "compute_crc32",
    "validate_entry",
    "collect_candidates",
]
