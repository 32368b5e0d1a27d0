from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List

SOURCE_SENTINEL = "0"
SOURCE_DATA_DIR = "data"
DEFAULT_INSTALLED_VERSION = "0"

InstalledManifest = Dict[str, str]


class FolderKind(str, Enum):
    SUPPORTED = "supported"
    UNSUPPORTED_WARN = "unsupported"
    IGNORED = "ignored"


class RejectReason(str, Enum):
    VERSION = "version_not_newer"
    MISSING = "source_missing"
    SIZE = "size_mismatch"
    CRC = "crc_mismatch"
    UNSAFE_PATH = "unsafe_path"


@dataclass(slots=True, frozen=True)
class ManifestEntry:
    record_type: str
    source_path: str
    target_path: str
    size: int
    crc32: str
    version: str

    @property
    def resolved_source(self) -> str:
        """Source path relative to the installer folder, with the ``0`` shorthand expanded."""

        if self.source_path == SOURCE_SENTINEL:
            return f"{SOURCE_DATA_DIR}\\{self.target_path}"
        return self.source_path


@dataclass(slots=True)
class Classification:
    kind: FolderKind
    rule: str
    message: str = ""


@dataclass(slots=True)
class InstallerFolder:
    name: str
    path: Path
    entries: List[ManifestEntry] = field(default_factory=list)

    @property
    def num_entries(self) -> int:
        return len(self.entries)


@dataclass(slots=True)
class InstallCandidate:
    target_path: str
    folder_name: str
    source_folder: Path
    from_version: str
    to_version: str
    source_file: Path
    destination_file: Path
    size: int = 0

    @property
    def version_label(self) -> str:
        return f"{self.from_version} -> {self.to_version}"


@dataclass(slots=True)
class Rejection:
    entry: ManifestEntry
    folder_name: str
    reason: RejectReason
    message: str = ""

    @property
    def silent(self) -> bool:
        return self.reason == RejectReason.VERSION


@dataclass(slots=True)
class InstallResult:
    manifest: InstalledManifest
    applied: List[InstallCandidate] = field(default_factory=list)
    failed: InstallCandidate | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.failed is None

    @property
    def total_applied(self) -> int:
        return len(self.applied)
