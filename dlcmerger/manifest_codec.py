from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Mapping

from .file_utils import atomic_write_text
from .models import ManifestEntry

MANIFEST_NAME = "update.lst"
MANIFEST_NEWLINE = "\r\n"
FIELD_DELIMITER = ","
INSTALLED_FIELDS = 2
CONTENT_FIELDS = 6


class ManifestFormatError(ValueError):
    """Raised when a manifest record has the wrong shape."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


def _records(lines: Iterable[str]) -> Iterable[tuple[int, List[str]]]:
    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue
        yield line_number, [field.strip() for field in line.split(FIELD_DELIMITER)]


def parse_installed_manifest(lines: Iterable[str]) -> Dict[str, str]:
    installed: Dict[str, str] = {}
    for line_number, fields in _records(lines):
        if len(fields) != INSTALLED_FIELDS:
            raise ManifestFormatError(
                f"expected {INSTALLED_FIELDS} fields, got {len(fields)}", line_number
            )
        path, version = fields
        installed[path] = version
    return installed


def serialize_installed_manifest(installed: Mapping[str, str]) -> List[str]:
    return [f"{path}{FIELD_DELIMITER}{version}" for path, version in installed.items()]


def parse_content_manifest(lines: Iterable[str]) -> List[ManifestEntry]:
    entries: List[ManifestEntry] = []
    for line_number, fields in _records(lines):
        if len(fields) != CONTENT_FIELDS:
            raise ManifestFormatError(
                f"expected {CONTENT_FIELDS} fields, got {len(fields)}", line_number
            )
        record_type, source_path, target_path, size, crc32, version = fields
        try:
            size_bytes = int(size)
        except ValueError as exc:
            raise ManifestFormatError(f"invalid size {size!r}", line_number) from exc
        entries.append(
            ManifestEntry(
                record_type=record_type,
                source_path=source_path,
                target_path=target_path,
                size=size_bytes,
                crc32=crc32,
                version=version,
            )
        )
    return entries


def _read_lines(path: Path) -> List[str]:
    # utf-8-sig drops the BOM some editors prepend
    return path.read_text(encoding="utf-8-sig").splitlines()


def load_installed_manifest(path: Path) -> Dict[str, str]:
    return parse_installed_manifest(_read_lines(path))


def load_content_manifest(path: Path) -> List[ManifestEntry]:
    return parse_content_manifest(_read_lines(path))


def render_installed_manifest(installed: Mapping[str, str]) -> str:
    lines = serialize_installed_manifest(installed)
    return "".join(line + MANIFEST_NEWLINE for line in lines)


def write_installed_manifest(path: Path, installed: Mapping[str, str]) -> None:
    """Replace the manifest at *path* with the complete *installed* mapping."""

    atomic_write_text(path, render_installed_manifest(installed))


__all__ = [
    "MANIFEST_NAME",
    "MANIFEST_NEWLINE",
    "ManifestFormatError",
    "parse_installed_manifest",
    "serialize_installed_manifest",
    "parse_content_manifest",
    "load_installed_manifest",
    "load_content_manifest",
    "render_installed_manifest",
    "write_installed_manifest",
]
