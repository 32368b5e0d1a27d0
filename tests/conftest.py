from __future__ import annotations

import zlib
from pathlib import Path
from typing import Iterable, Sequence

import pytest

from dlcmerger.manifest_codec import MANIFEST_NAME


def crc_of(payload: bytes) -> str:
    return f"{zlib.crc32(payload) & 0xFFFFFFFF:08X}"


def make_installer(
    root: Path,
    name: str,
    files: Iterable[tuple[str, bytes, str]],
    *,
    declared_sizes: dict[str, int] | None = None,
) -> Path:
    """Create an installer folder whose update.lst lists *files* as ``(target, payload, version)``."""

    folder = root / name
    folder.mkdir(parents=True)
    lines = []
    for target, payload, version in files:
        source = folder.joinpath("data", *target.replace("\\", "/").split("/"))
        source.parent.mkdir(parents=True, exist_ok=True)
        source.write_bytes(payload)
        size = (declared_sizes or {}).get(target, len(payload))
        lines.append(f"F,0,{target},{size},{crc_of(payload)},{version}")
    (folder / MANIFEST_NAME).write_text("\n".join(lines) + "\n", encoding="utf-8")
    return folder


def write_installed(game_root: Path, lines: Sequence[str] = ()) -> Path:
    manifest = game_root / MANIFEST_NAME
    manifest.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return manifest


@pytest.fixture
def game_root(tmp_path: Path) -> Path:
    root = tmp_path / "game"
    root.mkdir()
    write_installed(root)
    return root


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    root = tmp_path / "downloads"
    root.mkdir()
    return root
