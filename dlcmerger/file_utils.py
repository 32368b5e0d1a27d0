from __future__ import annotations

import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

from .logging_utils import log_info


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def copy_file(source: Path, destination: Path) -> None:
    ensure_directory(destination.parent)
    shutil.copyfile(source, destination)


def backup_file(source: Path, backup_dir: Path) -> Path:
    if not source.exists():
        raise FileNotFoundError(f"Cannot backup missing file: {source}")
    backup_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    destination = backup_dir / f"{source.name}.{stamp}.bak"
    counter = 1
    while destination.exists():
        destination = backup_dir / f"{source.name}.{stamp}_{counter}.bak"
        counter += 1
    shutil.copy2(source, destination)
    log_info(f"Created backup: {destination}")
    return destination


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Write *text* to a sibling temp file, then swap it into place."""

    ensure_directory(path.parent)
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding=encoding,
            newline="",
            dir=str(path.parent),
            prefix=path.name + ".",
            suffix=".tmp",
            delete=False,
        ) as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
            temp_path = Path(handle.name)
        os.replace(temp_path, path)
    finally:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink(missing_ok=True)
