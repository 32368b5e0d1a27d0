from __future__ import annotations

import toml
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .candidate_validator import VERSION_COMPARATORS
from .logging_utils import log_warn

DEFAULT_BACKUP_DIR = Path("manifest_backup")


@dataclass(slots=True)
class ProgramConfig:
    game: Path | None = None
    source: Path | None = None
    verify_crc: bool = False
    version_compare: str = "string"
    ignore_folders: List[str] = field(default_factory=list)
    backup_dir: Path = DEFAULT_BACKUP_DIR


def _optional_path(value: object) -> Path | None:
    if value is None or value == "":
        return None
    return Path(str(value)).expanduser()


def load_program_config(config_path: Path) -> ProgramConfig:
    """Load installer settings from a TOML file.

    Every key is optional; a missing file yields the defaults. Command line
    flags are applied on top of the returned config by the caller.
    """

    if not config_path.exists():
        log_warn(f"Config file {config_path} not found. Proceeding with defaults.")
        return ProgramConfig()

    raw_text = config_path.read_text(encoding="utf-8")
    try:
        config = toml.loads(raw_text)
    except toml.TomlDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {config_path}") from exc

    version_compare = str(config.get("version_compare", "string")).strip().lower()
    if version_compare not in VERSION_COMPARATORS:
        raise ValueError(
            f"Invalid version_compare {version_compare!r} in {config_path}; "
            f"expected one of: {', '.join(sorted(VERSION_COMPARATORS))}"
        )

    ignore_folders = config.get("ignore_folders", [])
    if not isinstance(ignore_folders, list):
        raise ValueError(f"ignore_folders must be a list in config file: {config_path}")

    return ProgramConfig(
        game=_optional_path(config.get("game")),
        source=_optional_path(config.get("source")),
        verify_crc=bool(config.get("verify_crc", False)),
        version_compare=version_compare,
        ignore_folders=[str(name) for name in ignore_folders],
        backup_dir=_optional_path(config.get("backup_dir")) or DEFAULT_BACKUP_DIR,
    )
