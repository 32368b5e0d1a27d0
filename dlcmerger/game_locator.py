from __future__ import annotations

import sys
from pathlib import Path

from .manifest_codec import MANIFEST_NAME

REGISTRY_KEY = r"Software\KISS\カスタムオーダーメイド3D2"
REGISTRY_VALUE = "InstallPath"


def lookup_registry_install_path() -> Path | None:
    """Read the install path the official installer records in the Windows registry."""

    if sys.platform != "win32":
        return None
    import winreg

    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, REGISTRY_KEY) as key:
            value, _ = winreg.QueryValueEx(key, REGISTRY_VALUE)
    except OSError:
        return None
    if not value:
        return None
    return Path(value)


def resolve_install_root(game: Path | None = None, configured: Path | None = None) -> Path:
    """Return the game root, preferring the explicit argument, then config, then the registry.

    Raises ``FileNotFoundError`` when no root can be found or it lacks the
    installed manifest.
    """

    root = game or configured or lookup_registry_install_path()
    if root is None:
        raise FileNotFoundError("Could not locate the game installation. Pass --game explicitly.")
    root = root.expanduser().resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Game path {root} does not exist.")
    if not (root / MANIFEST_NAME).is_file():
        raise FileNotFoundError(f"Game path {root} has no {MANIFEST_NAME}; is this the game folder?")
    return root
