from __future__ import annotations

import pytest

from dlcmerger import game_locator
from dlcmerger.game_locator import resolve_install_root


def test_explicit_game_path_wins(game_root, tmp_path):
    assert resolve_install_root(game_root, tmp_path / "elsewhere") == game_root.resolve()


def test_configured_path_used_when_no_argument(game_root):
    assert resolve_install_root(None, game_root) == game_root.resolve()


def test_registry_fallback(game_root, monkeypatch):
    monkeypatch.setattr(game_locator, "lookup_registry_install_path", lambda: game_root)
    assert resolve_install_root() == game_root.resolve()


def test_no_root_found(monkeypatch):
    monkeypatch.setattr(game_locator, "lookup_registry_install_path", lambda: None)
    with pytest.raises(FileNotFoundError, match="--game"):
        resolve_install_root()


def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError, match="does not exist"):
        resolve_install_root(tmp_path / "nope")


def test_directory_without_manifest(tmp_path):
    with pytest.raises(FileNotFoundError, match="update.lst"):
        resolve_install_root(tmp_path)
