from __future__ import annotations

import builtins
from pathlib import Path

import pytest

from dlcmerger.candidate_validator import collect_candidates
from dlcmerger.folder_classifier import collect_installer_folders
from dlcmerger.install_executor import apply_install_plan, confirm_install
from dlcmerger.install_planner import plan_install
from dlcmerger.manifest_codec import load_installed_manifest
from tests.conftest import make_installer, write_installed


def _plan(source_root, game_root, installed, folders):
    paths = [make_installer(source_root, name, files) for name, files in folders]
    installers = collect_installer_folders(paths)
    candidates, _ = collect_candidates(installers, installed, install_root=game_root)
    return plan_install(candidates)


@pytest.mark.parametrize("answer", ["y", "Y", "yes", "YES", " yes "])
def test_confirm_install_accepts_affirmative(answer):
    assert confirm_install({}, prompt=lambda _: answer)


@pytest.mark.parametrize("answer", ["", "n", "no", "yep", "x"])
def test_confirm_install_rejects_everything_else(answer):
    assert not confirm_install({}, prompt=lambda _: answer)


def test_confirm_install_reads_console_by_default(monkeypatch):
    monkeypatch.setattr(builtins, "input", lambda _: "yes")
    assert confirm_install({})


def test_confirm_install_eof_is_refusal():
    def _eof(_):
        raise EOFError

    assert not confirm_install({}, prompt=_eof)


def test_apply_copies_and_updates_manifest(source_root, game_root):
    manifest_path = write_installed(game_root, ["old/keep.arc,3"])
    installed = load_installed_manifest(manifest_path)
    plan = _plan(source_root, game_root, installed, [("com3d2plg_dlc001", [("chara/a.png", b"x" * 1024, "100")])])

    result = apply_install_plan(plan, installed, manifest_path)

    assert result.ok
    assert (game_root / "chara" / "a.png").read_bytes() == b"x" * 1024
    assert load_installed_manifest(manifest_path) == {"old/keep.arc": "3", "chara/a.png": "100"}
    assert installed == {"old/keep.arc": "3"}


def test_apply_is_idempotent(source_root, game_root):
    manifest_path = game_root / "update.lst"
    folders = [("com3d2plg_dlc001", [("chara/a.png", b"a", "2"), ("chara/b.png", b"b", "3")])]
    installed = load_installed_manifest(manifest_path)
    plan = _plan(source_root, game_root, installed, folders)
    apply_install_plan(plan, installed, manifest_path)

    installers = collect_installer_folders([source_root / "com3d2plg_dlc001"])
    candidates, _ = collect_candidates(installers, load_installed_manifest(manifest_path), install_root=game_root)
    assert plan_install(candidates) == {}


def test_apply_stops_on_first_copy_failure_and_keeps_progress(source_root, game_root, capsys):
    manifest_path = write_installed(game_root, ["old/keep.arc,3"])
    installed = load_installed_manifest(manifest_path)
    plan = _plan(
        source_root,
        game_root,
        installed,
        [("com3d2plg_dlc001", [("a.png", b"a", "1"), ("b.png", b"b", "1"), ("c.png", b"c", "1")])],
    )
    copied = []

    def _copier(source: Path, destination: Path) -> None:
        if destination.name == "b.png":
            raise PermissionError("denied")
        copied.append(destination.name)

    result = apply_install_plan(plan, installed, manifest_path, copier=_copier)

    assert not result.ok
    assert result.failed.target_path == "b.png"
    assert copied == ["a.png"]
    assert load_installed_manifest(manifest_path) == {"old/keep.arc": "3", "a.png": "1"}
    out = capsys.readouterr().out
    assert "[error]" in out
    assert "b.png" in out


def test_apply_leaves_manifest_alone_when_nothing_copied(source_root, game_root):
    manifest_path = write_installed(game_root, ["old/keep.arc,3"])
    before = manifest_path.read_bytes()
    installed = load_installed_manifest(manifest_path)
    plan = _plan(source_root, game_root, installed, [("com3d2plg_dlc001", [("a.png", b"a", "1")])])

    def _copier(source: Path, destination: Path) -> None:
        raise OSError("disk full")

    result = apply_install_plan(plan, installed, manifest_path, copier=_copier)
    assert not result.ok
    assert result.applied == []
    assert manifest_path.read_bytes() == before


def test_apply_backs_up_manifest(source_root, game_root, tmp_path):
    manifest_path = write_installed(game_root, ["old/keep.arc,3"])
    installed = load_installed_manifest(manifest_path)
    plan = _plan(source_root, game_root, installed, [("com3d2plg_dlc001", [("a.png", b"a", "1")])])
    backup_dir = tmp_path / "backups"

    apply_install_plan(plan, installed, manifest_path, backup_dir=backup_dir)

    [backup] = list(backup_dir.iterdir())
    assert backup.read_text(encoding="utf-8") == "old/keep.arc,3\n"


def test_apply_still_writes_manifest_when_backup_fails(source_root, game_root, tmp_path, capsys):
    manifest_path = write_installed(game_root, ["old/keep.arc,3"])
    installed = load_installed_manifest(manifest_path)
    plan = _plan(source_root, game_root, installed, [("com3d2plg_dlc001", [("a.png", b"a", "1")])])
    backup_dir = tmp_path / "backups"
    backup_dir.write_text("not a directory", encoding="utf-8")

    result = apply_install_plan(plan, installed, manifest_path, backup_dir=backup_dir)

    assert result.ok
    assert (game_root / "a.png").read_bytes() == b"a"
    assert load_installed_manifest(manifest_path) == {"old/keep.arc": "3", "a.png": "1"}
    assert "Could not back up" in capsys.readouterr().out
