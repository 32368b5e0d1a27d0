from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from dlcmerger import (
    MANIFEST_NAME,
    ManifestFormatError,
    apply_install_plan,
    build_rules,
    collect_candidates,
    collect_installer_folders,
    confirm_install,
    discover_installer_dirs,
    export_report,
    get_version_comparator,
    load_installed_manifest,
    load_program_config,
    plan_install,
    print_install_plan,
    resolve_install_root,
    superseded_candidates,
)
from dlcmerger.logging_utils import log_info, log_warn


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Scan DLC installer folders, work out which files are newer than the "
            "installed ones, copy them into the game and update its update.lst."
        )
    )
    parser.add_argument(
        "--game",
        type=Path,
        default=None,
        help="Path to the game installation folder (the one holding update.lst).",
    )
    parser.add_argument(
        "--source",
        type=Path,
        default=None,
        help="Folder to scan recursively for DLC installer folders. Defaults to the current directory.",
    )
    parser.add_argument(
        "--config-path",
        type=Path,
        default=Path("config.toml"),
        help="Path to the program configuration TOML file.",
    )
    parser.add_argument(
        "--verify-crc",
        action="store_true",
        default=None,
        help="Also check each source file against the CRC32 listed in its update.lst.",
    )
    parser.add_argument(
        "--version-compare",
        choices=("string", "numeric"),
        default=None,
        help="How version tokens are compared. 'string' matches the official updater.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the install plan.",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Install without asking for confirmation.",
    )
    parser.add_argument(
        "--export-path",
        type=Path,
        default=Path(""),
        help="Path to save the install report Excel file.",
    )
    parser.add_argument(
        "--backup-dir",
        type=Path,
        default=None,
        help="Directory to store a copy of update.lst before it is rewritten.",
    )
    parser.add_argument(
        "--no-backup",
        action="store_true",
        help="Do not back up update.lst before rewriting it.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    config = load_program_config(args.config_path.expanduser())

    try:
        game_root = resolve_install_root(args.game, config.game)
    except FileNotFoundError as exc:
        raise SystemExit(str(exc)) from exc

    manifest_path = game_root / MANIFEST_NAME
    try:
        installed = load_installed_manifest(manifest_path)
    except (ManifestFormatError, UnicodeDecodeError, OSError) as exc:
        raise SystemExit(f"Cannot read {manifest_path}: {exc}") from exc
    log_info(f"Game folder: {game_root} ({len(installed)} tracked files)")

    verify_crc = config.verify_crc if args.verify_crc is None else args.verify_crc
    compare = get_version_comparator(args.version_compare or config.version_compare)
    scan_root = (args.source or config.source or Path.cwd()).expanduser().resolve()

    installer_dirs = discover_installer_dirs(scan_root, exclude=[game_root])
    if not installer_dirs:
        log_warn(f"No installer folders found under {scan_root}.")
        return 0
    log_info(f"Found {len(installer_dirs)} folder(s) with {MANIFEST_NAME} under {scan_root}.")

    folders = collect_installer_folders(installer_dirs, build_rules(config.ignore_folders))
    candidates, rejections = collect_candidates(
        folders,
        installed,
        install_root=game_root,
        verify_crc=verify_crc,
        compare=compare,
    )
    plan = plan_install(candidates, compare)
    print_install_plan(plan)

    export_path = args.export_path
    if not export_path == Path(""):
        if export_path.suffix.lower() != ".xlsx":
            export_path = export_path / "install_report.xlsx"
        export_report(export_path, plan, rejections, superseded_candidates(candidates, plan))
        log_info(f"Report saved to {export_path}")

    if not plan:
        return 0
    if args.dry_run:
        log_info("Dry run active. No file changes were made.")
        return 0
    if not args.yes and not confirm_install(plan):
        log_info("Install cancelled. No file changes were made.")
        return 0

    backup_dir = None if args.no_backup else (args.backup_dir or config.backup_dir).expanduser()
    result = apply_install_plan(plan, installed, manifest_path, backup_dir=backup_dir)
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
