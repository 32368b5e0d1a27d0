from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Mapping

from .file_utils import backup_file, copy_file
from .logging_utils import log_error, log_info, log_ok, log_warn
from .manifest_codec import write_installed_manifest
from .models import InstallCandidate, InstallResult

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


def confirm_install(
    plan: Mapping[str, InstallCandidate],
    prompt: Callable[[str], str] | None = None,
) -> bool:
    prompt = prompt or input
    try:
        answer = prompt(f"Install {len(plan)} file(s)? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def apply_install_plan(
    plan: Mapping[str, InstallCandidate],
    installed: Mapping[str, str],
    manifest_path: Path,
    *,
    backup_dir: Path | None = None,
    copier: Callable[[Path, Path], None] = copy_file,
) -> InstallResult:
    """Back up the manifest, copy every planned file, then rewrite the manifest in full.

    The first failed copy stops the run. Files copied before it are still
    recorded in the manifest; the failure is reported on the returned result.
    """

    updated: Dict[str, str] = dict(installed)
    result = InstallResult(manifest=updated)
    total = len(plan)

    if backup_dir is not None and manifest_path.exists():
        try:
            backup_file(manifest_path, backup_dir)
        except OSError as exc:
            log_warn(f"Could not back up {manifest_path} into {backup_dir}: {exc}. Continuing without a backup.")

    for index, candidate in enumerate(plan.values(), start=1):
        log_info(
            f"[{index}/{total}] {candidate.folder_name}: {candidate.target_path} "
            f"({candidate.version_label})"
        )
        try:
            copier(candidate.source_file, candidate.destination_file)
        except OSError as exc:
            log_error(
                f"Failed to install {candidate.target_path} from '{candidate.folder_name}': {exc}",
                indent=2,
            )
            result.failed = candidate
            result.error = str(exc)
            break
        updated[candidate.target_path] = candidate.to_version
        result.applied.append(candidate)

    if not result.applied:
        log_warn("No files were installed; manifest left untouched.")
        return result

    write_installed_manifest(manifest_path, updated)
    log_ok(f"Manifest updated with {result.total_applied} change(s): {manifest_path}")

    if result.failed is not None:
        remaining = total - result.total_applied - 1
        log_warn(f"Install stopped early; {remaining} planned file(s) were not attempted.")
    return result


__all__ = ["confirm_install", "apply_install_plan"]
