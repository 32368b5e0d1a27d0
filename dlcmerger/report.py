from __future__ import annotations

from pathlib import Path
from typing import List, Mapping

from openpyxl import Workbook

from .logging_utils import log_ok, log_plan
from .models import InstallCandidate, Rejection


def print_install_plan(plan: Mapping[str, InstallCandidate]) -> None:
    if not plan:
        log_ok("Everything is up to date. Nothing to install.")
        return
    total = len(plan)
    log_plan(f"{total} file(s) will be installed:")
    for index, candidate in enumerate(plan.values(), start=1):
        log_plan(
            f"[{index}/{total}] {candidate.folder_name}: {candidate.target_path} "
            f"{candidate.version_label}",
            indent=2,
        )


def export_report(
    output_path: Path,
    plan: Mapping[str, InstallCandidate],
    rejections: List[Rejection],
    superseded: List[InstallCandidate],
) -> None:
    """Write an Excel report of the install plan and everything left out of it."""

    output_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()

    plan_sheet = workbook.active
    if not plan_sheet:
        plan_sheet = workbook.create_sheet("plan")
    else:
        plan_sheet.title = "plan"
    plan_sheet.append(["target", "folder", "from version", "to version", "size", "source file"])
    for candidate in plan.values():
        plan_sheet.append(
            [
                candidate.target_path,
                candidate.folder_name,
                candidate.from_version,
                candidate.to_version,
                candidate.size,
                str(candidate.source_file),
            ]
        )

    rejection_sheet = workbook.create_sheet("rejections")
    rejection_sheet.append(["target", "folder", "version", "reason", "message"])
    for rejection in sorted(rejections, key=lambda item: (item.folder_name, item.entry.target_path)):
        rejection_sheet.append(
            [
                rejection.entry.target_path,
                rejection.folder_name,
                rejection.entry.version,
                rejection.reason.value,
                rejection.message,
            ]
        )

    # Candidates that passed validation but lost to a newer version elsewhere
    superseded_sheet = workbook.create_sheet("superseded")
    superseded_sheet.append(["target", "folder", "to version", "winning folder"])
    for candidate in superseded:
        winner = plan.get(candidate.target_path)
        superseded_sheet.append(
            [
                candidate.target_path,
                candidate.folder_name,
                candidate.to_version,
                winner.folder_name if winner else "",
            ]
        )

    workbook.save(output_path)
    workbook.close()


__all__ = ["print_install_plan", "export_report"]
