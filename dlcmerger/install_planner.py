from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from .candidate_validator import VersionComparator, string_greater
from .models import InstallCandidate


def plan_install(
    candidates: Iterable[InstallCandidate],
    compare: VersionComparator = string_greater,
) -> Dict[str, InstallCandidate]:
    """Keep the highest ``to_version`` per target path; ties keep the first candidate seen."""

    plan: Dict[str, InstallCandidate] = {}
    for candidate in candidates:
        current = plan.get(candidate.target_path)
        if current is None or compare(candidate.to_version, current.to_version):
            plan[candidate.target_path] = candidate
    return plan


def superseded_candidates(
    candidates: Iterable[InstallCandidate],
    plan: Mapping[str, InstallCandidate],
) -> List[InstallCandidate]:
    return [
        candidate
        for candidate in candidates
        if plan.get(candidate.target_path) is not candidate
    ]


__all__ = ["plan_install", "superseded_candidates"]
