"""Core package for the COM3D2 DLC merger."""

from .candidate_validator import (
    collect_candidates,
    compute_crc32,
    get_version_comparator,
    numeric_greater,
    string_greater,
    validate_entry,
)
from .folder_classifier import (
    DEFAULT_RULES,
    build_rules,
    classify,
    collect_installer_folders,
    discover_installer_dirs,
)
from .game_locator import resolve_install_root
from .install_executor import apply_install_plan, confirm_install
from .install_planner import plan_install, superseded_candidates
from .load_config import ProgramConfig, load_program_config
from .manifest_codec import (
    MANIFEST_NAME,
    ManifestFormatError,
    load_content_manifest,
    load_installed_manifest,
    parse_content_manifest,
    parse_installed_manifest,
    serialize_installed_manifest,
    write_installed_manifest,
)
from .models import (
    Classification,
    FolderKind,
    InstallCandidate,
    InstallerFolder,
    InstallResult,
    ManifestEntry,
    RejectReason,
    Rejection,
)
from .report import export_report, print_install_plan

__all__ = [
    "Classification",
    "FolderKind",
    "InstallCandidate",
    "InstallerFolder",
    "InstallResult",
    "ManifestEntry",
    "RejectReason",
    "Rejection",
    "ProgramConfig",
    "load_program_config",
    "resolve_install_root",
    "MANIFEST_NAME",
    "ManifestFormatError",
    "parse_installed_manifest",
    "serialize_installed_manifest",
    "parse_content_manifest",
    "load_installed_manifest",
    "load_content_manifest",
    "write_installed_manifest",
    "DEFAULT_RULES",
    "build_rules",
    "classify",
    "discover_installer_dirs",
    "collect_installer_folders",
    "string_greater",
    "numeric_greater",
    "get_version_comparator",
    "compute_crc32",
    "validate_entry",
    "collect_candidates",
    "plan_install",
    "superseded_candidates",
    "confirm_install",
    "apply_install_plan",
    "print_install_plan",
    "export_report",
]
