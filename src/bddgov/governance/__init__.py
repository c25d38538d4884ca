"""bddgov governance engine — feature file scan, status classification, audits."""

from bddgov.governance.classify import PRIMARY_STATUS_TAGS, classify, extract_impl_tags
from bddgov.governance.discovery import find_feature_files
from bddgov.governance.models import BddGovernanceSnapshot, StatusCounts
from bddgov.governance.parser import parse_feature_file
from bddgov.governance.repo_root import resolve_repo_root
from bddgov.governance.safety import PathSafetyError, resolve_read_path
from bddgov.governance.snapshot import compute_bdd_governance_snapshot

__all__ = [
    "BddGovernanceSnapshot",
    "PRIMARY_STATUS_TAGS",
    "PathSafetyError",
    "StatusCounts",
    "classify",
    "compute_bdd_governance_snapshot",
    "extract_impl_tags",
    "find_feature_files",
    "parse_feature_file",
    "resolve_read_path",
    "resolve_repo_root",
]
