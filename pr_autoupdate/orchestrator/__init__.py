"""Pull request auto-update orchestration.

This module provides:
- AutoUpdateOrchestrator: Drives a run from push event to per-PR outcomes
- BranchUpdater: Updates a PR branch from its base
- ConflictNotifier: Comments on PRs that cannot be updated
- build_policy / is_eligible: Ordered eligibility predicates
"""

from .orchestrator import AutoUpdateOrchestrator
from .updater import BranchUpdater
from .notifier import ConflictNotifier, CONFLICT_COMMENT
from .eligibility import build_policy, is_eligible

__all__ = [
    "AutoUpdateOrchestrator",
    "BranchUpdater",
    "ConflictNotifier",
    "CONFLICT_COMMENT",
    "build_policy",
    "is_eligible",
]
