"""Eligibility policy: which candidate PRs get an update attempt."""

from typing import Callable, List

from ..config import UpdateConfig
from ..models import PullRequestView, PushEvent
from ..utils import get_logger

# A predicate returns False to skip the PR and logs its own reason.
Predicate = Callable[[PullRequestView, PushEvent], bool]

logger = get_logger()


def has_label(label: str) -> Predicate:
    """Require an exact label name."""
    def check(pr: PullRequestView, event: PushEvent) -> bool:
        if label not in pr.labels:
            logger.info(f'Pull request #{pr.number} does not have the "{label}" label')
            return False
        return True

    check.__name__ = "has_label"
    return check


def is_not_draft(pr: PullRequestView, event: PushEvent) -> bool:
    if pr.draft:
        logger.info(f"Pull request #{pr.number} is still a draft")
        return False
    return True


def has_auto_merge(pr: PullRequestView, event: PushEvent) -> bool:
    if not pr.auto_merge_enabled:
        logger.info(f"Pull request #{pr.number} does not have auto-merge enabled")
        return False
    return True


def has_no_known_conflicts(pr: PullRequestView, event: PushEvent) -> bool:
    # Unknown mergeability is not a reason to skip; the update call decides
    if pr.has_known_conflicts:
        logger.info(f"Pull request #{pr.number} has known merge conflicts")
        return False
    return True


def is_behind_push(pr: PullRequestView, event: PushEvent) -> bool:
    if pr.base_sha == event.after:
        logger.info(f"Pull request #{pr.number} is already up to date")
        return False
    return True


def build_policy(config: UpdateConfig) -> List[Predicate]:
    """
    Build the ordered list of predicates for a configuration.

    The up-to-date check always comes last.
    """
    policy: List[Predicate] = []
    if config.label:
        policy.append(has_label(config.label))
    if config.skip_drafts:
        policy.append(is_not_draft)
    if config.require_auto_merge:
        policy.append(has_auto_merge)
    if config.skip_conflicting:
        policy.append(has_no_known_conflicts)
    policy.append(is_behind_push)
    return policy


def is_eligible(pr: PullRequestView, event: PushEvent, policy: List[Predicate]) -> bool:
    """Evaluate the policy in order, stopping at the first rejection."""
    return all(predicate(pr, event) for predicate in policy)
