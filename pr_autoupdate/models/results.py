"""Data models for per-PR outcomes and the run summary."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class FailureKind(Enum):
    """Why a per-PR step did not succeed."""
    UPDATE_REJECTED = "update_rejected"                  # Conflicts, permissions, already current
    MISSING_COMMITTER = "missing_committer"              # Head commit has no committer
    MISSING_HEAD_REPOSITORY = "missing_head_repository"  # Head fork no longer exists
    API_ERROR = "api_error"                              # Transport or unexpected API failure


class UpdateOutcome(Enum):
    """Result of the update-branch attempt."""
    UPDATED = "updated"
    FAILED = "failed"


class NotifyOutcome(Enum):
    """Result of the conflict notification."""
    COMMENTED = "commented"
    ALREADY_COMMENTED = "already_commented"
    FAILED = "failed"


@dataclass
class UpdateResult:
    """Result of updating a PR branch from its base."""
    pr_number: int
    outcome: UpdateOutcome
    failure: Optional[FailureKind] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == UpdateOutcome.UPDATED


@dataclass
class NotifyResult:
    """Result of posting (or finding) the conflict comment."""
    pr_number: int
    outcome: NotifyOutcome
    comment_url: Optional[str] = None
    failure: Optional[FailureKind] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome != NotifyOutcome.FAILED


@dataclass
class RunSummary:
    """What happened to each candidate PR during one run."""
    base: Optional[str]                                      # Pushed branch, None for non-branch refs
    candidates: List[int] = field(default_factory=list)      # In listing order
    skipped: List[int] = field(default_factory=list)
    updated: List[int] = field(default_factory=list)
    update_failed: List[int] = field(default_factory=list)
    commented: List[int] = field(default_factory=list)
    already_commented: List[int] = field(default_factory=list)
    notify_failed: List[int] = field(default_factory=list)

    @property
    def update_attempts(self) -> int:
        return len(self.updated) + len(self.update_failed)

    def record_update(self, result: UpdateResult) -> None:
        if result.succeeded:
            self.updated.append(result.pr_number)
        else:
            self.update_failed.append(result.pr_number)

    def record_notification(self, result: NotifyResult) -> None:
        if result.outcome == NotifyOutcome.COMMENTED:
            self.commented.append(result.pr_number)
        elif result.outcome == NotifyOutcome.ALREADY_COMMENTED:
            self.already_commented.append(result.pr_number)
        else:
            self.notify_failed.append(result.pr_number)

    def as_dict(self) -> dict:
        return {
            "base": self.base,
            "candidates": self.candidates,
            "skipped": self.skipped,
            "updated": self.updated,
            "update_failed": self.update_failed,
            "commented": self.commented,
            "already_commented": self.already_commented,
            "notify_failed": self.notify_failed,
        }
