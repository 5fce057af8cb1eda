"""Data models for the auto-update run."""

from .event import PushEvent, RunContext
from .pull_request import PullRequestView
from .results import (
    FailureKind,
    UpdateOutcome,
    NotifyOutcome,
    UpdateResult,
    NotifyResult,
    RunSummary,
)

__all__ = [
    "PushEvent",
    "RunContext",
    "PullRequestView",
    "FailureKind",
    "UpdateOutcome",
    "NotifyOutcome",
    "UpdateResult",
    "NotifyResult",
    "RunSummary",
]
