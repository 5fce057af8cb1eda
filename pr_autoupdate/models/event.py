"""Models for the triggering event and the run context."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..exceptions import AutoUpdateError

BRANCH_REF_PREFIX = "refs/heads/"


@dataclass(frozen=True)
class PushEvent:
    """The parts of a push webhook payload the run depends on."""
    ref: str     # e.g. refs/heads/main
    after: str   # SHA the pushed branch now points at

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PushEvent":
        """Build from a push webhook payload."""
        try:
            return cls(ref=str(payload["ref"]), after=str(payload["after"]))
        except KeyError as e:
            raise AutoUpdateError(f"Push event payload is missing {e.args[0]!r}") from e

    @property
    def branch(self) -> Optional[str]:
        """Name of the pushed branch, or None when a tag (or other ref) was pushed."""
        if not self.ref.startswith(BRANCH_REF_PREFIX):
            return None
        return self.ref[len(BRANCH_REF_PREFIX):]


@dataclass(frozen=True)
class RunContext:
    """Repository and event of the current run, passed to every component."""
    owner: str
    repo: str
    event_name: str
    event: Optional[PushEvent] = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_repository(
        cls,
        full_name: str,
        event_name: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> "RunContext":
        """
        Create the context for a run.

        Args:
            full_name: Repository in format "owner/repo"
            event_name: Name of the triggering event (e.g. "push")
            payload: Webhook payload; only parsed for push events

        Returns:
            RunContext
        """
        owner, sep, repo = full_name.partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise AutoUpdateError(f"Repository must be in format owner/repo, got {full_name!r}")

        event = None
        if event_name == "push":
            event = PushEvent.from_payload(payload or {})

        return cls(owner=owner, repo=repo, event_name=event_name, event=event)
