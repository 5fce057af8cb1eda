"""Pull request snapshot used by the eligibility policy and the updater."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional


@dataclass(frozen=True)
class PullRequestView:
    """
    Read-only view of an open pull request, fetched fresh on every run.

    Built from the REST payload so the policy never touches the API.
    """
    number: int
    base_sha: str
    head_sha: str
    head_repository_full_name: Optional[str] = None  # None when the fork was deleted
    draft: bool = False
    auto_merge_enabled: bool = False
    labels: FrozenSet[str] = field(default_factory=frozenset)
    mergeable: Optional[bool] = None        # None until GitHub has computed it
    mergeable_state: Optional[str] = None   # clean, dirty, behind, blocked, unknown...

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "PullRequestView":
        """Build a view from a pull request REST payload."""
        head = data.get("head") or {}
        head_repo = head.get("repo") or {}

        return cls(
            number=int(data["number"]),
            base_sha=(data.get("base") or {}).get("sha", ""),
            head_sha=head.get("sha", ""),
            head_repository_full_name=head_repo.get("full_name"),
            draft=bool(data.get("draft", False)),
            auto_merge_enabled=data.get("auto_merge") is not None,
            labels=frozenset(label["name"] for label in data.get("labels") or []),
            mergeable=data.get("mergeable"),
            mergeable_state=data.get("mergeable_state"),
        )

    @property
    def has_known_conflicts(self) -> bool:
        """True only when GitHub already reported the PR as conflicting."""
        return self.mergeable is False or self.mergeable_state == "dirty"
