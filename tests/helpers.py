"""In-memory stand-in for the GitHub API and builders shared by the tests."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from github import GithubException

from pr_autoupdate.models import PullRequestView

HEAD_REPO = "octo/widgets"
COMMIT_DATE = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@dataclass
class FakeComment:
    body: str
    html_url: str
    created_at: datetime


class FakeRepositoryClient:
    """
    Records every call the components make.

    Pull requests are served in pages to mirror the server's pagination;
    list_open_pulls walks them all like PyGithub's PaginatedList.
    """

    def __init__(self, pages: Optional[List[List[PullRequestView]]] = None):
        self.pages = pages or []
        self.committer_dates: Dict[str, Optional[datetime]] = {}
        self.comments: Dict[int, List[FakeComment]] = {}
        self.reject_updates: Dict[int, Exception] = {}
        self.mergeability: Dict[int, Tuple[Optional[bool], Optional[str]]] = {}
        self.mergeability_errors: Dict[int, Exception] = {}
        self.listed_bases: List[str] = []
        self.update_calls: List[int] = []
        self.mergeability_calls: List[int] = []
        self.created_comments: List[FakeComment] = []
        self.now = COMMIT_DATE + timedelta(minutes=5)

    def list_open_pulls(self, base: str) -> List[PullRequestView]:
        self.listed_bases.append(base)
        return [pr for page in self.pages for pr in page]

    def get_mergeability(self, number: int) -> Tuple[Optional[bool], Optional[str]]:
        self.mergeability_calls.append(number)
        if number in self.mergeability_errors:
            raise self.mergeability_errors[number]
        return self.mergeability.get(number, (None, "unknown"))

    def update_branch(self, number: int) -> bool:
        self.update_calls.append(number)
        if number in self.reject_updates:
            raise self.reject_updates[number]
        return True

    def get_commit_committer_date(self, full_name: str, sha: str) -> Optional[datetime]:
        return self.committer_dates.get(sha, COMMIT_DATE)

    def find_comments_since(self, number: int, since: datetime) -> List[FakeComment]:
        return [c for c in self.comments.get(number, []) if c.created_at >= since]

    def create_comment(self, number: int, body: str) -> FakeComment:
        thread = self.comments.setdefault(number, [])
        comment = FakeComment(
            body=body,
            html_url=f"https://github.com/{HEAD_REPO}/pull/{number}#issuecomment-{len(thread) + 1}",
            created_at=self.now,
        )
        thread.append(comment)
        self.created_comments.append(comment)
        return comment


def make_pr(number: int = 7, **overrides) -> PullRequestView:
    """Build an eligible-by-default pull request view."""
    values = dict(
        number=number,
        base_sha="aaa",
        head_sha=f"head{number}",
        head_repository_full_name=HEAD_REPO,
        draft=False,
        auto_merge_enabled=True,
        labels=frozenset(),
    )
    values.update(overrides)
    return PullRequestView(**values)


def conflict_error() -> GithubException:
    return GithubException(422, {"message": "merge conflict between base and head"}, None)
