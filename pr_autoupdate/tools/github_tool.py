"""GitHub API wrapper for the auto-update operations."""

import os
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from github import Auth, Github, GithubException
from github.IssueComment import IssueComment
from github.PullRequest import PullRequest
from github.Repository import Repository
from requests.exceptions import RequestException

from ..exceptions import AutoUpdateError
from ..models import PullRequestView


class GitHubTool:
    """
    GitHub API wrapper for auto-update operations.

    Handles:
    - Listing open PRs against a base branch (all pages)
    - Updating a PR branch from its base
    - Reading head commits and issue comments
    - Posting issue comments
    """

    def __init__(self, repo: str, token: Optional[str] = None, gh: Optional[Github] = None):
        """
        Initialize GitHub tool.

        Args:
            repo: Repository in format "owner/repo"
            token: GitHub token (defaults to GITHUB_TOKEN env var)
            gh: Pre-built client, mainly for tests
        """
        if gh is None:
            self.token = token or os.environ.get("GITHUB_TOKEN")
            if not self.token:
                raise AutoUpdateError("GitHub token required. Set the github_token input or GITHUB_TOKEN env var.")
            gh = Github(auth=Auth.Token(self.token))

        self.gh = gh
        try:
            self.repo: Repository = self.gh.get_repo(repo)
        except (GithubException, RequestException) as e:
            # Bad credentials surface here, on the first request
            raise AutoUpdateError(f"Could not access {repo}: {e}") from e
        self._pulls: Dict[int, PullRequest] = {}

    def list_open_pulls(self, base: str) -> List[PullRequestView]:
        """
        List every open pull request targeting a base branch.

        PyGithub's PaginatedList follows the Link headers, so iterating
        it to the end fetches every page in server order.

        Args:
            base: Base branch name (without refs/heads/)

        Returns:
            Views in the order returned by the server
        """
        views = []
        for pr in self.repo.get_pulls(state="open", base=base):
            self._pulls[pr.number] = pr
            # The list payload already has auto_merge; raw_data would re-fetch every PR
            views.append(PullRequestView.from_payload(pr._rawData))
        return views

    def get_pull(self, number: int) -> PullRequest:
        """Get a pull request object, reusing the one seen while listing."""
        if number not in self._pulls:
            self._pulls[number] = self.repo.get_pull(number)
        return self._pulls[number]

    def get_mergeability(self, number: int) -> Tuple[Optional[bool], Optional[str]]:
        """
        Fetch whether GitHub can merge a PR cleanly.

        Only the single-PR endpoint computes mergeability, so this is one
        extra request per call.

        Returns:
            Tuple of (mergeable, mergeable_state); mergeable is None until computed
        """
        pr = self.repo.get_pull(number)
        self._pulls[number] = pr
        return pr.mergeable, pr.mergeable_state

    def update_branch(self, number: int) -> bool:
        """
        Update a PR branch with the latest changes of its base.

        Returns:
            True if GitHub accepted the update (202)
        """
        return self.get_pull(number).update_branch()

    def get_commit_committer_date(self, full_name: str, sha: str) -> Optional[datetime]:
        """
        Get the committer date of a commit.

        Args:
            full_name: Repository owning the commit ("owner/repo"), may be a fork
            sha: Commit SHA

        Returns:
            Committer date, or None if the commit has no committer
        """
        repo = self.repo if full_name == self.repo.full_name else self.gh.get_repo(full_name)
        committer = repo.get_commit(sha).commit.committer
        if committer is None:
            return None
        return committer.date

    def find_comments_since(self, number: int, since: datetime) -> List[IssueComment]:
        """List all comments on a PR conversation since a point in time."""
        # PyGithub formats since as UTC without looking at the offset
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        since = since.astimezone(timezone.utc)
        return list(self.repo.get_issue(number).get_comments(since=since))

    def create_comment(self, number: int, body: str) -> IssueComment:
        """Post a comment on a PR conversation."""
        return self.get_pull(number).create_issue_comment(body)
