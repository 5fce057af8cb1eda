"""Conflict notifier: tell the author when a PR cannot be auto-updated."""

from github import GithubException
from requests.exceptions import RequestException

from ..models import FailureKind, NotifyOutcome, NotifyResult, PullRequestView, RunContext
from ..tools import GitHubTool
from ..utils import get_logger

CONFLICT_COMMENT = "Cannot auto-update because of conflicts."


class ConflictNotifier:
    """
    Posts the conflict comment at most once per head commit.

    Only comments made since the head commit's committer date are
    considered, so a new push to the PR re-arms the notification.
    Failures are logged and returned, never raised.
    """

    def __init__(self, client: GitHubTool, context: RunContext):
        self.client = client
        self.context = context
        self.logger = get_logger()

    def notify_unupdatable(self, pr: PullRequestView) -> NotifyResult:
        """
        Post the conflict comment on a PR unless it is already there.

        Args:
            pr: Pull request whose update failed

        Returns:
            NotifyResult with the comment location or the failure
        """
        try:
            return self._notify(pr)
        except (GithubException, RequestException) as e:
            self.logger.warning(f"Failed to notify PR #{pr.number} about conflicts: {e}")
            return NotifyResult(
                pr_number=pr.number,
                outcome=NotifyOutcome.FAILED,
                failure=FailureKind.API_ERROR,
                error=str(e)
            )

    def _notify(self, pr: PullRequestView) -> NotifyResult:
        full_name = pr.head_repository_full_name
        if not full_name or "/" not in full_name:
            self.logger.warning(f"Cannot notify PR #{pr.number}: head repository is gone")
            return self._failed(pr, FailureKind.MISSING_HEAD_REPOSITORY, "head repository is missing")

        since = self.client.get_commit_committer_date(full_name, pr.head_sha)
        if since is None:
            self.logger.warning(f"Cannot notify PR #{pr.number}: commit {pr.head_sha} has no committer")
            return self._failed(pr, FailureKind.MISSING_COMMITTER, f"commit {pr.head_sha} has no committer")

        for comment in self.client.find_comments_since(pr.number, since):
            if comment.body == CONFLICT_COMMENT:
                self.logger.info(f"Already commented: {comment.html_url}")
                return NotifyResult(
                    pr_number=pr.number,
                    outcome=NotifyOutcome.ALREADY_COMMENTED,
                    comment_url=comment.html_url
                )

        comment = self.client.create_comment(pr.number, CONFLICT_COMMENT)
        self.logger.info(f"Commented: {comment.html_url}")
        return NotifyResult(
            pr_number=pr.number,
            outcome=NotifyOutcome.COMMENTED,
            comment_url=comment.html_url
        )

    def _failed(self, pr: PullRequestView, kind: FailureKind, error: str) -> NotifyResult:
        return NotifyResult(pr_number=pr.number, outcome=NotifyOutcome.FAILED, failure=kind, error=error)
