"""Branch updater: bring a PR branch up to date with its base."""

from github import GithubException
from requests.exceptions import RequestException

from ..models import FailureKind, PullRequestView, RunContext, UpdateOutcome, UpdateResult
from ..tools import GitHubTool
from ..utils import get_logger


class BranchUpdater:
    """
    Asks GitHub to merge the base branch into a PR branch.

    One attempt per PR, never retried. A rejection is reported as a
    failed result so the caller can move on to the next PR.
    """

    def __init__(self, client: GitHubTool, context: RunContext):
        """
        Initialize branch updater.

        Args:
            client: GitHub client for the current repository
            context: Repository and event of the run
        """
        self.client = client
        self.context = context
        self.logger = get_logger()

    def update(self, pr: PullRequestView) -> UpdateResult:
        """
        Update a PR branch from its base.

        Args:
            pr: Pull request to update

        Returns:
            UpdateResult with success/failure info
        """
        try:
            accepted = self.client.update_branch(pr.number)
        except GithubException as e:
            # 422 covers conflicts and "already up to date"; 403/404 cover permissions
            self.logger.warning(f"Failed to update PR #{pr.number} in {self.context.full_name}: {e}")
            return UpdateResult(
                pr_number=pr.number,
                outcome=UpdateOutcome.FAILED,
                failure=FailureKind.UPDATE_REJECTED,
                error=str(e)
            )
        except RequestException as e:
            self.logger.warning(f"Failed to reach GitHub while updating PR #{pr.number}: {e}")
            return UpdateResult(
                pr_number=pr.number,
                outcome=UpdateOutcome.FAILED,
                failure=FailureKind.API_ERROR,
                error=str(e)
            )

        if not accepted:
            self.logger.warning(f"GitHub did not accept the update of PR #{pr.number}")
            return UpdateResult(
                pr_number=pr.number,
                outcome=UpdateOutcome.FAILED,
                failure=FailureKind.UPDATE_REJECTED,
                error="update-branch request was not accepted"
            )

        self.logger.info("Updated!")
        return UpdateResult(pr_number=pr.number, outcome=UpdateOutcome.UPDATED)
