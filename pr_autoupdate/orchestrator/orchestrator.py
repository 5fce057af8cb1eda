"""Main orchestrator: keep open PRs up to date after a push."""

from dataclasses import replace
from typing import List, Optional

from github import GithubException
from requests.exceptions import RequestException

from ..config import UpdateConfig
from ..exceptions import AutoUpdateError
from ..models import PullRequestView, RunContext, RunSummary
from ..tools import GitHubTool
from ..utils import get_logger, log_group
from .eligibility import Predicate, build_policy, is_eligible
from .notifier import ConflictNotifier
from .updater import BranchUpdater


class AutoUpdateOrchestrator:
    """
    Updates every open PR based on the pushed branch.

    Flow:
    - Validate that a push triggered the run
    - List open PRs targeting the pushed branch (all pages)
    - For each PR, in listing order: eligibility -> update -> notify on failure

    PRs are processed one at a time so log groups never interleave and
    concurrent mutations never race on the same comment thread.
    """

    def __init__(
        self,
        client: GitHubTool,
        context: RunContext,
        config: Optional[UpdateConfig] = None,
        policy: Optional[List[Predicate]] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            client: GitHub client for the current repository
            context: Repository and event of the run
            config: Update configuration
            policy: Eligibility predicates (defaults to one built from config)
        """
        self.client = client
        self.context = context
        self.config = config or UpdateConfig()
        self.policy = policy if policy is not None else build_policy(self.config)
        self.logger = get_logger()

        self.updater = BranchUpdater(client, context)
        self.notifier = ConflictNotifier(client, context)

    def run(self) -> RunSummary:
        """
        Execute one auto-update run.

        Returns:
            RunSummary of what happened to each candidate

        Raises:
            AutoUpdateError: wrong trigger event, or the PRs could not be listed
        """
        event = self._validate_event()

        base = event.branch
        summary = RunSummary(base=base)
        if base is None:
            self.logger.info(f"Push to {event.ref} is not a branch push, nothing to update")
            return summary

        pull_requests = self._list_candidates(base)
        summary.candidates = [pr.number for pr in pull_requests]

        for pr in pull_requests:
            self._process(pr, summary)

        self.logger.info(
            f"Run complete: {len(summary.candidates)} candidates, "
            f"{len(summary.updated)} updated, {len(summary.update_failed)} failed to update"
        )
        return summary

    def _validate_event(self):
        if self.context.event_name != "push" or self.context.event is None:
            raise AutoUpdateError(
                f'Expected to be triggered by a "push" event but received a "{self.context.event_name}" event'
            )
        return self.context.event

    def _list_candidates(self, base: str) -> List[PullRequestView]:
        self.logger.info(f'Fetching pull requests based on "{base}"')
        try:
            pull_requests = self.client.list_open_pulls(base)
        except (GithubException, RequestException) as e:
            raise AutoUpdateError(f'Could not list pull requests based on "{base}": {e}') from e

        self.logger.info(f"Fetched pull requests: {[pr.number for pr in pull_requests]}")
        return pull_requests

    def _process(self, pr: PullRequestView, summary: RunSummary) -> None:
        if self.config.skip_conflicting:
            pr = self._with_mergeability(pr)

        if not is_eligible(pr, self.context.event, self.policy):
            summary.skipped.append(pr.number)
            return

        with log_group(f"Attempting to update pull request #{pr.number}", self.logger):
            result = self.updater.update(pr)
            summary.record_update(result)
            if result.succeeded:
                return

            summary.record_notification(self.notifier.notify_unupdatable(pr))

    def _with_mergeability(self, pr: PullRequestView) -> PullRequestView:
        # The listing does not carry mergeability; a failed lookup leaves it unknown
        try:
            mergeable, mergeable_state = self.client.get_mergeability(pr.number)
        except (GithubException, RequestException) as e:
            self.logger.warning(f"Could not check mergeability of PR #{pr.number}: {e}")
            return pr
        return replace(pr, mergeable=mergeable, mergeable_state=mergeable_state)
