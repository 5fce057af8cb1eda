"""Tests for the PyGithub adapter, with the PyGithub client mocked out."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, PropertyMock

import pytest
from github import BadCredentialsException

from pr_autoupdate.exceptions import AutoUpdateError
from pr_autoupdate.models import PullRequestView
from pr_autoupdate.tools import GitHubTool


def pr_payload(number, **overrides):
    data = {
        "number": number,
        "draft": False,
        "auto_merge": None,
        "labels": [{"name": "autoupdate"}],
        "base": {"sha": "aaa", "ref": "main"},
        "head": {"sha": f"head{number}", "repo": {"full_name": "fork/widgets"}},
        "mergeable": None,
        "mergeable_state": "unknown",
    }
    data.update(overrides)
    return data


def gh_pull(number, **overrides):
    pr = MagicMock()
    pr.number = number
    pr._rawData = pr_payload(number, **overrides)
    # Reading raw_data would send one GET per listed PR
    type(pr).raw_data = PropertyMock(side_effect=AssertionError("raw_data completes the object"))
    return pr


@pytest.fixture
def gh():
    gh = MagicMock()
    gh.get_repo.return_value.full_name = "octo/widgets"
    return gh


class TestGitHubTool:
    """Tests for the GitHub wrapper."""

    def test_token_is_required(self, monkeypatch):
        # Given
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)

        # When/Then
        with pytest.raises(AutoUpdateError, match="GitHub token required"):
            GitHubTool("octo/widgets")

    def test_bad_credentials_are_fatal(self, gh):
        """Given GitHub rejects the token, should raise the fatal error instead of a raw API error."""
        # Given
        gh.get_repo.side_effect = BadCredentialsException(401, {"message": "Bad credentials"}, None)

        # When/Then
        with pytest.raises(AutoUpdateError, match="Could not access octo/widgets: 401"):
            GitHubTool("octo/widgets", gh=gh)

    def test_lists_every_page(self, gh):
        """Given a paginated listing, should return every PR in server order."""
        # Given
        def pages():
            yield from [gh_pull(4), gh_pull(2)]   # page 1
            yield from [gh_pull(11)]              # page 2

        gh.get_repo.return_value.get_pulls.return_value = pages()
        tool = GitHubTool("octo/widgets", gh=gh)

        # When
        views = tool.list_open_pulls("main")

        # Then
        gh.get_repo.return_value.get_pulls.assert_called_once_with(state="open", base="main")
        assert [v.number for v in views] == [4, 2, 11]

    def test_listed_pulls_are_reused_for_updates(self, gh):
        # Given
        pull = gh_pull(4)
        pull.update_branch.return_value = True
        gh.get_repo.return_value.get_pulls.return_value = [pull]
        tool = GitHubTool("octo/widgets", gh=gh)
        tool.list_open_pulls("main")

        # When
        accepted = tool.update_branch(4)

        # Then
        assert accepted is True
        gh.get_repo.return_value.get_pull.assert_not_called()

    def test_committer_date_from_fork(self, gh):
        """Given a head in a fork, should read the commit from the fork."""
        # Given
        date = datetime(2024, 5, 1, tzinfo=timezone.utc)
        fork = MagicMock()
        fork.get_commit.return_value.commit.committer.date = date
        gh.get_repo.side_effect = lambda name: fork if name == "fork/widgets" else MagicMock(full_name=name)
        tool = GitHubTool("octo/widgets", gh=gh)

        # When
        result = tool.get_commit_committer_date("fork/widgets", "head4")

        # Then
        fork.get_commit.assert_called_once_with("head4")
        assert result == date

    def test_missing_committer(self, gh):
        # Given
        gh.get_repo.return_value.get_commit.return_value.commit.committer = None
        tool = GitHubTool("octo/widgets", gh=gh)

        # Then
        assert tool.get_commit_committer_date("octo/widgets", "abc") is None

    def test_comments_since(self, gh):
        # Given
        since = datetime(2024, 5, 1, tzinfo=timezone.utc)
        issue = gh.get_repo.return_value.get_issue.return_value
        issue.get_comments.return_value = iter(["first", "second"])
        tool = GitHubTool("octo/widgets", gh=gh)

        # When
        comments = tool.find_comments_since(7, since)

        # Then
        gh.get_repo.return_value.get_issue.assert_called_once_with(7)
        issue.get_comments.assert_called_once_with(since=since)
        assert comments == ["first", "second"]


class TestPullRequestView:
    """Tests for building views from REST payloads."""

    def test_from_payload(self):
        # When
        view = PullRequestView.from_payload(pr_payload(5, auto_merge={"merge_method": "squash"}, draft=True))

        # Then
        assert view.number == 5
        assert view.base_sha == "aaa"
        assert view.head_sha == "head5"
        assert view.head_repository_full_name == "fork/widgets"
        assert view.labels == frozenset({"autoupdate"})
        assert view.auto_merge_enabled is True
        assert view.draft is True
        assert view.has_known_conflicts is False

    def test_deleted_fork(self):
        # When
        view = PullRequestView.from_payload(pr_payload(5, head={"sha": "x", "repo": None}))

        # Then
        assert view.head_repository_full_name is None

    def test_dirty_state_is_a_known_conflict(self):
        view = PullRequestView.from_payload(pr_payload(5, mergeable=False, mergeable_state="dirty"))
        assert view.has_known_conflicts is True


class TestGitHubToolRequests:
    """Tests for the requests the wrapper sends."""

    def test_listing_sends_no_per_pr_request(self, gh):
        """Given a listing, should build views from the list payload alone."""
        # Given
        gh.get_repo.return_value.get_pulls.return_value = [gh_pull(4, auto_merge={"merge_method": "merge"})]
        tool = GitHubTool("octo/widgets", gh=gh)

        # When
        views = tool.list_open_pulls("main")

        # Then
        assert views[0].auto_merge_enabled is True
        gh.get_repo.return_value.get_pull.assert_not_called()

    def test_mergeability_is_fetched_from_the_single_pr(self, gh):
        # Given
        pull = gh.get_repo.return_value.get_pull.return_value
        pull.mergeable = False
        pull.mergeable_state = "dirty"
        tool = GitHubTool("octo/widgets", gh=gh)

        # When
        result = tool.get_mergeability(4)

        # Then
        gh.get_repo.return_value.get_pull.assert_called_once_with(4)
        assert result == (False, "dirty")

    def test_comments_since_is_sent_in_utc(self, gh):
        """Given a committer date with an offset, should shift it to UTC before querying."""
        # Given
        since = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        issue = gh.get_repo.return_value.get_issue.return_value
        issue.get_comments.return_value = iter([])
        tool = GitHubTool("octo/widgets", gh=gh)

        # When
        tool.find_comments_since(7, since)

        # Then
        sent = issue.get_comments.call_args.kwargs["since"]
        assert sent.utcoffset() == timedelta(0)
        assert (sent.hour, sent.minute) == (12, 0)
