"""Shared fixtures: an in-memory stand-in for the GitHub API."""

import pytest

from pr_autoupdate.models import PushEvent, RunContext

from tests.helpers import FakeRepositoryClient


@pytest.fixture
def push_event() -> PushEvent:
    return PushEvent(ref="refs/heads/main", after="bbb")


@pytest.fixture
def context(push_event) -> RunContext:
    return RunContext(owner="octo", repo="widgets", event_name="push", event=push_event)


@pytest.fixture
def client() -> FakeRepositoryClient:
    return FakeRepositoryClient()


@pytest.fixture(autouse=True)
def outside_actions(monkeypatch):
    """Keep log groups as plain log lines so caplog sees them."""
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
