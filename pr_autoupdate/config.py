"""Configuration for the PR auto-update action."""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import json
import os

from .exceptions import AutoUpdateError


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name, "").strip().lower()
    if not value:
        return default
    return value == "true"


@dataclass
class UpdateConfig:
    """Configuration for an auto-update run."""

    # GitHub settings
    repository: str = ""              # owner/repo
    github_token: Optional[str] = None
    event_name: str = ""
    event_path: str = ""              # JSON webhook payload written by the runner

    # Eligibility policy
    label: Optional[str] = None       # Only update PRs carrying this label
    skip_drafts: bool = True
    require_auto_merge: bool = False  # Only update PRs with auto-merge enabled
    skip_conflicting: bool = False    # Skip PRs GitHub already reports as conflicting

    @classmethod
    def from_env(cls) -> "UpdateConfig":
        """Create config from the action inputs and runner environment."""
        return cls(
            repository=os.environ.get("GITHUB_REPOSITORY", ""),
            github_token=os.environ.get("INPUT_GITHUB_TOKEN") or os.environ.get("GITHUB_TOKEN"),
            event_name=os.environ.get("GITHUB_EVENT_NAME", ""),
            event_path=os.environ.get("GITHUB_EVENT_PATH", ""),
            label=os.environ.get("INPUT_LABEL") or None,
            skip_drafts=_env_flag("INPUT_SKIP_DRAFTS", True),
            require_auto_merge=_env_flag("INPUT_REQUIRE_AUTO_MERGE", False),
            skip_conflicting=_env_flag("INPUT_SKIP_CONFLICTING", False),
        )


def load_event_payload(path: str) -> Dict[str, Any]:
    """
    Read the webhook payload of the triggering event.

    Args:
        path: Path to the JSON payload (GITHUB_EVENT_PATH)

    Returns:
        Parsed payload
    """
    if not path:
        raise AutoUpdateError("Event payload path required. Set GITHUB_EVENT_PATH or use --event-path")

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        raise AutoUpdateError(f"Could not read event payload from {path}: {e}") from e

    if not isinstance(payload, dict):
        raise AutoUpdateError(f"Event payload in {path} is not a JSON object")
    return payload
