"""Tools for talking to GitHub."""

from .github_tool import GitHubTool

__all__ = [
    "GitHubTool",
]
