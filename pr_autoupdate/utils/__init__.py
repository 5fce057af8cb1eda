"""Utility functions."""

from .logging import setup_logging, get_logger, log_group, running_in_actions

__all__ = [
    "setup_logging",
    "get_logger",
    "log_group",
    "running_in_actions",
]
