"""Logging utilities."""

import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

LOGGER_NAME = "pr_autoupdate"


def running_in_actions() -> bool:
    """Whether we are executing inside a GitHub Actions runner."""
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


class ActionsFormatter(logging.Formatter):
    """
    Formatter that turns warnings and errors into workflow commands.

    GitHub Actions renders ``::warning::`` and ``::error::`` lines as
    annotations on the run summary.
    """

    COMMANDS = {
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = self.COMMANDS.get(record.levelno)
        if command is None:
            return message
        # Workflow commands are single-line; escape per the runner's rules.
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"::{command}::{escaped}"


def setup_logging(
    level: int = logging.INFO,
    format_str: Optional[str] = None,
    actions: Optional[bool] = None,
) -> logging.Logger:
    """
    Setup logging for the auto-update run.

    Args:
        level: Logging level (default: INFO)
        format_str: Custom format string
        actions: Force GitHub Actions annotations on/off (default: autodetect)

    Returns:
        Configured logger
    """
    if actions is None:
        actions = running_in_actions()

    if format_str is None:
        # The runner timestamps every line already
        format_str = "%(message)s" if actions else "[%(asctime)s] %(levelname)s - %(message)s"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ActionsFormatter(format_str) if actions else logging.Formatter(format_str))

    logging.basicConfig(level=level, handlers=[handler], force=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


@contextmanager
def log_group(title: str, logger: Optional[logging.Logger] = None) -> Iterator[None]:
    """
    Wrap a block of log output in a collapsible group.

    Inside Actions this prints the ``::group::`` / ``::endgroup::`` pair;
    elsewhere the title is logged as a plain info line.
    """
    logger = logger or get_logger()

    if not running_in_actions():
        logger.info(title)
        yield
        return

    for handler in logging.getLogger().handlers:
        handler.flush()
    sys.stdout.write(f"::group::{title}\n")
    sys.stdout.flush()
    try:
        yield
    finally:
        for handler in logging.getLogger().handlers:
            handler.flush()
        sys.stdout.write("::endgroup::\n")
        sys.stdout.flush()
