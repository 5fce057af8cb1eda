#!/usr/bin/env python3
"""
PR Auto-Update - Main Entry Point

Keeps open pull requests up to date with their base branch after a push,
and comments on the ones GitHub cannot update because of conflicts.

Usage:
    python -m pr_autoupdate.main run --repo owner/repo --event-path event.json

Or via GitHub Actions on "push", where the repository, event and
github_token/label inputs come from the runner environment.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import UpdateConfig, load_event_payload
from .exceptions import AutoUpdateError
from .models import RunContext, RunSummary
from .orchestrator import AutoUpdateOrchestrator
from .tools import GitHubTool
from .utils import setup_logging, get_logger


def run_update(config: UpdateConfig) -> RunSummary:
    """
    Run the auto-update for one triggering event.

    Args:
        config: Update configuration

    Returns:
        RunSummary of the run

    Raises:
        AutoUpdateError: on any fatal condition
    """
    logger = get_logger()

    if not config.repository:
        raise AutoUpdateError("Repository required. Use --repo or set GITHUB_REPOSITORY env var")
    if not config.github_token:
        raise AutoUpdateError("Input required and not supplied: github_token")

    # Only a push payload is parsed; other events fail validation in the orchestrator
    payload = load_event_payload(config.event_path) if config.event_name == "push" else None
    context = RunContext.from_repository(config.repository, config.event_name, payload)

    logger.info(f"Starting auto-update for {context.full_name} ({context.event_name})")

    client = GitHubTool(repo=context.full_name, token=config.github_token)
    orchestrator = AutoUpdateOrchestrator(client, context, config)
    return orchestrator.run()


def cmd_run(args):
    """Handle 'run' subcommand."""
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    logger = get_logger()

    # Build config
    config = UpdateConfig.from_env()

    if args.repo:
        config.repository = args.repo
    if args.event_name:
        config.event_name = args.event_name
    if args.event_path:
        config.event_path = args.event_path
    if args.label:
        config.label = args.label
    if args.require_auto_merge:
        config.require_auto_merge = True
    if args.include_drafts:
        config.skip_drafts = False
    if args.skip_conflicting:
        config.skip_conflicting = True

    # Run
    try:
        summary = run_update(config)
    except AutoUpdateError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Auto-update failed with an internal error: {e}")
        sys.exit(1)

    logger.info(f"Run summary: {summary.as_dict()}")
    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Update open pull requests with the latest changes of their base branch"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    run_parser = subparsers.add_parser("run", help="Update PRs based on the pushed branch")
    run_parser.add_argument(
        "--repo",
        type=str,
        help="Repository in format owner/repo (default: GITHUB_REPOSITORY)"
    )
    run_parser.add_argument(
        "--event-name",
        type=str,
        help="Triggering event name (default: GITHUB_EVENT_NAME)"
    )
    run_parser.add_argument(
        "--event-path",
        type=str,
        help="Path to the event payload JSON (default: GITHUB_EVENT_PATH)"
    )
    run_parser.add_argument(
        "--label",
        type=str,
        help="Only update PRs carrying this label (default: INPUT_LABEL)"
    )
    run_parser.add_argument(
        "--require-auto-merge",
        action="store_true",
        help="Only update PRs with auto-merge enabled"
    )
    run_parser.add_argument(
        "--include-drafts",
        action="store_true",
        help="Also update draft PRs"
    )
    run_parser.add_argument(
        "--skip-conflicting",
        action="store_true",
        help="Skip PRs GitHub already reports as conflicting"
    )
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """CLI entry point."""
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv

    # The action invokes us without a subcommand
    if not argv or argv[0].startswith("-"):
        argv = ["run", *argv]

    args = parser.parse_args(argv)

    if args.command == "run":
        cmd_run(args)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
