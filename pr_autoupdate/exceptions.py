"""Errors that abort an auto-update run."""


class AutoUpdateError(Exception):
    """
    Fatal condition for the whole run.

    Raised for a wrong trigger event, missing credentials or an unusable
    repository/event input, and when candidate pull requests cannot be listed.
    Per-PR failures are never raised as this; they are reported as results.
    """
