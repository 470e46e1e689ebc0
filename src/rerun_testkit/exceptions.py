"""Exceptions for rerun_testkit.

Errors derive from RerunTestkitError. ``Skip`` is the one control signal a
test raises on purpose and is not an error.
"""

from __future__ import annotations


class RerunTestkitError(Exception):
    """Base exception for all rerun_testkit errors."""

    pass


class ConfigError(RerunTestkitError):
    """Invalid or unreadable reporter configuration."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        full_message = message
        if path:
            full_message = f"Could not load config at '{path}'.\n{message}"
        super().__init__(full_message)


class DiscoveryError(RerunTestkitError):
    """A test target could not be found or imported."""

    def __init__(self, message: str, target: str):
        self.target = target
        super().__init__(f"Cannot load tests from '{target}': {message}")


class Skip(Exception):
    """Raised inside a test to mark it skipped."""

    def __init__(self, reason: str = "Skipped, no message given"):
        self.reason = reason
        super().__init__(reason)


def skip(reason: str = "Skipped, no message given") -> None:
    """Skip the running test."""
    raise Skip(reason)
