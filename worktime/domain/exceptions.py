"""
Domain-specific exception hierarchy for the worktime application.
"""


class WorktimeError(Exception):
    """Base class for all application-level errors."""


class InvalidInterval(WorktimeError, ValueError):
    """Raised when an interval's bounds are not strictly ordered."""
