"""Errors raised while building course rosters."""


class NotFoundError(LookupError):
    """Raised when a course, user or group is not part of the roster data."""
