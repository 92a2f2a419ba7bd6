"""Custom exceptions for wpfinger.

Transport and extraction failures are never raised across the public
operations; these exceptions cover call-site mistakes only.
"""


class WPFingerError(Exception):
    """Base exception for all wpfinger errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidVersionBound(WPFingerError, ValueError):
    """A fixed or introduced bound could not be parsed as a version."""

    def __init__(self, bound: str, role: str):
        super().__init__(f"Invalid {role} version bound: {bound!r}")
        self.bound = bound
        self.role = role
