"""
pbac Exception Hierarchy

All exceptions inherit from PbacError for easy catching.
Matching and authorization never raise; only parsing and
policy configuration do.
"""


class PbacError(Exception):
    """Base exception for all pbac errors"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ElementParseError(PbacError):
    """
    Raised when an identifier or document string is malformed.

    `token` is the offending substring: the empty segment for
    blank segments, or the whole input when a separator is missing.
    """

    def __init__(self, token: str):
        super().__init__("Invalid element", {"token": repr(token)})
        self.token = token


class PolicyError(PbacError):
    """Raised when policy configuration cannot be loaded"""
    pass
