# ============================================================================
# HTTP CHECK EXCEPTIONS
# ============================================================================
# STATUS: Core - Error taxonomy for build and execution failures
# PURPOSE: Descriptive, stable error messages rendered by health reports
# CREATED: 18 OCT 2026
# ============================================================================
"""
HTTP Check Exceptions

Build-time errors (CheckConfigError and subclasses) are raised from
new_check(). Everything else is returned inside a CheckResult; the
execution path never raises these.

Message text is part of the contract: aggregation layers render
str(error) verbatim per named check.
"""

from typing import Optional


class HTTPCheckError(Exception):
    """Base exception for HTTP check errors."""
    pass


# ============================================================================
# BUILD-TIME ERRORS
# ============================================================================

class CheckConfigError(HTTPCheckError):
    """Raised when a check cannot be constructed from its configuration."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class InvalidPatternError(CheckConfigError):
    """Raised when a content-match expression does not compile."""

    def __init__(self, message: str, pattern: str, cause: Optional[BaseException] = None):
        self.pattern = pattern
        super().__init__(message, cause=cause)


# ============================================================================
# EXECUTION ERRORS (returned, not raised)
# ============================================================================

class ResponseBodyError(HTTPCheckError):
    """The response body could not be read."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"reading response body: {cause}")


class UnexpectedStatusCodeError(HTTPCheckError):
    """The response status code is not in the allowed set."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Unexpected http status code: {status_code}")


class ContentMismatchError(HTTPCheckError):
    """The response body did not match the configured expression."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"the response body did not match the supplied regex: {pattern}")


class CheckCancelledError(HTTPCheckError):
    """The execution context was cancelled."""

    def __init__(self):
        super().__init__("context canceled")


class DeadlineExceededError(HTTPCheckError):
    """The execution context deadline passed."""

    def __init__(self):
        super().__init__("context deadline exceeded")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HTTPCheckError",
    "CheckConfigError",
    "InvalidPatternError",
    "ResponseBodyError",
    "UnexpectedStatusCodeError",
    "ContentMismatchError",
    "CheckCancelledError",
    "DeadlineExceededError",
]
