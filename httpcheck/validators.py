# ============================================================================
# RESPONSE VALIDATORS
# ============================================================================
# STATUS: Core - Rules applied to a received response
# PURPOSE: Status-code membership and body content matching
# CREATED: 18 OCT 2026
# ============================================================================
"""
Response Validators

Each validator inspects a status code and the fully-read body and
returns an error describing the first violation, or None.

Validators run in order and the first error wins, so the status-code
rule always takes precedence over the content rule.
"""

import re
from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable, Optional

from httpcheck.exceptions import (
    ContentMismatchError,
    HTTPCheckError,
    UnexpectedStatusCodeError,
)


class ResponseValidator(ABC):
    """Rule applied to a response."""

    @abstractmethod
    def validate(self, status_code: int, body: bytes) -> Optional[HTTPCheckError]:
        """Return an error if the response violates the rule."""
        pass


class StatusCodeValidator(ResponseValidator):
    """Fails unless the status code is in the allowed set."""

    def __init__(self, allowed: Iterable[int]):
        self.allowed: FrozenSet[int] = frozenset(allowed)

    def validate(self, status_code: int, body: bytes) -> Optional[HTTPCheckError]:
        if status_code not in self.allowed:
            return UnexpectedStatusCodeError(status_code)
        return None


class ContentValidator(ResponseValidator):
    """Fails unless the pattern matches somewhere in the body."""

    def __init__(self, pattern: re.Pattern[bytes]):
        self.pattern = pattern

    @property
    def source(self) -> str:
        return self.pattern.pattern.decode("utf-8", errors="replace")

    def validate(self, status_code: int, body: bytes) -> Optional[HTTPCheckError]:
        if self.pattern.search(body) is None:
            return ContentMismatchError(self.source)
        return None


def run_validators(
    validators: Iterable[ResponseValidator],
    status_code: int,
    body: bytes,
) -> Optional[HTTPCheckError]:
    """Run validators in order; return the first error."""
    for validator in validators:
        error = validator.validate(status_code, body)
        if error is not None:
            return error
    return None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ResponseValidator",
    "StatusCodeValidator",
    "ContentValidator",
    "run_validators",
]
