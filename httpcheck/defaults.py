# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for request method, timeout, status codes
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Baseline values every check starts from before its options are applied.
The timeout and method can be overridden via environment variables.

Environment Variables:
    HTTPCHECK_TIMEOUT_SECONDS: Timeout of a check-owned client (default: 10)
    HTTPCHECK_METHOD: Default request method (default: GET)
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class CheckDefaults:
    """Defaults applied before any option."""
    timeout_seconds: float = 10.0
    method: str = "GET"
    allowed_status_codes: Tuple[int, ...] = (200,)

    @classmethod
    def from_env(cls) -> "CheckDefaults":
        """Create from environment variables."""
        return cls(
            timeout_seconds=float(os.getenv("HTTPCHECK_TIMEOUT_SECONDS", 10.0)),
            method=os.getenv("HTTPCHECK_METHOD", "GET").upper(),
        )


_defaults: Optional[CheckDefaults] = None


def get_defaults() -> CheckDefaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = CheckDefaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckDefaults",
    "get_defaults",
    "reset_defaults",
]
