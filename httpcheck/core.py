# ============================================================================
# HTTP CHECK CORE TYPES
# ============================================================================
# STATUS: Core - Result, context and checker interface
# PURPOSE: Types shared by every check kind and its callers
# CREATED: 18 OCT 2026
# ============================================================================
"""
HTTP Check Core Types

Defines the capability interface and result types for health checks.

- HealthChecker: anything with an async check(ctx) -> CheckResult
- CheckResult: pass/fail outcome carrying an optional error
- CheckContext: cancellation signal plus optional deadline for one call

Status Hierarchy (worst wins):
- healthy: check passed
- unhealthy: check returned an error
"""

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from httpcheck.exceptions import CheckCancelledError, DeadlineExceededError


class HealthStatus(str, Enum):
    """Health check status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"

    def __lt__(self, other: "HealthStatus") -> bool:
        """Enable comparison for 'worst wins' aggregation."""
        order = {
            HealthStatus.HEALTHY: 0,
            HealthStatus.UNHEALTHY: 1,
        }
        return order[self] < order[other]

    @classmethod
    def aggregate(cls, statuses: List["HealthStatus"]) -> "HealthStatus":
        """Aggregate multiple statuses (worst wins)."""
        if not statuses:
            return cls.HEALTHY
        return max(statuses)


@dataclass
class CheckResult:
    """Result from a single check invocation."""
    error: Optional[BaseException] = None
    status_code: Optional[int] = None
    duration_ms: float = 0.0
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def success(cls, status_code: Optional[int] = None) -> "CheckResult":
        """Create passing result."""
        return cls(status_code=status_code)

    @classmethod
    def failure(
        cls,
        error: BaseException,
        status_code: Optional[int] = None,
    ) -> "CheckResult":
        """Create failing result."""
        return cls(error=error, status_code=status_code)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status(self) -> HealthStatus:
        return HealthStatus.HEALTHY if self.ok else HealthStatus.UNHEALTHY

    @property
    def message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result: Dict[str, Any] = {
            "status": self.status.value,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.status_code is not None:
            result["status_code"] = self.status_code
        if self.error is not None:
            result["message"] = self.message
            result["error_type"] = type(self.error).__name__
        return result


class CheckContext:
    """
    Cancellation and deadline for a single check invocation.

    A bare CheckContext() never expires. cancel() must be called from
    the thread running the event loop.

    Example:
        ctx = CheckContext.with_timeout(2.0)
        result = await check.check(ctx)
    """

    def __init__(self, deadline: Optional[float] = None):
        # Absolute time.monotonic() value, None for no deadline
        self.deadline = deadline
        self._cancelled = asyncio.Event()

    @classmethod
    def with_timeout(cls, seconds: float) -> "CheckContext":
        """Create a context that expires `seconds` from now."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Cancel the context, waking anything blocked in wait()."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        """Seconds until the deadline (never negative), None if unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def err(self) -> Optional[Exception]:
        """Why the context is done, or None while it is still live."""
        if self.cancelled:
            return CheckCancelledError()
        if self.expired:
            return DeadlineExceededError()
        return None

    async def wait(self) -> None:
        """Block until the context is cancelled."""
        await self._cancelled.wait()

    def __repr__(self) -> str:
        return (
            f"CheckContext(cancelled={self.cancelled}, "
            f"remaining={self.remaining()})"
        )


class HealthChecker(ABC):
    """
    Capability interface consumed by health aggregation layers.

    Implementations must return failures as data and never raise from
    check(), so the caller can collect every result into one report.

    Example:
        class AlwaysHealthy(HealthChecker):
            async def check(self, ctx=None) -> CheckResult:
                return CheckResult.success()
    """

    @abstractmethod
    async def check(self, ctx: Optional[CheckContext] = None) -> CheckResult:
        """
        Execute the check once.

        Args:
            ctx: Cancellation/deadline for this call (none if omitted)

        Returns:
            CheckResult with error set on failure
        """
        pass


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthStatus",
    "CheckResult",
    "CheckContext",
    "HealthChecker",
]
