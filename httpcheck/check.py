# ============================================================================
# HTTP CHECK
# ============================================================================
# STATUS: Core - Configurable HTTP endpoint health check
# PURPOSE: Issue one request per call and validate the response
# CREATED: 18 OCT 2026
# ============================================================================
"""
HTTP Check

Builds a check from an endpoint and ordered options, then performs one
HTTP round trip per check() call:

1. Send the configured method/body (basic auth if both parts are set)
2. Read the whole response body
3. Validate the status code against the allowed set
4. Validate the body against the content pattern, if any

Every failure comes back inside the CheckResult. The response stream is
closed on every exit path.

Usage:
    check = new_check(
        "http://svc:8080/healthz",
        with_allowed_status_code(204),
        with_regexp("^ok"),
    )
    result = await check.check(CheckContext.with_timeout(5.0))
    if not result.ok:
        print(result.message)
"""

import asyncio
import re
import threading
import time
from typing import Any, Dict, FrozenSet, List, Optional

import httpx

from httpcheck.core import CheckContext, CheckResult, HealthChecker
from httpcheck.exceptions import (
    CheckConfigError,
    DeadlineExceededError,
    ResponseBodyError,
)
from httpcheck.logging import get_logger, log_context
from httpcheck.options import CheckOptions, Option, apply_options
from httpcheck.validators import (
    ContentValidator,
    ResponseValidator,
    StatusCodeValidator,
    run_validators,
)

logger = get_logger(__name__)


class HTTPCheck(HealthChecker):
    """
    HTTP endpoint health check.

    Safe to call check() concurrently provided the client is. The
    allowed status codes can be changed between or during calls with
    allow_status_code() / disallow_status_code(); each call validates
    against the set it started with.
    """

    def __init__(
        self,
        url: httpx.URL,
        options: CheckOptions,
        owns_client: bool = False,
    ):
        """
        Initialize check.

        Args:
            url: Parsed target endpoint
            options: Applied configuration (client must be set)
            owns_client: Close the client in aclose()
        """
        if options.client is None:
            raise CheckConfigError("HTTPCheck requires an HTTP client")

        self._url = url
        self._client = options.client
        self._owns_client = owns_client
        self._method = options.method
        self._body = options.body
        self._match_content = options.match_content
        self._username = options.username
        self._password = options.password

        self._status_lock = threading.Lock()
        self._allowed_status_codes: FrozenSet[int] = frozenset(
            options.allowed_status_codes
        )

    # ------------------------------------------------------------------
    # Configuration accessors
    # ------------------------------------------------------------------

    @property
    def url(self) -> httpx.URL:
        return self._url

    @property
    def method(self) -> str:
        return self._method

    @property
    def body(self) -> Optional[bytes]:
        return self._body

    @property
    def match_content(self) -> Optional[re.Pattern[bytes]]:
        return self._match_content

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    @property
    def owns_client(self) -> bool:
        return self._owns_client

    @property
    def allowed_status_codes(self) -> FrozenSet[int]:
        """Snapshot of the codes currently treated as success."""
        return self._allowed_status_codes

    def allow_status_code(self, status_code: int) -> None:
        """Treat `status_code` as success from the next check on."""
        with self._status_lock:
            self._allowed_status_codes = self._allowed_status_codes | {status_code}

    def disallow_status_code(self, status_code: int) -> None:
        """Stop treating `status_code` as success. No-op if absent."""
        with self._status_lock:
            self._allowed_status_codes = self._allowed_status_codes - {status_code}

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def check(self, ctx: Optional[CheckContext] = None) -> CheckResult:
        """
        Perform the check.

        Args:
            ctx: Cancellation/deadline for this call (none if omitted)

        Returns:
            CheckResult; error is None on success
        """
        ctx = ctx or CheckContext()
        start_time = time.monotonic()

        with log_context(url=str(self._url), method=self._method):
            error = ctx.err()
            if error is not None:
                result = CheckResult.failure(error)
            else:
                result = await self._run_in_context(ctx)

            result.duration_ms = (time.monotonic() - start_time) * 1000

            if result.ok:
                logger.debug(
                    f"HTTP check passed: status={result.status_code} "
                    f"({result.duration_ms:.1f}ms)"
                )
            else:
                logger.warning(
                    f"HTTP check failed: {result.error}",
                    extra={
                        "status_code": result.status_code,
                        "error_type": type(result.error).__name__,
                        "duration_ms": round(result.duration_ms, 2),
                    },
                )
        return result

    async def _run_in_context(self, ctx: CheckContext) -> CheckResult:
        """Race the round trip against context cancellation and deadline."""
        round_trip = asyncio.ensure_future(self._round_trip())
        cancelled = asyncio.ensure_future(ctx.wait())

        try:
            done, _ = await asyncio.wait(
                {round_trip, cancelled},
                timeout=ctx.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            round_trip.cancel()
            cancelled.cancel()
            raise

        cancelled.cancel()
        if round_trip in done:
            await asyncio.wait({cancelled})
            return round_trip.result()

        # Context won: unwind the request so the response is released
        round_trip.cancel()
        await asyncio.wait({round_trip, cancelled})
        return CheckResult.failure(ctx.err() or DeadlineExceededError())

    async def _round_trip(self) -> CheckResult:
        """Send the request, read the body and validate the response."""
        validators = self._validators()
        kwargs: Dict[str, Any] = {"content": self._body}
        if self._username and self._password:
            kwargs["auth"] = httpx.BasicAuth(self._username, self._password)

        try:
            async with self._client.stream(self._method, self._url, **kwargs) as response:
                status_code = response.status_code
                try:
                    body = await response.aread()
                except (httpx.HTTPError, httpx.StreamError, OSError) as e:
                    return CheckResult.failure(ResponseBodyError(e), status_code=status_code)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return CheckResult.failure(e)
        except Exception as e:
            # Request build or custom transport failure; CancelledError is
            # a BaseException and still propagates
            return CheckResult.failure(e)

        error = run_validators(validators, status_code, body)
        if error is not None:
            return CheckResult.failure(error, status_code=status_code)
        return CheckResult.success(status_code=status_code)

    def _validators(self) -> List[ResponseValidator]:
        """Validators in evaluation order, bound to the current status set."""
        validators: List[ResponseValidator] = [
            StatusCodeValidator(self._allowed_status_codes)
        ]
        if self._match_content is not None:
            validators.append(ContentValidator(self._match_content))
        return validators

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the HTTP client if this check created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HTTPCheck":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"HTTPCheck({self._method} {self._url})"


def new_check(endpoint: str, *options: Option) -> HTTPCheck:
    """
    Create an HTTPCheck.

    Args:
        endpoint: Target URL
        *options: Option callables, applied in order

    Returns:
        Configured HTTPCheck. When no client option was given it owns a
        new httpx.AsyncClient with the default timeout.

    Raises:
        CheckConfigError: Endpoint does not parse or an option fails
    """
    try:
        url = httpx.URL(endpoint)
    except (httpx.InvalidURL, TypeError) as e:
        raise CheckConfigError(f"HTTPCheck parsing endpoint: {e}", cause=e) from e

    opts = apply_options(options)

    owns_client = opts.client is None
    if owns_client:
        opts.client = httpx.AsyncClient(timeout=opts.timeout_seconds)

    check = HTTPCheck(url, opts, owns_client=owns_client)
    logger.debug(f"Created {check!r} (owns_client={owns_client})")
    return check


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HTTPCheck",
    "new_check",
]
