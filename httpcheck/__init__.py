# ============================================================================
# HTTPCHECK PACKAGE
# ============================================================================
# STATUS: Core - Public API
# PURPOSE: Configurable HTTP endpoint health check
# CREATED: 18 OCT 2026
# ============================================================================
"""
httpcheck

A single configurable HTTP health check for health aggregation layers:
- new_check(): build a check from an endpoint and ordered options
- HTTPCheck.check(): one request, validated against status/content rules
- HTTPCheckConfig: declarative, validated alternative to option calls

Architecture:
- HealthChecker: narrow async check(ctx) -> CheckResult interface
- CheckResult: pass/fail value carrying an optional error
- CheckContext: cancellation and deadline for one invocation
- Validators: status-code membership, then body content match

Usage:
    from httpcheck import new_check, with_allowed_status_code, CheckContext

    check = new_check("http://svc/healthz", with_allowed_status_code(204))
    result = await check.check(CheckContext.with_timeout(5.0))
"""

from httpcheck.__version__ import __version__
from httpcheck.core import (
    HealthStatus,
    CheckResult,
    CheckContext,
    HealthChecker,
)
from httpcheck.exceptions import (
    HTTPCheckError,
    CheckConfigError,
    InvalidPatternError,
    ResponseBodyError,
    UnexpectedStatusCodeError,
    ContentMismatchError,
    CheckCancelledError,
    DeadlineExceededError,
)
from httpcheck.options import (
    CheckOptions,
    Option,
    apply_options,
    with_http_client,
    with_timeout,
    with_method,
    with_body,
    with_basic_auth,
    with_allowed_status_code,
    without_allowed_status_code,
    with_regexp,
)
from httpcheck.validators import (
    ResponseValidator,
    StatusCodeValidator,
    ContentValidator,
    run_validators,
)
from httpcheck.check import HTTPCheck, new_check
from httpcheck.config import HTTPCheckConfig, load_check_configs, build_checks
from httpcheck.defaults import CheckDefaults, get_defaults, reset_defaults
from httpcheck.logging import configure_logging, get_logger, log_context

__all__ = [
    "__version__",
    # Core types
    "HealthStatus",
    "CheckResult",
    "CheckContext",
    "HealthChecker",
    # Errors
    "HTTPCheckError",
    "CheckConfigError",
    "InvalidPatternError",
    "ResponseBodyError",
    "UnexpectedStatusCodeError",
    "ContentMismatchError",
    "CheckCancelledError",
    "DeadlineExceededError",
    # Options
    "CheckOptions",
    "Option",
    "apply_options",
    "with_http_client",
    "with_timeout",
    "with_method",
    "with_body",
    "with_basic_auth",
    "with_allowed_status_code",
    "without_allowed_status_code",
    "with_regexp",
    # Validators
    "ResponseValidator",
    "StatusCodeValidator",
    "ContentValidator",
    "run_validators",
    # Check
    "HTTPCheck",
    "new_check",
    # Configuration
    "HTTPCheckConfig",
    "load_check_configs",
    "build_checks",
    "CheckDefaults",
    "get_defaults",
    "reset_defaults",
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
]
