# ============================================================================
# HTTP CHECK OPTIONS
# ============================================================================
# STATUS: Core - Option functions and mutable build configuration
# PURPOSE: Assemble a check configuration from ordered option calls
# CREATED: 18 OCT 2026
# ============================================================================
"""
HTTP Check Options

Options are plain callables that mutate a CheckOptions in place. They are
applied strictly in the order given, so later options override earlier
ones for scalar fields and status-code options accumulate:

    new_check(
        "http://svc/healthz",
        without_allowed_status_code(200),
        with_allowed_status_code(204),
    )

An option reports failure by raising; apply_options() wraps the failure
as a CheckConfigError and aborts construction.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Set, Union

import httpx

from httpcheck.defaults import get_defaults
from httpcheck.exceptions import CheckConfigError, InvalidPatternError
from httpcheck.logging import get_logger

logger = get_logger(__name__)

# RFC 7230 token
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


@dataclass
class CheckOptions:
    """
    Mutable configuration consumed once to build a check.

    Attributes:
        client: Shared HTTP client (None = check creates and owns one)
        method: Request method
        match_content: Compiled bytes pattern the body must match
        body: Request body (None = empty)
        username: Basic auth user (applied only with a password)
        password: Basic auth password (applied only with a username)
        allowed_status_codes: Status codes treated as success
        timeout_seconds: Timeout of a check-owned client (ignored
            when a client is supplied)
    """
    client: Optional[httpx.AsyncClient] = None
    method: str = "GET"
    match_content: Optional[re.Pattern[bytes]] = None
    body: Optional[bytes] = None
    username: str = ""
    password: str = ""
    allowed_status_codes: Set[int] = field(default_factory=lambda: {200})
    timeout_seconds: float = 10.0

    @classmethod
    def defaults(cls) -> "CheckOptions":
        """Create from the global defaults."""
        defaults = get_defaults()
        return cls(
            method=defaults.method,
            allowed_status_codes=set(defaults.allowed_status_codes),
            timeout_seconds=defaults.timeout_seconds,
        )


# An option mutates the configuration or raises
Option = Callable[[CheckOptions], None]


def normalize_method(method: str) -> str:
    """Strip and upper-case `method`; raise ValueError unless it is a token."""
    normalized = method.strip().upper()
    if not _METHOD_TOKEN.fullmatch(normalized):
        raise ValueError(f"invalid HTTP method {method!r}")
    return normalized


# ============================================================================
# OPTION FACTORIES
# ============================================================================

def with_http_client(client: httpx.AsyncClient) -> Option:
    """Use `client` for requests. The check shares it and never closes it."""
    def apply(opts: CheckOptions) -> None:
        opts.client = client
    return apply


def with_timeout(seconds: float) -> Option:
    """Set the timeout of the client the check creates for itself."""
    def apply(opts: CheckOptions) -> None:
        if seconds <= 0:
            raise ValueError(f"timeout must be positive, got {seconds}")
        opts.timeout_seconds = seconds
    return apply


def with_method(method: str) -> Option:
    """Set the HTTP method used for the checks."""
    def apply(opts: CheckOptions) -> None:
        opts.method = normalize_method(method)
    return apply


def with_body(body: Union[bytes, str]) -> Option:
    """Set the body sent along with each request."""
    def apply(opts: CheckOptions) -> None:
        opts.body = body.encode("utf-8") if isinstance(body, str) else bytes(body)
    return apply


def with_basic_auth(username: str, password: str) -> Option:
    """Set basic auth credentials used for each request."""
    def apply(opts: CheckOptions) -> None:
        opts.username = username
        opts.password = password
    return apply


def with_allowed_status_code(status_code: int) -> Option:
    """Add a status code that won't trigger an error."""
    def apply(opts: CheckOptions) -> None:
        opts.allowed_status_codes.add(status_code)
    return apply


def without_allowed_status_code(status_code: int) -> Option:
    """
    Remove a status code from the allowed set.

    Useful to remove the default 200. No-op if the code is absent.
    """
    def apply(opts: CheckOptions) -> None:
        opts.allowed_status_codes.discard(status_code)
    return apply


def with_regexp(pattern: str) -> Option:
    """
    Require the response body to match `pattern`.

    The expression is searched for anywhere in the body; anchor it with
    ^ or $ as needed.

    Raises:
        InvalidPatternError: When applied, if the pattern does not compile
    """
    def apply(opts: CheckOptions) -> None:
        try:
            opts.match_content = re.compile(pattern.encode("utf-8"))
        except re.error as e:
            raise InvalidPatternError(
                f"invalid regular expression {pattern!r}: {e}",
                pattern=pattern,
                cause=e,
            ) from e
    return apply


# ============================================================================
# APPLICATION
# ============================================================================

def apply_options(
    options: Iterable[Option],
    base: Optional[CheckOptions] = None,
) -> CheckOptions:
    """
    Apply options in order.

    Args:
        options: Option callables
        base: Starting configuration (global defaults if None)

    Returns:
        The mutated configuration

    Raises:
        CheckConfigError: If any option fails
    """
    opts = base if base is not None else CheckOptions.defaults()

    for option in options:
        try:
            option(opts)
        except InvalidPatternError as e:
            raise InvalidPatternError(
                f"HTTPCheck evaluating options: {e}",
                pattern=e.pattern,
                cause=e.cause,
            ) from e
        except Exception as e:
            raise CheckConfigError(
                f"HTTPCheck evaluating options: {e}",
                cause=e,
            ) from e

    logger.debug(
        f"Options applied: method={opts.method} "
        f"allowed_status_codes={sorted(opts.allowed_status_codes)} "
        f"match_content={opts.match_content.pattern if opts.match_content else None}"
    )
    return opts


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckOptions",
    "Option",
    "normalize_method",
    "with_http_client",
    "with_timeout",
    "with_method",
    "with_body",
    "with_basic_auth",
    "with_allowed_status_code",
    "without_allowed_status_code",
    "with_regexp",
    "apply_options",
]
