# ============================================================================
# DECLARATIVE CHECK CONFIGURATION
# ============================================================================
# STATUS: Core - Validated check definitions
# PURPOSE: Build checks from named fields or YAML instead of option calls
# CREATED: 18 OCT 2026
# ============================================================================
"""
Declarative Check Configuration

HTTPCheckConfig holds every setting as an explicit, documented field and
validates them in one pass. Unknown keys and conflicting combinations
are rejected instead of being resolved by option order.

YAML format:

    checks:
      remote_service:
        url: http://svc:8080/healthz
        allowed_status_codes: [200, 204]
        match_regexp: "^ok"
      admin_api:
        url: https://admin.internal/status
        method: HEAD
        username: probe
        password: secret
        timeout_seconds: 2.5

Usage:
    configs = load_check_configs("checks.yaml")
    checks = {name: cfg.build() for name, cfg in configs.items()}
"""

import re
from pathlib import Path
from typing import Dict, List, Optional, Union

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from httpcheck.check import HTTPCheck, new_check
from httpcheck.defaults import get_defaults
from httpcheck.exceptions import CheckConfigError
from httpcheck.logging import get_logger
from httpcheck.options import (
    Option,
    normalize_method,
    with_allowed_status_code,
    with_basic_auth,
    with_body,
    with_http_client,
    with_method,
    with_regexp,
    with_timeout,
    without_allowed_status_code,
)

logger = get_logger(__name__)


class HTTPCheckConfig(BaseModel):
    """
    Complete definition of one HTTP check.

    Fields:
        url: Target endpoint (required)
        method: Request method (default GET)
        body: Request body sent with every call (default none)
        username / password: Basic auth, both or neither
        allowed_status_codes: Success codes (default [200], never empty)
        match_regexp: Pattern the body must match (default none)
        timeout_seconds: Timeout of the check-owned client (default from
            HTTPCHECK_TIMEOUT_SECONDS, 10s)
    """
    model_config = ConfigDict(extra="forbid")

    url: str
    method: str = "GET"
    body: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    allowed_status_codes: List[int] = Field(default_factory=lambda: [200], min_length=1)
    match_regexp: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)

    @field_validator("method")
    @classmethod
    def check_method(cls, v: str) -> str:
        return normalize_method(v)

    @field_validator("allowed_status_codes")
    @classmethod
    def check_status_codes(cls, v: List[int]) -> List[int]:
        invalid = [code for code in v if not 100 <= code <= 599]
        if invalid:
            raise ValueError(f"status codes out of range 100-599: {invalid}")
        return sorted(set(v))

    @field_validator("match_regexp")
    @classmethod
    def check_pattern(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                re.compile(v.encode("utf-8"))
            except re.error as e:
                raise ValueError(f"invalid regular expression {v!r}: {e}")
        return v

    @model_validator(mode="after")
    def check_credentials(self) -> "HTTPCheckConfig":
        if bool(self.username) != bool(self.password):
            raise ValueError("username and password must be given together")
        return self

    def to_options(self, client: Optional[httpx.AsyncClient] = None) -> List[Option]:
        """
        Render the fields as ordered options.

        The status codes replace the default set rather than extend it.
        """
        options: List[Option] = [with_method(self.method)]

        if client is not None:
            options.append(with_http_client(client))
        if self.timeout_seconds is not None:
            options.append(with_timeout(self.timeout_seconds))
        if self.body is not None:
            options.append(with_body(self.body))
        if self.username and self.password:
            options.append(with_basic_auth(self.username, self.password))

        for code in get_defaults().allowed_status_codes:
            if code not in self.allowed_status_codes:
                options.append(without_allowed_status_code(code))
        for code in self.allowed_status_codes:
            options.append(with_allowed_status_code(code))

        if self.match_regexp is not None:
            options.append(with_regexp(self.match_regexp))

        return options

    def build(self, client: Optional[httpx.AsyncClient] = None) -> HTTPCheck:
        """
        Create the check.

        Args:
            client: Shared client (check creates and owns one if None)

        Raises:
            CheckConfigError: If the URL does not parse
        """
        return new_check(self.url, *self.to_options(client))


def load_check_configs(path: Union[str, Path]) -> Dict[str, HTTPCheckConfig]:
    """
    Load named check definitions from a YAML file.

    Args:
        path: File with a top-level `checks` mapping

    Returns:
        Dict of check name to HTTPCheckConfig, in file order

    Raises:
        CheckConfigError: File unreadable, malformed, or a check invalid
    """
    path = Path(path)

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CheckConfigError(f"Cannot read check config {path}: {e}", cause=e) from e

    checks = data.get("checks") if isinstance(data, dict) else None
    if not isinstance(checks, dict):
        raise CheckConfigError(f"Invalid check config in {path}: expected a 'checks' mapping")

    configs: Dict[str, HTTPCheckConfig] = {}
    for name, entry in checks.items():
        try:
            configs[str(name)] = HTTPCheckConfig.model_validate(entry)
        except ValidationError as e:
            raise CheckConfigError(f"Invalid check '{name}' in {path}: {e}", cause=e) from e

    logger.info(f"Loaded {len(configs)} check definition(s) from {path}")
    return configs


def build_checks(
    configs: Dict[str, HTTPCheckConfig],
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, HTTPCheck]:
    """Build every configured check, keyed by name."""
    return {name: config.build(client) for name, config in configs.items()}


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HTTPCheckConfig",
    "load_check_configs",
    "build_checks",
]
