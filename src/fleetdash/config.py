"""Client configuration for fleetdash."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from fleetdash._constants import DEFAULT_BASE_URL, DEFAULT_RANGE_HOURS
from fleetdash.exceptions import FleetDashConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise FleetDashConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class DashboardConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Fleet API base URL, including the ``/api`` prefix.
    default_range_hours : float
        Width of the telemetry range used the first time the drawer opens.
    request_timeout : float or None
        Total request timeout in seconds.  ``None`` keeps the aiohttp
        default.
    api_trace_enabled : bool
        Log truncated response bodies at DEBUG level.
    """

    base_url: str = DEFAULT_BASE_URL
    default_range_hours: float = DEFAULT_RANGE_HOURS
    request_timeout: float | None = None
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        base_url = self.base_url.strip().rstrip("/")
        if not base_url:
            raise FleetDashConfigError("base_url must be non-empty")
        object.__setattr__(self, "base_url", base_url)
        if self.default_range_hours <= 0:
            raise FleetDashConfigError("default_range_hours must be positive")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise FleetDashConfigError("request_timeout must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> DashboardConfig:
        """Create configuration from ``FLEETDASH_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("FLEETDASH_API_BASE_URL")
        if base_url:
            config_kwargs["base_url"] = base_url

        hours_env = env.get("FLEETDASH_DEFAULT_RANGE_HOURS")
        if hours_env is not None and "default_range_hours" not in overrides:
            config_kwargs["default_range_hours"] = _env_float("FLEETDASH_DEFAULT_RANGE_HOURS", hours_env)

        timeout_env = env.get("FLEETDASH_REQUEST_TIMEOUT")
        if timeout_env and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float("FLEETDASH_REQUEST_TIMEOUT", timeout_env)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("FLEETDASH_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
