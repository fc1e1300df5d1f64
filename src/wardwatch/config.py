"""Client and controller configuration for wardwatch."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from wardwatch._constants import BASE_URL, DEFAULT_GLOBAL_BOUNDS
from wardwatch.exceptions import WardWatchConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_bounds(value: str) -> tuple[float, float, float, float]:
    """Parse ``"south,west,north,east"`` into a bounds tuple."""
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 4:
        raise WardWatchConfigError(f"bounds must have 4 comma-separated values, got {value!r}")
    try:
        south, west, north, east = (float(part) for part in parts)
    except ValueError as exc:
        raise WardWatchConfigError(f"bounds must be numeric, got {value!r}") from exc
    if south > north:
        raise WardWatchConfigError(f"bounds south ({south}) is above north ({north})")
    return south, west, north, east


def _parse_number(env_key: str, value: str, cast: type[float] | type[int]) -> float | int:
    try:
        return cast(value)
    except ValueError as exc:
        raise WardWatchConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class WardWatchConfig:
    """Client and dashboard configuration.

    Parameters
    ----------
    waqi_token : str
        World Air Quality Index API token.
    base_url : str
        API base URL.
    global_bounds : tuple of float
        ``(south, west, north, east)`` box used for the global fetch.
    local_radius_deg : float
        Half-size, in degrees, of the box fetched around a coordinate.
    request_timeout : float
        Total HTTP request timeout in seconds.
    geolocation_timeout : float
        Seconds to wait for a position fix before giving up.
    search_min_query_length : int
        Queries shorter than this (after stripping) are not sent.
    detail_limit : int
        How many of the worst stations in a location-scoped fetch get their
        pollutant breakdown and trend from the per-station feed.
    api_trace_enabled : bool
        Log redacted request params and response bodies at DEBUG.
    """

    waqi_token: str
    base_url: str = BASE_URL
    global_bounds: tuple[float, float, float, float] = DEFAULT_GLOBAL_BOUNDS
    local_radius_deg: float = 0.25
    request_timeout: float = 15.0
    geolocation_timeout: float = 10.0
    search_min_query_length: int = 3
    detail_limit: int = 12
    api_trace_enabled: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> WardWatchConfig:
        """Create configuration from environment variables.

        Reads ``WARDWATCH_WAQI_TOKEN`` (falling back to ``WAQI_TOKEN``) and
        the optional ``WARDWATCH_*`` variables. Explicit keyword arguments
        override environment values.

        Raises
        ------
        WardWatchConfigError
            If no token is available or a value cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        token = env.get("WARDWATCH_WAQI_TOKEN") or env.get("WAQI_TOKEN")
        if token is not None:
            config_kwargs["waqi_token"] = token.strip()

        base_url = env.get("WARDWATCH_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url.rstrip("/")

        bounds_env = env.get("WARDWATCH_GLOBAL_BOUNDS")
        if bounds_env is not None and "global_bounds" not in overrides:
            config_kwargs["global_bounds"] = _parse_bounds(bounds_env)

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type[float] | type[int]]] = {
            "WARDWATCH_LOCAL_RADIUS_DEG": ("local_radius_deg", float),
            "WARDWATCH_REQUEST_TIMEOUT": ("request_timeout", float),
            "WARDWATCH_GEOLOCATION_TIMEOUT": ("geolocation_timeout", float),
            "WARDWATCH_SEARCH_MIN_QUERY_LENGTH": ("search_min_query_length", int),
            "WARDWATCH_DETAIL_LIMIT": ("detail_limit", int),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _parse_number(env_key, val, cast)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("WARDWATCH_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        if not config_kwargs.get("waqi_token"):
            raise WardWatchConfigError("WAQI token missing (set WARDWATCH_WAQI_TOKEN or WAQI_TOKEN)")

        return cls(**config_kwargs)
