"""Custom exception hierarchy for wardwatch."""

from __future__ import annotations


class WardWatchError(Exception):
    """Base exception for all wardwatch errors."""


class WardWatchConfigError(WardWatchError):
    """Invalid or missing configuration."""


class WardWatchTransportError(WardWatchError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class WardWatchApiError(WardWatchError):
    """API replied with a non-``ok`` status (application-level error)."""

    def __init__(
        self,
        message: str,
        *,
        status: str = "",
        endpoint: str = "",
    ) -> None:
        self.status = status
        self.endpoint = endpoint
        super().__init__(message)


class WardWatchAuthenticationError(WardWatchApiError):
    """The API token was rejected."""


class GeolocationError(WardWatchError):
    """The host platform could not provide a position.

    Geolocation failures are surfaced to the user as-is and never retried.
    """


class GeolocationDeniedError(GeolocationError):
    """The user (or platform policy) denied the position request."""


class GeolocationTimeoutError(GeolocationError):
    """No position was acquired within the configured wait."""


class AnalysisError(WardWatchError):
    """The analysis service failed or returned an unusable payload."""
