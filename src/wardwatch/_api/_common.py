"""Shared helpers for WAQI endpoint modules.

Every WAQI reply is an envelope ``{"status": "ok" | "error", "data": ...}``.
This module checks the envelope and maps error statuses to exceptions.

It is internal to wardwatch and may change at any time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wardwatch._constants import INVALID_TOKEN_MESSAGES
from wardwatch._transport import Transport
from wardwatch.exceptions import WardWatchApiError, WardWatchAuthenticationError


def _raise_for_status(*, endpoint: str, status: str, message: str) -> None:
    if message in INVALID_TOKEN_MESSAGES:
        raise WardWatchAuthenticationError(
            f"{endpoint} rejected the API token: {message}",
            status=status,
            endpoint=endpoint,
        )
    raise WardWatchApiError(
        f"{endpoint} failed: status={status} message={message}",
        status=status,
        endpoint=endpoint,
    )


async def get_ok_data(
    *,
    endpoint: str,
    transport: Transport,
    params: Mapping[str, str] | None = None,
) -> Any:
    """GET *endpoint* and return the ``data`` member of an ``ok`` envelope.

    Intentionally returns `Any`: WAQI endpoints return objects or lists.
    """
    response = await transport.get_json(endpoint, params)
    status = str(response.get("status", ""))
    if status != "ok":
        _raise_for_status(
            endpoint=endpoint,
            status=status,
            message=str(response.get("data") or response.get("message") or ""),
        )
    return response.get("data")
