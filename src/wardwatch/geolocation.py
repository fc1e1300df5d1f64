"""Geolocation interface.

The host platform supplies the position; wardwatch only bounds the wait.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

from wardwatch.exceptions import GeolocationTimeoutError
from wardwatch.models.station import Coordinate


class Geolocator(Protocol):
    """Asynchronous position source.

    Implementations raise :class:`wardwatch.exceptions.GeolocationError`
    (or a subclass) when the position is denied or unavailable.
    """

    async def get_current_position(self) -> Coordinate:
        ...


class FixedGeolocator:
    """Geolocator that always reports the same position (CLI, kiosks)."""

    def __init__(self, position: Coordinate) -> None:
        self._position = position

    async def get_current_position(self) -> Coordinate:
        return self._position


async def acquire_position(geolocator: Geolocator, timeout: float) -> Coordinate:
    """Ask *geolocator* for a fix, giving up after *timeout* seconds.

    A timeout is terminal: it is raised as
    :class:`GeolocationTimeoutError` and not retried.
    """
    try:
        return await asyncio.wait_for(geolocator.get_current_position(), timeout)
    except TimeoutError as exc:
        raise GeolocationTimeoutError(f"No position fix within {timeout:g}s") from exc
