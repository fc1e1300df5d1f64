"""High-level async client for the WAQI station API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from wardwatch._api import stations as _stations_api
from wardwatch._transport import WaqiTransport
from wardwatch.config import WardWatchConfig
from wardwatch.exceptions import WardWatchError
from wardwatch.geo import box_around
from wardwatch.models.focus import Bounds
from wardwatch.models.station import Coordinate, Station

_logger = logging.getLogger(__name__)


class WaqiClient:
    """Async client for WAQI station data.

    Usage::

        async with WaqiClient(config) as client:
            stations = await client.fetch_stations()
            nearby = await client.fetch_stations(Coordinate(lat=28.6, lng=77.2))
    """

    def __init__(
        self,
        config: WardWatchConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: WaqiTransport | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> WaqiClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = WaqiTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> WaqiTransport:
        if self._transport is None:
            raise WardWatchError("Client not initialized. Use 'async with WaqiClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def fetch_stations(self, coordinate: Coordinate | None = None) -> list[Station]:
        """Fetch the global dataset, or the stations around *coordinate*.

        Location-scoped fetches also pull the per-station feed for the
        ``detail_limit`` worst stations so the dashboard has pollutant
        breakdowns and trends for the area the user is looking at.
        """
        transport = self._require_transport()
        if coordinate is None:
            south, west, north, east = self._config.global_bounds
            bounds = Bounds(south=south, west=west, north=north, east=east)
            return await _stations_api.fetch_bounds(transport, bounds)

        bounds = box_around(coordinate, self._config.local_radius_deg)
        stations = await _stations_api.fetch_bounds(transport, bounds)
        return await self._enrich(stations)

    async def search_stations(self, query: str) -> list[Station]:
        """Look up stations by city or station name."""
        transport = self._require_transport()
        return await _stations_api.search(transport, query.strip())

    async def fetch_station_detail(self, station: Station) -> Station:
        """Return *station* with pollutants, trend and source hints filled in."""
        transport = self._require_transport()
        return await _stations_api.fetch_feed(transport, station)

    async def _enrich(self, stations: list[Station]) -> list[Station]:
        limit = self._config.detail_limit
        if limit <= 0 or not stations:
            return stations

        worst = sorted(range(len(stations)), key=lambda i: stations[i].aqi, reverse=True)[:limit]
        results = await asyncio.gather(
            *(self.fetch_station_detail(stations[i]) for i in worst),
            return_exceptions=True,
        )

        enriched = list(stations)
        for index, result in zip(worst, results, strict=True):
            if isinstance(result, Station):
                enriched[index] = result
            elif isinstance(result, WardWatchError):
                _logger.debug("Detail fetch failed for %s: %s", stations[index].id, result)
            elif isinstance(result, BaseException):
                raise result
        return enriched
