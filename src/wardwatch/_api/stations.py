"""Station endpoints.

Endpoints:
  - /map/bounds/ (every station inside a lat/lng box)
  - /search/ (free-text station lookup)
  - /feed/@<uid>/ (per-station detail: pollutants, forecast)
"""

from __future__ import annotations

import logging

from wardwatch._api._common import get_ok_data
from wardwatch._transport import Transport
from wardwatch.ingestion.waqi import apply_feed, parse_bounds_entry, parse_search_entry, parse_station_list
from wardwatch.models.focus import Bounds
from wardwatch.models.station import Station

_logger = logging.getLogger(__name__)


def _format_bounds(bounds: Bounds) -> str:
    return f"{bounds.south:.4f},{bounds.west:.4f},{bounds.north:.4f},{bounds.east:.4f}"


async def fetch_bounds(transport: Transport, bounds: Bounds) -> list[Station]:
    """Fetch every station with a current reading inside *bounds*."""
    data = await get_ok_data(
        endpoint="/map/bounds/",
        transport=transport,
        params={"latlng": _format_bounds(bounds), "networks": "all"},
    )
    stations = parse_station_list(data, parse_bounds_entry)
    _logger.debug("Bounds %s returned %d stations", _format_bounds(bounds), len(stations))
    return stations


async def search(transport: Transport, keyword: str) -> list[Station]:
    """Free-text lookup by city or station name."""
    data = await get_ok_data(
        endpoint="/search/",
        transport=transport,
        params={"keyword": keyword},
    )
    return parse_station_list(data, parse_search_entry)


async def fetch_feed(transport: Transport, station: Station) -> Station:
    """Return *station* enriched with its per-station feed."""
    data = await get_ok_data(endpoint=f"/feed/{station.id}/", transport=transport)
    return apply_feed(station, data)
