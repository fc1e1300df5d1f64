"""WAQI payload parsing.

Three reply shapes reach the library:

* ``/map/bounds/`` entries: ``{"lat", "lon", "uid", "aqi", "station": {"name"}}``
* ``/search/`` entries: ``{"uid", "aqi", "station": {"name", "geo": [lat, lng]}}``
* ``/feed/@uid/`` data: ``{"aqi", "iaqi", "dominentpol", "time",
  "forecast": {"daily": {"pm25": [...]}}}``

Entries without a usable AQI reading or position are skipped rather than
raising; a single bad row must not cost the whole batch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import ValidationError

from wardwatch._constants import TREND_LENGTH
from wardwatch.ingestion.normalize import non_negative_or_none, safe_float, safe_geo, safe_int, safe_str
from wardwatch.models.station import Coordinate, PollutantData, Station

_logger = logging.getLogger(__name__)

#: Heuristic (primary, secondary) source labels keyed by dominant pollutant.
_SOURCE_HINTS: dict[str, tuple[str, str]] = {
    "pm25": ("Combustion (vehicles, biomass burning)", "Secondary aerosols"),
    "pm10": ("Construction & road dust", "Industrial emissions"),
    "no2": ("Vehicular traffic", "Power generation"),
    "so2": ("Industrial emissions", "Coal combustion"),
    "co": ("Vehicular traffic", "Residential heating"),
    "o3": ("Photochemical smog", "Vehicular traffic"),
}

_POLLUTANT_KEYS = ("pm25", "pm10", "no2", "so2", "co", "o3")


def station_id(uid: Any) -> str | None:
    """WAQI feed id (``"@<uid>"``) for a numeric station uid."""
    text = safe_str(uid)
    if text is None:
        return None
    return text if text.startswith("@") else f"@{text}"


def source_hints(dominant_pollutant: Any) -> tuple[str | None, str | None]:
    key = (safe_str(dominant_pollutant) or "").lower()
    return _SOURCE_HINTS.get(key, (None, None))


def _build_station(raw: dict[str, Any], **fields: Any) -> Station | None:
    try:
        return Station.model_validate({**fields, "raw": raw})
    except ValidationError:
        _logger.debug("Skipping unparseable station %s", fields.get("id"), exc_info=True)
        return None


def parse_bounds_entry(item: Any) -> Station | None:
    """Parse one ``/map/bounds/`` entry."""
    if not isinstance(item, dict):
        return None
    sid = station_id(item.get("uid"))
    aqi = non_negative_or_none(item.get("aqi"))
    lat = safe_float(item.get("lat"))
    lng = safe_float(item.get("lon"))
    if sid is None or aqi is None or lat is None or lng is None:
        return None
    meta = item.get("station") if isinstance(item.get("station"), dict) else {}
    return _build_station(
        item,
        id=sid,
        name=safe_str(meta.get("name")) or sid,
        location=Coordinate(lat=lat, lng=lng),
        aqi=aqi,
    )


def parse_search_entry(item: Any) -> Station | None:
    """Parse one ``/search/`` entry."""
    if not isinstance(item, dict):
        return None
    meta = item.get("station") if isinstance(item.get("station"), dict) else {}
    sid = station_id(item.get("uid"))
    aqi = non_negative_or_none(item.get("aqi"))
    geo = safe_geo(meta.get("geo"))
    if sid is None or aqi is None or geo is None:
        return None
    return _build_station(
        item,
        id=sid,
        name=safe_str(meta.get("name")) or sid,
        location=Coordinate(lat=geo[0], lng=geo[1]),
        aqi=aqi,
    )


def _observation_day(data: dict[str, Any]) -> str | None:
    time_info = data.get("time")
    if not isinstance(time_info, dict):
        return None
    stamp = safe_str(time_info.get("s")) or safe_str(time_info.get("iso"))
    return stamp[:10] if stamp else None


def parse_trend(data: dict[str, Any], current_aqi: int) -> tuple[int, ...]:
    """Daily PM2.5 averages before the observation day, ending with *current_aqi*."""
    forecast = data.get("forecast")
    daily = forecast.get("daily") if isinstance(forecast, dict) else None
    series = daily.get("pm25") if isinstance(daily, dict) else None
    if not isinstance(series, list):
        return (current_aqi,)

    today = _observation_day(data)
    points: list[tuple[str, int]] = []
    for entry in series:
        if not isinstance(entry, dict):
            continue
        day = safe_str(entry.get("day"))
        avg = safe_int(entry.get("avg"))
        if day is None or avg is None:
            continue
        if today is not None and day >= today:
            continue
        points.append((day, avg))
    points.sort(key=lambda point: point[0])
    past = [avg for _day, avg in points][-(TREND_LENGTH - 1) :]
    return (*past, current_aqi)


def parse_pollutants(iaqi: Any) -> PollutantData:
    if not isinstance(iaqi, dict):
        return PollutantData()
    values: dict[str, Any] = {}
    for key in _POLLUTANT_KEYS:
        reading = iaqi.get(key)
        if isinstance(reading, dict):
            values[key] = reading.get("v")
    return PollutantData.model_validate(values)


def apply_feed(station: Station, data: Any) -> Station:
    """Enrich a bounds/search station with its ``/feed/`` details.

    Identity (id, location) is kept; AQI is refreshed when the feed has a
    reading.
    """
    if not isinstance(data, dict):
        return station
    aqi = non_negative_or_none(data.get("aqi"))
    if aqi is None:
        aqi = station.aqi
    primary, secondary = source_hints(data.get("dominentpol"))
    return station.model_copy(
        update={
            "aqi": aqi,
            "pollutants": parse_pollutants(data.get("iaqi")),
            "trend": parse_trend(data, aqi),
            "primary_source": primary or station.primary_source,
            "secondary_source": secondary or station.secondary_source,
        }
    )


def parse_station_list(items: Any, parser: Callable[[Any], Station | None]) -> list[Station]:
    """Parse a list of entries, silently skipping unusable ones."""
    if not isinstance(items, Iterable) or isinstance(items, (str, bytes, dict)):
        return []
    stations: list[Station] = []
    skipped = 0
    for item in items:
        station = parser(item)
        if station is None:
            skipped += 1
            continue
        stations.append(station)
    if skipped:
        _logger.debug("Skipped %d entries without AQI reading or position", skipped)
    return stations
