"""Great-circle distance and proximity helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable

from wardwatch._constants import EARTH_RADIUS_KM, SAME_STATION_RADIUS_KM
from wardwatch.models.focus import Bounds
from wardwatch.models.station import Coordinate, Station


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates, in kilometers."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    # Rounding can push h just past 1 for antipodal points.
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def is_same_location(a: Coordinate, b: Coordinate) -> bool:
    """Whether two coordinates belong to the same physical station."""
    return distance_km(a, b) < SAME_STATION_RADIUS_KM


def nearest_station(origin: Coordinate, stations: Iterable[Station]) -> Station | None:
    """Return the station closest to *origin*; ties go to the first seen."""
    nearest: Station | None = None
    best = math.inf
    for station in stations:
        dist = distance_km(origin, station.location)
        if dist < best:
            best = dist
            nearest = station
    return nearest


def bounds_of(coordinates: Iterable[Coordinate]) -> Bounds | None:
    """Smallest box enclosing every coordinate, or ``None`` when empty."""
    points = list(coordinates)
    if not points:
        return None
    return Bounds(
        south=min(p.lat for p in points),
        west=min(p.lng for p in points),
        north=max(p.lat for p in points),
        east=max(p.lng for p in points),
    )


def box_around(center: Coordinate, radius_deg: float) -> Bounds:
    """Square box of ``radius_deg`` around *center*, clamped to valid ranges."""
    return Bounds(
        south=max(-90.0, center.lat - radius_deg),
        west=max(-180.0, center.lng - radius_deg),
        north=min(90.0, center.lat + radius_deg),
        east=min(180.0, center.lng + radius_deg),
    )
