"""Station fusion.

Merges freshly fetched station batches into the current collection while
resolving identity by id *or* proximity: two feeds may report the same
physical sensor under different ids, and the collection must only ever hold
one pin per location.

All functions here are pure; they never mutate their inputs.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from wardwatch.geo import is_same_location
from wardwatch.models.station import Station


@dataclass(frozen=True, slots=True)
class SearchInsertResult:
    """Outcome of :func:`insert_search_result`."""

    repository: list[Station]
    resolved: Station


def sort_by_aqi(stations: Sequence[Station]) -> list[Station]:
    """Stable sort, worst AQI first."""
    return sorted(stations, key=lambda station: station.aqi, reverse=True)


def same_station(a: Station, b: Station) -> bool:
    """Whether *a* and *b* describe the same sensor (same id or within 0.5 km)."""
    return a.id == b.id or is_same_location(a.location, b.location)


def find_match(stations: Sequence[Station], candidate: Station) -> Station | None:
    """Return the first station in *stations* that is the same sensor as *candidate*."""
    for station in stations:
        if same_station(station, candidate):
            return station
    return None


def merge_local(repository: Sequence[Station], incoming: Sequence[Station]) -> list[Station]:
    """Fuse a location-scoped (or search) batch into *repository*.

    Incoming stations are authoritative and always kept. A prior station is
    dropped when it shares an id with, or lies within 0.5 km of, any incoming
    station. The result is re-sorted worst-first; ties keep incoming before
    prior and otherwise their original order.
    """
    if not incoming:
        return sort_by_aqi(repository)

    incoming_ids = {station.id for station in incoming}
    kept = [
        prior
        for prior in repository
        if prior.id not in incoming_ids
        and not any(is_same_location(prior.location, fresh.location) for fresh in incoming)
    ]
    return sort_by_aqi([*incoming, *kept])


def insert_search_result(repository: Sequence[Station], found: Station) -> SearchInsertResult:
    """Add a searched station unless the collection already has it.

    When a station with the same id or within 0.5 km exists, that existing
    object is returned as ``resolved`` and the collection is unchanged, so
    anything keyed on it stays stable. Otherwise *found* is prepended.
    """
    existing = find_match(repository, found)
    if existing is not None:
        return SearchInsertResult(repository=list(repository), resolved=existing)
    return SearchInsertResult(repository=[found, *repository], resolved=found)


def collapse_duplicates(stations: Sequence[Station]) -> list[Station]:
    """Drop every station that is the same sensor as one earlier in *stations*."""
    kept: list[Station] = []
    for station in stations:
        if find_match(kept, station) is None:
            kept.append(station)
    return kept
