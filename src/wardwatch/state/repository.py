"""In-memory station repository.

This is the only component holding the deduplicated station set. Its
snapshot is always sorted worst AQI first and never holds two stations for
the same physical sensor.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from wardwatch.models.station import Station
from wardwatch.state.fusion import collapse_duplicates, insert_search_result, merge_local, sort_by_aqi

_logger = logging.getLogger(__name__)


class StationRepository:
    """Ordered container of stations.

    Every mutation builds a new tuple and swaps it in with a single
    assignment, so a reader holding a snapshot from :meth:`all` never sees a
    half-applied update.
    """

    def __init__(self, stations: Iterable[Station] = ()) -> None:
        self._stations: tuple[Station, ...] = ()
        self.replace_all(stations)

    def __len__(self) -> int:
        return len(self._stations)

    def __iter__(self) -> Iterator[Station]:
        return iter(self._stations)

    def __bool__(self) -> bool:
        return bool(self._stations)

    def replace_all(self, stations: Iterable[Station]) -> tuple[Station, ...]:
        """Replace the whole collection (global fetch)."""
        ordered = sort_by_aqi(list(stations))
        deduped = collapse_duplicates(ordered)
        if len(deduped) != len(ordered):
            _logger.debug("Dropped %d duplicate stations from bulk load", len(ordered) - len(deduped))
        self._stations = tuple(deduped)
        return self._stations

    def merge(self, incoming: Iterable[Station]) -> tuple[Station, ...]:
        """Fuse a location-scoped batch into the collection."""
        batch = collapse_duplicates(list(incoming))
        before = len(self._stations)
        merged = merge_local(self._stations, batch)
        self._stations = tuple(merged)
        _logger.debug(
            "Merged %d incoming stations: %d -> %d total",
            len(batch),
            before,
            len(self._stations),
        )
        return self._stations

    def backfill(self, stations: Iterable[Station]) -> tuple[Station, ...]:
        """Add stations from a bulk batch without displacing known ones.

        Current stations win every id or proximity match; only batch
        stations with no counterpart are added.
        """
        batch = collapse_duplicates(sort_by_aqi(list(stations)))
        before = len(self._stations)
        self._stations = tuple(merge_local(batch, self._stations))
        _logger.debug("Backfilled %d stations from bulk batch", len(self._stations) - before)
        return self._stations

    def insert(self, found: Station) -> Station:
        """Insert a search result unless already known; return the station to use."""
        result = insert_search_result(self._stations, found)
        self._stations = tuple(sort_by_aqi(result.repository))
        return result.resolved

    def all(self) -> tuple[Station, ...]:
        return self._stations

    def top_n(self, n: int) -> tuple[Station, ...]:
        if n <= 0:
            return ()
        return self._stations[:n]

    def get(self, station_id: str | None) -> Station | None:
        if station_id is None:
            return None
        for station in self._stations:
            if station.id == station_id:
                return station
        return None

    def average_aqi(self) -> int:
        """Rounded mean AQI over all stations, ``0`` when empty."""
        if not self._stations:
            return 0
        return round(sum(station.aqi for station in self._stations) / len(self._stations))
