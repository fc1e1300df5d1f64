"""Camera focus arbitration.

Four triggers compete for the map camera: locating the user, an explicit
focus pulse (search selection, re-selection), a plain selection change
(marker or list click) and the first data load. :func:`decide_focus`
picks exactly one outcome per change, first matching rule wins:

1. user location changed -> fly to the user (zoom 13)
2. focus pulse changed and the selection resolves -> fly to it (zoom 12)
3. selection changed and resolves -> fly to it (zoom 12)
4. first data load -> fit all stations, once per arbiter lifetime
5. nothing
"""

from __future__ import annotations

from collections.abc import Sequence

from wardwatch._constants import STATION_ZOOM, USER_LOCATION_ZOOM
from wardwatch.geo import bounds_of
from wardwatch.models.focus import FocusAction, FocusActionKind, FocusState
from wardwatch.models.station import Station


def resolve_station(stations: Sequence[Station], station_id: str | None) -> Station | None:
    """Look up *station_id*; a dangling id simply resolves to ``None``."""
    if station_id is None:
        return None
    return next((station for station in stations if station.id == station_id), None)


def decide_focus(
    prev: FocusState,
    current: FocusState,
    stations: Sequence[Station],
    *,
    initialized: bool,
) -> FocusAction:
    """Decide the camera action for the transition *prev* -> *current*.

    ``initialized`` tells whether the one-time fit-all framing already
    happened. Before it has, and while nothing was selected yet, the
    selection made by the initial load is not a user action: the camera
    frames every station instead of flying to it.

    A ``selected_id`` that is not in *stations* (e.g. dropped by a merge) is
    treated as no selection for rules 2 and 3; evaluation falls through.
    """
    if current.user_location is not None and current.user_location != prev.user_location:
        return FocusAction.fly_to(current.user_location, USER_LOCATION_ZOOM)

    station = resolve_station(stations, current.selected_id)

    if station is not None and current.focus_pulse != prev.focus_pulse:
        return FocusAction.fly_to(station.location, STATION_ZOOM)

    first_load = not initialized and prev.selected_id is None

    if station is not None and current.selected_id != prev.selected_id and not first_load:
        return FocusAction.fly_to(station.location, STATION_ZOOM)

    if first_load:
        bounds = bounds_of(s.location for s in stations)
        if bounds is not None:
            return FocusAction.fit_all(bounds)

    return FocusAction.none()


class FocusArbiter:
    """Stateful wrapper around :func:`decide_focus`.

    Tracks the ``initialized`` flag so the fit-all framing fires at most once.
    """

    def __init__(self) -> None:
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def next_focus(
        self,
        prev: FocusState,
        current: FocusState,
        stations: Sequence[Station],
    ) -> FocusAction:
        action = decide_focus(prev, current, stations, initialized=self._initialized)
        if action.kind == FocusActionKind.FIT_ALL:
            self._initialized = True
        return action

    def reset(self) -> None:
        """Forget the initial framing (new repository lifetime)."""
        self._initialized = False
