"""Dashboard controller.

The controller is the single owner of the station repository and the focus
state. Presentation code reads :meth:`DashboardController.snapshot` and
receives camera moves through the ``on_focus`` callback; it never mutates
state directly.

Everything runs on one asyncio loop. Each state change is applied as one
transition, and results of async requests are checked against a
generation token first so an older response cannot overwrite newer state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from wardwatch._constants import TOP_CRITICAL_COUNT
from wardwatch.analysis import Analyzer
from wardwatch.config import WardWatchConfig
from wardwatch.exceptions import GeolocationError, WardWatchError
from wardwatch.geo import nearest_station
from wardwatch.geolocation import Geolocator, acquire_position
from wardwatch.models.analysis import AnalysisResult, AnalysisStatus, UserRole
from wardwatch.models.focus import FocusAction, FocusState
from wardwatch.models.severity import PollutionSeverity
from wardwatch.models.station import Coordinate, Station
from wardwatch.state.focus import FocusArbiter
from wardwatch.state.fusion import find_match
from wardwatch.state.generation import RequestGenerations
from wardwatch.state.repository import StationRepository

_logger = logging.getLogger(__name__)

_ANALYSIS = "analysis"
_LOCATE = "locate"
_LOAD = "load"
_SEARCH = "search"


class StationSource(Protocol):
    """Where station batches come from (see :class:`wardwatch.client.WaqiClient`)."""

    async def fetch_stations(self, coordinate: Coordinate | None = None) -> list[Station]:
        ...

    async def search_stations(self, query: str) -> list[Station]:
        ...


class DashboardSnapshot(BaseModel):
    """Read-only view of everything the dashboard renders."""

    model_config = ConfigDict(frozen=True)

    stations: tuple[Station, ...]
    selected: Station | None
    is_nearest: bool
    user_location: Coordinate | None
    average_aqi: int
    average_severity: PollutionSeverity
    top_critical: tuple[Station, ...]
    role: UserRole
    analysis: AnalysisResult | None
    analysis_status: AnalysisStatus


class DashboardController:
    """Owns stations, selection and camera focus for one dashboard."""

    def __init__(
        self,
        source: StationSource,
        config: WardWatchConfig,
        *,
        analyzer: Analyzer | None = None,
        geolocator: Geolocator | None = None,
        on_focus: Callable[[FocusAction], None] | None = None,
    ) -> None:
        self._source = source
        self._config = config
        self._analyzer = analyzer
        self._geolocator = geolocator
        self._on_focus = on_focus

        self._repository = StationRepository()
        self._arbiter = FocusArbiter()
        self._focus = FocusState()
        self._generations = RequestGenerations()

        self._role = UserRole.CITIZEN
        self._analysis: AnalysisResult | None = None
        self._analysis_status = AnalysisStatus.IDLE
        self._last_action = FocusAction.none()
        self._loading = False
        self._locating = False
        # Set once the repository holds a global batch or was changed by merge or insert.
        self._seeded = False

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def repository(self) -> StationRepository:
        return self._repository

    @property
    def focus(self) -> FocusState:
        return self._focus

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def analysis(self) -> AnalysisResult | None:
        return self._analysis

    @property
    def analysis_status(self) -> AnalysisStatus:
        return self._analysis_status

    @property
    def last_action(self) -> FocusAction:
        return self._last_action

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def is_locating(self) -> bool:
        return self._locating

    @property
    def selected_station(self) -> Station | None:
        return self._repository.get(self._focus.selected_id)

    @property
    def active_station(self) -> Station | None:
        """The selected station, falling back to the worst one."""
        selected = self.selected_station
        if selected is not None:
            return selected
        top = self._repository.top_n(1)
        return top[0] if top else None

    def snapshot(self) -> DashboardSnapshot:
        average = self._repository.average_aqi()
        selected = self.active_station
        return DashboardSnapshot(
            stations=self._repository.all(),
            selected=selected,
            is_nearest=self._focus.user_location is not None and self.selected_station is not None,
            user_location=self._focus.user_location,
            average_aqi=average,
            average_severity=PollutionSeverity.from_aqi(average),
            top_critical=self._repository.top_n(TOP_CRITICAL_COUNT),
            role=self._role,
            analysis=self._analysis,
            analysis_status=self._analysis_status,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _transition(self, new_focus: FocusState) -> FocusAction:
        """Swap in *new_focus* and compute the resulting camera action."""
        prev = self._focus
        self._focus = new_focus
        action = self._arbiter.next_focus(prev, new_focus, self._repository.all())
        self._last_action = action
        if action.moves_camera:
            _logger.debug("Focus %s (selected=%s)", action.kind, new_focus.selected_id)
        if self._on_focus is not None:
            try:
                self._on_focus(action)
            except Exception:
                _logger.debug("on_focus callback failed", exc_info=True)
        return action

    async def _fetch(self, coordinate: Coordinate | None = None) -> list[Station]:
        """Fetch a batch; upstream failures count as an empty batch."""
        try:
            return await self._source.fetch_stations(coordinate)
        except WardWatchError as exc:
            _logger.warning("Station fetch failed (%s); keeping known stations", exc)
            _logger.debug("Station fetch failure detail", exc_info=True)
            return []

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    async def load(self) -> FocusAction:
        """Global load: seed the repository and select the worst station.

        Only the first global batch replaces the (still empty) repository.
        Once stations were fused in by a locate or search, or an earlier
        load succeeded, the batch is backfilled instead: known stations keep
        their place and only new ones are added. A load overtaken by a newer
        one is discarded.
        """
        token = self._generations.begin(_LOAD)
        self._loading = True
        try:
            stations = await self._fetch()
        finally:
            if self._generations.current(_LOAD) == token:
                self._loading = False

        if not self._generations.is_current(_LOAD, token):
            return FocusAction.none()

        if not stations:
            _logger.info("Global fetch returned nothing; keeping %d known stations", len(self._repository))
            return FocusAction.none()

        if self._seeded:
            self._repository.backfill(stations)
        else:
            self._repository.replace_all(stations)
            self._seeded = True

        new_focus = self._focus
        if self.selected_station is None:
            top = self._repository.top_n(1)
            new_focus = new_focus.select(top[0].id if top else None)

        prev_selected = self._focus.selected_id
        action = self._transition(new_focus)
        if new_focus.selected_id is not None and new_focus.selected_id != prev_selected:
            await self.refresh_analysis()
        return action

    async def select_station(self, station_id: str) -> FocusAction:
        """Marker or list click."""
        station = self._repository.get(station_id)
        if station is None:
            _logger.debug("Ignoring selection of unknown station %s", station_id)
            return FocusAction.none()

        prev_selected = self._focus.selected_id
        action = self._transition(self._focus.select(station.id))
        if station.id != prev_selected:
            await self.refresh_analysis()
        return action

    async def locate_me(self) -> FocusAction:
        """Locate the user, merge nearby stations and select the nearest.

        The fix and the nearest selection are two transitions: the camera
        first flies to the user, then, once the local batch is merged, to the
        nearest station. Returns the last camera action taken.

        Raises
        ------
        GeolocationError
            When no geolocator is configured, or the position is denied,
            unavailable or not acquired in time. Focus state is untouched.
        """
        if self._geolocator is None:
            raise GeolocationError("Geolocation is not supported on this platform")

        token = self._generations.begin(_LOCATE)
        self._locating = True
        try:
            try:
                position = await acquire_position(self._geolocator, self._config.geolocation_timeout)
            except GeolocationError as exc:
                _logger.warning("Unable to retrieve location: %s", exc)
                raise
            if not self._generations.is_current(_LOCATE, token):
                return FocusAction.none()

            located = self._transition(self._focus.locate(position))

            local = await self._fetch(position)
            if not self._generations.is_current(_LOCATE, token):
                return located
        finally:
            if self._generations.current(_LOCATE) == token:
                self._locating = False

        if not local:
            return located

        self._repository.merge(local)
        self._seeded = True

        nearest = nearest_station(position, local)
        # The batch may have been collapsed; select whichever copy was kept.
        kept = None
        if nearest is not None:
            kept = self._repository.get(nearest.id) or find_match(self._repository.all(), nearest)
        if kept is None:
            return located

        prev_selected = self._focus.selected_id
        action = self._transition(self._focus.select(kept.id).pulse())
        if kept.id != prev_selected:
            await self.refresh_analysis()
        return action

    async def search(self, query: str) -> list[Station]:
        """Candidate stations for a free-text query.

        Short queries return nothing without a request. If a newer search
        started meanwhile, this one returns nothing.
        """
        text = query.strip()
        if len(text) < self._config.search_min_query_length:
            self._generations.invalidate(_SEARCH)
            return []

        token = self._generations.begin(_SEARCH)
        try:
            results = await self._source.search_stations(text)
        except WardWatchError as exc:
            _logger.warning("Search for %r failed: %s", text, exc)
            results = []

        if not self._generations.is_current(_SEARCH, token):
            return []
        return results

    async def select_search_result(self, found: Station) -> FocusAction:
        """Select a search candidate, adding it unless it is already known."""
        resolved = self._repository.insert(found)
        self._seeded = True
        prev_selected = self._focus.selected_id
        action = self._transition(self._focus.select(resolved.id).pulse())
        if resolved.id != prev_selected:
            await self.refresh_analysis()
        return action

    async def set_role(self, role: UserRole) -> None:
        if role == self._role:
            return
        self._role = role
        await self.refresh_analysis()

    async def refresh_analysis(self) -> AnalysisResult | None:
        """Request analysis for the selected station and current role.

        Failures leave the analysis ``UNAVAILABLE``; station data is
        unaffected. A result that arrives after a newer request started is
        discarded.
        """
        token = self._generations.begin(_ANALYSIS)
        station = self.selected_station

        if station is None:
            self._analysis = None
            self._analysis_status = AnalysisStatus.IDLE
            return None

        if self._analyzer is None:
            self._analysis = None
            self._analysis_status = AnalysisStatus.UNAVAILABLE
            return None

        self._analysis = None
        self._analysis_status = AnalysisStatus.LOADING
        role = self._role

        result: AnalysisResult | None
        try:
            result = await self._analyzer.analyze(station, role)
        except Exception as exc:
            _logger.warning("Analysis unavailable for %s: %s", station.id, exc)
            _logger.debug("Analysis failure detail", exc_info=True)
            result = None

        if not self._generations.is_current(_ANALYSIS, token):
            return None

        self._analysis = result
        self._analysis_status = AnalysisStatus.READY if result is not None else AnalysisStatus.UNAVAILABLE
        return result
