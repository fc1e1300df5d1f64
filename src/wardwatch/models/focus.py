"""Focus state and camera actions."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from wardwatch.models.station import Coordinate


class Bounds(BaseModel):
    """Axis-aligned lat/lng box, inclusive on every edge."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    south: float
    west: float
    north: float
    east: float

    def contains(self, point: Coordinate) -> bool:
        return self.south <= point.lat <= self.north and self.west <= point.lng <= self.east


class FocusState(BaseModel):
    """Inputs the focus arbiter compares between two moments.

    ``focus_pulse`` carries no meaning beyond its change: bumping it forces
    the camera to re-center even when ``selected_id`` and ``user_location``
    are unchanged (e.g. re-selecting the station that is already selected).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    selected_id: str | None = None
    user_location: Coordinate | None = None
    focus_pulse: int = Field(default=0, ge=0)

    def select(self, station_id: str | None) -> FocusState:
        return self.model_copy(update={"selected_id": station_id})

    def pulse(self) -> FocusState:
        return self.model_copy(update={"focus_pulse": self.focus_pulse + 1})

    def locate(self, location: Coordinate) -> FocusState:
        return self.model_copy(update={"user_location": location})


class FocusActionKind(StrEnum):
    NONE = "none"
    FLY_TO = "fly_to"
    FIT_ALL = "fit_all"


class FocusAction(BaseModel):
    """What the map camera should do next.

    Build instances through :meth:`none`, :meth:`fly_to` and :meth:`fit_all`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: FocusActionKind
    target: Coordinate | None = None
    zoom: int | None = None
    bounds: Bounds | None = None

    @classmethod
    def none(cls) -> FocusAction:
        return cls(kind=FocusActionKind.NONE)

    @classmethod
    def fly_to(cls, target: Coordinate, zoom: int) -> FocusAction:
        return cls(kind=FocusActionKind.FLY_TO, target=target, zoom=zoom)

    @classmethod
    def fit_all(cls, bounds: Bounds) -> FocusAction:
        return cls(kind=FocusActionKind.FIT_ALL, bounds=bounds)

    @property
    def moves_camera(self) -> bool:
        return self.kind != FocusActionKind.NONE
