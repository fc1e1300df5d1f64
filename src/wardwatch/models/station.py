"""Station (ward) and coordinate models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from wardwatch._constants import TREND_LENGTH
from wardwatch.ingestion.normalize import safe_float
from wardwatch.models._base import WardBaseModel


class Coordinate(BaseModel):
    """A WGS84 latitude/longitude pair in decimal degrees.

    Range is not validated; out-of-range input is a caller error.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    lat: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    lng: float = Field(validation_alias=AliasChoices("lng", "lon", "longitude"))

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


class PollutantData(WardBaseModel):
    """Individual pollutant readings; ``None`` when the station has no sensor."""

    pm25: float | None = None
    pm10: float | None = None
    no2: float | None = None
    so2: float | None = None
    co: float | None = None
    o3: float | None = None

    @field_validator("pm25", "pm10", "no2", "so2", "co", "o3", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)


class Station(WardBaseModel):
    """A monitoring station ("ward").

    ``id`` and ``location`` are the only fields the fusion and focus logic
    look at, besides ``aqi`` for ordering. Everything else is descriptive
    payload passed through to the presentation layer.

    Parameters
    ----------
    id : str
        Opaque identifier. Different feeds may use different ids for the
        same physical sensor.
    name : str
        Display name.
    location : Coordinate
        Station position.
    aqi : int
        Air Quality Index, non-negative.
    pollutants : PollutantData
        Latest pollutant readings.
    trend : tuple of int
        Up to seven daily AQI points, oldest first.
    population : int or None
        Population of the ward, when known.
    primary_source, secondary_source : str or None
        Heuristic pollution source labels.
    raw : dict
        Original payload the station was parsed from.
    """

    id: str = Field(min_length=1)
    name: str = ""
    location: Coordinate
    aqi: int = Field(ge=0)
    pollutants: PollutantData = Field(default_factory=PollutantData)
    trend: tuple[int, ...] = ()
    population: int | None = None
    primary_source: str | None = None
    secondary_source: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @field_validator("trend", mode="before")
    @classmethod
    def _keep_last_points(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)) and len(value) > TREND_LENGTH:
            return tuple(value[-TREND_LENGTH:])
        return value
