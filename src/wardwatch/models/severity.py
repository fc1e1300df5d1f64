"""AQI severity bands and their marker colors."""

from __future__ import annotations

from enum import StrEnum

# Upper AQI bound (inclusive) of each band; anything above the last is hazardous.
_BANDS: tuple[tuple[int, str, str], ...] = (
    (50, "Good", "#10b981"),
    (100, "Moderate", "#eab308"),
    (150, "Unhealthy for Sensitive Groups", "#f97316"),
    (200, "Unhealthy", "#ef4444"),
    (300, "Very Unhealthy", "#a855f7"),
)
_HAZARDOUS_COLOR = "#881337"


class PollutionSeverity(StrEnum):
    GOOD = "Good"
    MODERATE = "Moderate"
    UNHEALTHY_SENSITIVE = "Unhealthy for Sensitive Groups"
    UNHEALTHY = "Unhealthy"
    VERY_UNHEALTHY = "Very Unhealthy"
    HAZARDOUS = "Hazardous"

    @classmethod
    def from_aqi(cls, aqi: float) -> PollutionSeverity:
        for upper, label, _color in _BANDS:
            if aqi <= upper:
                return cls(label)
        return cls.HAZARDOUS


def aqi_color(aqi: float) -> str:
    """Hex color used for markers and charts at this AQI."""
    for upper, _label, color in _BANDS:
        if aqi <= upper:
            return color
    return _HAZARDOUS_COLOR
