"""Data models for stations, focus and analysis."""

from wardwatch.models._base import WardBaseModel
from wardwatch.models.analysis import (
    AnalysisResult,
    AnalysisStatus,
    GroundingUrl,
    NewsItem,
    Recommendation,
    SourceAttribution,
    UserRole,
)
from wardwatch.models.focus import Bounds, FocusAction, FocusActionKind, FocusState
from wardwatch.models.severity import PollutionSeverity, aqi_color
from wardwatch.models.station import Coordinate, PollutantData, Station

__all__ = [
    "AnalysisResult",
    "AnalysisStatus",
    "Bounds",
    "Coordinate",
    "FocusAction",
    "FocusActionKind",
    "FocusState",
    "GroundingUrl",
    "NewsItem",
    "PollutantData",
    "PollutionSeverity",
    "Recommendation",
    "SourceAttribution",
    "Station",
    "UserRole",
    "WardBaseModel",
    "aqi_color",
]
