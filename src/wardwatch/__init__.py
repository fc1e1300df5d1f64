"""wardwatch - Async air-quality station fusion and map focus for Python."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wardwatch")
except PackageNotFoundError:
    __version__ = "0+local"
from wardwatch.analysis import Analyzer, parse_analysis_payload
from wardwatch.client import WaqiClient
from wardwatch.config import WardWatchConfig
from wardwatch.controller import DashboardController, DashboardSnapshot, StationSource
from wardwatch.exceptions import (
    AnalysisError,
    GeolocationDeniedError,
    GeolocationError,
    GeolocationTimeoutError,
    WardWatchApiError,
    WardWatchAuthenticationError,
    WardWatchConfigError,
    WardWatchError,
    WardWatchTransportError,
)
from wardwatch.geo import distance_km, is_same_location, nearest_station
from wardwatch.geolocation import FixedGeolocator, Geolocator
from wardwatch.models import (
    AnalysisResult,
    AnalysisStatus,
    Bounds,
    Coordinate,
    FocusAction,
    FocusActionKind,
    FocusState,
    PollutantData,
    PollutionSeverity,
    Station,
    UserRole,
    aqi_color,
)
from wardwatch.state import FocusArbiter, StationRepository, decide_focus, insert_search_result, merge_local

__all__ = [
    "__version__",
    "AnalysisError",
    "AnalysisResult",
    "AnalysisStatus",
    "Analyzer",
    "Bounds",
    "Coordinate",
    "DashboardController",
    "DashboardSnapshot",
    "FixedGeolocator",
    "FocusAction",
    "FocusActionKind",
    "FocusArbiter",
    "FocusState",
    "GeolocationDeniedError",
    "GeolocationError",
    "GeolocationTimeoutError",
    "Geolocator",
    "PollutantData",
    "PollutionSeverity",
    "Station",
    "StationRepository",
    "StationSource",
    "UserRole",
    "WaqiClient",
    "WardWatchApiError",
    "WardWatchAuthenticationError",
    "WardWatchConfig",
    "WardWatchConfigError",
    "WardWatchError",
    "WardWatchTransportError",
    "aqi_color",
    "decide_focus",
    "distance_km",
    "insert_search_result",
    "is_same_location",
    "merge_local",
    "nearest_station",
    "parse_analysis_payload",
]
