"""Internal constants shared across the library."""

BASE_URL = "https://api.waqi.info"
USER_AGENT = "wardwatch/0.1"

#: Mean Earth radius used by the haversine formula.
EARTH_RADIUS_KM = 6371.0

#: Two coordinates closer than this are the same physical station.
#: Shared by the merge de-duplication and the search de-duplication.
SAME_STATION_RADIUS_KM = 0.5

# ------------------------------------------------------------------
# Camera zoom levels
# ------------------------------------------------------------------

USER_LOCATION_ZOOM = 13
STATION_ZOOM = 12

#: Number of daily points in a station trend.
TREND_LENGTH = 7

#: Rows shown in the "top critical zones" list.
TOP_CRITICAL_COUNT = 5

#: Default "global" fetch box (south, west, north, east), covering India.
DEFAULT_GLOBAL_BOUNDS: tuple[float, float, float, float] = (6.5, 68.0, 35.5, 97.5)

#: WAQI error messages that mean the token was rejected.
INVALID_TOKEN_MESSAGES: frozenset[str] = frozenset({"Invalid key", "Invalid token"})
