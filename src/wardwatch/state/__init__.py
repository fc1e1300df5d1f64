"""State layer.

This package is the single source of truth for how stations arriving from
the global feed, location-scoped fetches and search lookups are fused into
one deduplicated set, and for which station the map camera focuses on.
"""

from wardwatch.state.focus import FocusArbiter, decide_focus
from wardwatch.state.fusion import SearchInsertResult, insert_search_result, merge_local
from wardwatch.state.generation import RequestGenerations
from wardwatch.state.repository import StationRepository

__all__ = [
    "FocusArbiter",
    "RequestGenerations",
    "SearchInsertResult",
    "StationRepository",
    "decide_focus",
    "insert_search_result",
    "merge_local",
]
