"""Ingestion layer.

This package turns WAQI replies (bounds, search and per-station feeds) into
normalized :class:`wardwatch.models.Station` objects.
"""

__all__: list[str] = []
