"""Relevance guard for overlapping async requests.

Each logical resource ("analysis", "locate", "search") has a generation
counter. Starting a request bumps it and hands back a token; when the
request completes, its result may only be applied if the token is still the
current one. Older responses are dropped instead of overwriting fresher
state.
"""

from __future__ import annotations

import logging

_logger = logging.getLogger(__name__)


class RequestGenerations:
    """Per-resource generation counters."""

    def __init__(self) -> None:
        self._current: dict[str, int] = {}

    def begin(self, resource: str) -> int:
        """Start a new request for *resource* and return its token."""
        token = self._current.get(resource, 0) + 1
        self._current[resource] = token
        return token

    def is_current(self, resource: str, token: int) -> bool:
        current = self._current.get(resource, 0) == token
        if not current:
            _logger.debug("Discarding stale %s result (token=%d)", resource, token)
        return current

    def invalidate(self, resource: str) -> None:
        """Make every in-flight request for *resource* stale."""
        self.begin(resource)

    def current(self, resource: str) -> int:
        return self._current.get(resource, 0)
