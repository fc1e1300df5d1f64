"""Analysis service interface.

Narrative recommendations come from an external reasoning service. The
library only defines the call shape and validates replies; the content is
displayed verbatim.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import ValidationError

from wardwatch.exceptions import AnalysisError
from wardwatch.models.analysis import AnalysisResult, UserRole
from wardwatch.models.station import Station

# Language models often wrap JSON replies in a Markdown code fence.
_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(?P<body>.*?)\s*```\s*$", re.DOTALL)


class Analyzer(Protocol):
    """Produces an :class:`AnalysisResult` for a station, tailored to a role."""

    async def analyze(self, station: Station, role: UserRole) -> AnalysisResult:
        ...


def parse_analysis_payload(payload: str | Mapping[str, Any]) -> AnalysisResult:
    """Validate a raw analysis reply (JSON text or an already-decoded dict).

    Raises
    ------
    AnalysisError
        If the text is not JSON or does not match the result shape.
    """
    data: Any = payload
    if isinstance(payload, str):
        match = _FENCE_RE.match(payload)
        text = match.group("body") if match else payload
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise AnalysisError(f"Analysis reply is not JSON: {text[:64]}") from exc

    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as exc:
        raise AnalysisError(f"Analysis reply has an unexpected shape: {exc.error_count()} errors") from exc
