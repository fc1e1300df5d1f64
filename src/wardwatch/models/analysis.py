"""Analysis (narrative recommendation) models.

These describe what the external reasoning service returns. wardwatch
validates the shape and otherwise displays the content verbatim.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import Field, model_validator

from wardwatch.models._base import WardBaseModel

# Float tolerance for percentages that were rounded by the service.
_PERCENT_EPSILON = 1e-6


class UserRole(StrEnum):
    CITIZEN = "Citizen"
    OFFICIAL = "Government Official"


class AnalysisStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class Recommendation(WardBaseModel):
    id: str
    title: str
    description: str
    type: Literal["urgent", "advisory", "policy"] = "advisory"


class SourceAttribution(WardBaseModel):
    source: str
    percentage: float = Field(ge=0, le=100)
    confidence: Literal["High", "Medium", "Low"]


class NewsItem(WardBaseModel):
    title: str
    summary: str = ""
    time_ago: str = ""
    source: str | None = None


class GroundingUrl(WardBaseModel):
    title: str = ""
    uri: str


class AnalysisResult(WardBaseModel):
    """Narrative analysis for one station and role.

    Every section except ``recommendations`` is optional.
    """

    recommendations: list[Recommendation] = Field(default_factory=list)
    grounding_urls: list[GroundingUrl] = Field(default_factory=list)
    trend_analysis: str | None = None
    source_breakdown: list[SourceAttribution] | None = None
    news: list[NewsItem] | None = None

    @model_validator(mode="after")
    def _check_breakdown_total(self) -> AnalysisResult:
        if self.source_breakdown:
            total = sum(item.percentage for item in self.source_breakdown)
            if total > 100 + _PERCENT_EPSILON:
                raise ValueError(f"source breakdown percentages sum to {total:g}, above 100")
        return self
