"""Tests for WAQI payload parsing and the pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from wardwatch.analysis import parse_analysis_payload
from wardwatch.exceptions import AnalysisError
from wardwatch.ingestion.normalize import non_negative_or_none, safe_float, safe_geo, safe_int
from wardwatch.ingestion.waqi import (
    apply_feed,
    parse_bounds_entry,
    parse_search_entry,
    parse_station_list,
    parse_trend,
    station_id,
)
from wardwatch.models import (
    AnalysisResult,
    Coordinate,
    FocusState,
    PollutantData,
    PollutionSeverity,
    Station,
    aqi_color,
)

# ------------------------------------------------------------------
# Normalization
# ------------------------------------------------------------------


class TestNormalize:
    def test_placeholders_are_missing(self) -> None:
        assert safe_float("-") is None
        assert safe_float("") is None
        assert safe_float(None) is None
        assert safe_float(True) is None
        assert safe_float("nan") is None
        assert safe_float("inf") is None

    def test_numeric_strings(self) -> None:
        assert safe_float(" 12.5 ") == 12.5
        assert safe_int("41.6") == 42

    def test_negative_aqi_is_missing(self) -> None:
        assert non_negative_or_none(-1) is None
        assert non_negative_or_none("0") == 0

    def test_geo_pair(self) -> None:
        assert safe_geo([28.6, "77.2"]) == (28.6, 77.2)
        assert safe_geo([28.6]) is None
        assert safe_geo("28.6,77.2") is None


# ------------------------------------------------------------------
# Station model
# ------------------------------------------------------------------


class TestStation:
    def test_coordinate_accepts_lon_alias(self) -> None:
        coord = Coordinate.model_validate({"lat": 1.5, "lon": 2.5})
        assert coord.as_tuple() == (1.5, 2.5)

    def test_camel_case_fields(self) -> None:
        station = Station.model_validate(
            {
                "id": "@1",
                "location": {"lat": 1, "lng": 2},
                "aqi": 10,
                "primarySource": "Traffic",
            }
        )
        assert station.primary_source == "Traffic"

    def test_placeholder_aqi_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Station.model_validate({"id": "@1", "location": {"lat": 1, "lng": 2}, "aqi": "-"})

    def test_negative_aqi_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Station(id="@1", location=Coordinate(lat=1, lng=2), aqi=-5)

    def test_trend_is_clipped_to_last_seven(self) -> None:
        station = Station(id="@1", location=Coordinate(lat=1, lng=2), aqi=10, trend=list(range(10)))
        assert station.trend == (3, 4, 5, 6, 7, 8, 9)

    def test_pollutant_placeholders(self) -> None:
        data = PollutantData.model_validate({"pm25": "-", "pm10": "48", "o3": None})
        assert data.pm25 is None
        assert data.pm10 == 48.0
        assert data.o3 is None

    def test_models_are_frozen(self) -> None:
        station = Station(id="@1", location=Coordinate(lat=1, lng=2), aqi=10)
        with pytest.raises(ValidationError):
            station.aqi = 20  # type: ignore[misc]


# ------------------------------------------------------------------
# Severity
# ------------------------------------------------------------------


class TestSeverity:
    @pytest.mark.parametrize(
        ("aqi", "expected"),
        [
            (0, PollutionSeverity.GOOD),
            (50, PollutionSeverity.GOOD),
            (51, PollutionSeverity.MODERATE),
            (150, PollutionSeverity.UNHEALTHY_SENSITIVE),
            (200, PollutionSeverity.UNHEALTHY),
            (300, PollutionSeverity.VERY_UNHEALTHY),
            (301, PollutionSeverity.HAZARDOUS),
        ],
    )
    def test_bands(self, aqi: int, expected: PollutionSeverity) -> None:
        assert PollutionSeverity.from_aqi(aqi) == expected

    def test_colors(self) -> None:
        assert aqi_color(10) == "#10b981"
        assert aqi_color(250) == "#a855f7"
        assert aqi_color(500) == "#881337"


# ------------------------------------------------------------------
# WAQI payloads
# ------------------------------------------------------------------


class TestWaqiParsing:
    def test_station_id_prefix(self) -> None:
        assert station_id(8397) == "@8397"
        assert station_id("@8397") == "@8397"
        assert station_id(None) is None

    def test_bounds_entry(self) -> None:
        station = parse_bounds_entry(
            {"lat": 28.63, "lon": 77.3, "uid": 2553, "aqi": "187", "station": {"name": "Anand Vihar, Delhi"}}
        )
        assert station is not None
        assert station.id == "@2553"
        assert station.name == "Anand Vihar, Delhi"
        assert station.aqi == 187
        assert station.location == Coordinate(lat=28.63, lng=77.3)
        assert station.raw["uid"] == 2553

    def test_bounds_entry_without_reading_is_skipped(self) -> None:
        assert parse_bounds_entry({"lat": 28.63, "lon": 77.3, "uid": 2553, "aqi": "-"}) is None

    def test_search_entry(self) -> None:
        station = parse_search_entry({"uid": 11, "aqi": 95, "station": {"name": "Bandra", "geo": [19.06, 72.84]}})
        assert station is not None
        assert station.location == Coordinate(lat=19.06, lng=72.84)

    def test_station_list_skips_bad_rows(self) -> None:
        rows = [
            {"lat": 1, "lon": 2, "uid": 1, "aqi": 50},
            {"lat": 1, "lon": 2, "uid": 2, "aqi": "-"},
            "garbage",
            {"lat": 3, "lon": 4, "uid": 3, "aqi": 70},
        ]
        assert [s.id for s in parse_station_list(rows, parse_bounds_entry)] == ["@1", "@3"]
        assert parse_station_list(None, parse_bounds_entry) == []

    def test_trend_uses_past_days_and_current_reading(self) -> None:
        data = {
            "time": {"s": "2024-01-10 14:00:00"},
            "forecast": {
                "daily": {
                    "pm25": [{"day": f"2024-01-{day:02d}", "avg": day * 10} for day in range(1, 13)],
                }
            },
        }
        # Days 01..09 are in the past; the last six of them plus today's reading.
        assert parse_trend(data, 250) == (40, 50, 60, 70, 80, 90, 250)

    def test_trend_without_forecast(self) -> None:
        assert parse_trend({}, 80) == (80,)

    def test_feed_enriches_station(self) -> None:
        base = Station(id="@2553", name="Anand Vihar", location=Coordinate(lat=28.63, lng=77.3), aqi=180)
        feed = {
            "aqi": 201,
            "dominentpol": "pm25",
            "iaqi": {"pm25": {"v": 201}, "pm10": {"v": 150}, "no2": {"v": "-"}},
            "time": {"s": "2024-01-10 14:00:00"},
            "forecast": {"daily": {"pm25": [{"day": "2024-01-09", "avg": 190}]}},
        }

        enriched = apply_feed(base, feed)

        assert enriched.id == base.id
        assert enriched.location == base.location
        assert enriched.aqi == 201
        assert enriched.pollutants.pm25 == 201.0
        assert enriched.pollutants.no2 is None
        assert enriched.trend == (190, 201)
        assert enriched.primary_source is not None

    def test_feed_without_reading_keeps_station_aqi(self) -> None:
        base = Station(id="@1", location=Coordinate(lat=1, lng=2), aqi=77)
        assert apply_feed(base, {"aqi": "-"}).aqi == 77


# ------------------------------------------------------------------
# Focus state
# ------------------------------------------------------------------


class TestFocusState:
    def test_transitions_return_new_state(self) -> None:
        state = FocusState()
        pulsed = state.select("@1").pulse()

        assert state.selected_id is None
        assert state.focus_pulse == 0
        assert pulsed.selected_id == "@1"
        assert pulsed.focus_pulse == 1


# ------------------------------------------------------------------
# Analysis payloads
# ------------------------------------------------------------------


class TestAnalysis:
    def test_fenced_json_reply(self) -> None:
        payload = """```json
        {
          "recommendations": [
            {"id": "r1", "title": "Wear a mask", "description": "N95 outdoors", "type": "urgent"}
          ],
          "trendAnalysis": "Rising since Monday",
          "sourceBreakdown": [
            {"source": "Traffic", "percentage": 60, "confidence": "High"},
            {"source": "Dust", "percentage": 40, "confidence": "Medium"}
          ],
          "news": [{"title": "Smog alert", "summary": "Schools closed", "timeAgo": "2h ago"}]
        }
        ```"""

        result = parse_analysis_payload(payload)

        assert isinstance(result, AnalysisResult)
        assert result.recommendations[0].type == "urgent"
        assert result.trend_analysis == "Rising since Monday"
        assert result.news is not None
        assert result.news[0].time_ago == "2h ago"

    def test_dict_reply(self) -> None:
        result = parse_analysis_payload({"recommendations": []})
        assert result.recommendations == []
        assert result.source_breakdown is None

    def test_breakdown_over_100_is_rejected(self) -> None:
        with pytest.raises(AnalysisError):
            parse_analysis_payload(
                {
                    "recommendations": [],
                    "sourceBreakdown": [
                        {"source": "Traffic", "percentage": 70, "confidence": "High"},
                        {"source": "Dust", "percentage": 40, "confidence": "Low"},
                    ],
                }
            )

    def test_unknown_recommendation_type_is_rejected(self) -> None:
        with pytest.raises(AnalysisError):
            parse_analysis_payload(
                {"recommendations": [{"id": "r", "title": "t", "description": "d", "type": "panic"}]}
            )

    def test_non_json_reply(self) -> None:
        with pytest.raises(AnalysisError):
            parse_analysis_payload("Sorry, I cannot help with that.")
