from __future__ import annotations

import pytest

from wardwatch._constants import BASE_URL, DEFAULT_GLOBAL_BOUNDS
from wardwatch.config import WardWatchConfig
from wardwatch.exceptions import WardWatchConfigError

_ENV_KEYS = (
    "WARDWATCH_WAQI_TOKEN",
    "WAQI_TOKEN",
    "WARDWATCH_BASE_URL",
    "WARDWATCH_GLOBAL_BOUNDS",
    "WARDWATCH_LOCAL_RADIUS_DEG",
    "WARDWATCH_REQUEST_TIMEOUT",
    "WARDWATCH_GEOLOCATION_TIMEOUT",
    "WARDWATCH_SEARCH_MIN_QUERY_LENGTH",
    "WARDWATCH_DETAIL_LIMIT",
    "WARDWATCH_API_TRACE_ENABLED",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WARDWATCH_WAQI_TOKEN", " tok ")

    config = WardWatchConfig.from_env()

    assert config.waqi_token == "tok"
    assert config.base_url == BASE_URL
    assert config.global_bounds == DEFAULT_GLOBAL_BOUNDS
    assert config.geolocation_timeout == 10.0
    assert config.search_min_query_length == 3
    assert config.api_trace_enabled is False


def test_from_env_falls_back_to_plain_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAQI_TOKEN", "plain")

    assert WardWatchConfig.from_env().waqi_token == "plain"


def test_from_env_reads_optional_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WARDWATCH_WAQI_TOKEN", "tok")
    monkeypatch.setenv("WARDWATCH_BASE_URL", "https://proxy.example/")
    monkeypatch.setenv("WARDWATCH_GLOBAL_BOUNDS", "8, 70, 30, 90")
    monkeypatch.setenv("WARDWATCH_DETAIL_LIMIT", "4")
    monkeypatch.setenv("WARDWATCH_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("WARDWATCH_API_TRACE_ENABLED", "yes")

    config = WardWatchConfig.from_env()

    assert config.base_url == "https://proxy.example"
    assert config.global_bounds == (8.0, 70.0, 30.0, 90.0)
    assert config.detail_limit == 4
    assert config.request_timeout == 2.5
    assert config.api_trace_enabled is True


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WARDWATCH_WAQI_TOKEN", "tok")
    monkeypatch.setenv("WARDWATCH_DETAIL_LIMIT", "not-a-number")

    config = WardWatchConfig.from_env(detail_limit=0, waqi_token="override")

    assert config.detail_limit == 0
    assert config.waqi_token == "override"


def test_missing_token_raises() -> None:
    with pytest.raises(WardWatchConfigError, match="token"):
        WardWatchConfig.from_env()


@pytest.mark.parametrize("bounds", ["1,2,3", "a,b,c,d", "30,70,10,90"])
def test_invalid_bounds_raise(monkeypatch: pytest.MonkeyPatch, bounds: str) -> None:
    monkeypatch.setenv("WARDWATCH_WAQI_TOKEN", "tok")
    monkeypatch.setenv("WARDWATCH_GLOBAL_BOUNDS", bounds)

    with pytest.raises(WardWatchConfigError):
        WardWatchConfig.from_env()


def test_invalid_number_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WARDWATCH_WAQI_TOKEN", "tok")
    monkeypatch.setenv("WARDWATCH_GEOLOCATION_TIMEOUT", "soon")

    with pytest.raises(WardWatchConfigError, match="WARDWATCH_GEOLOCATION_TIMEOUT"):
        WardWatchConfig.from_env()
