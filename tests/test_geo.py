from __future__ import annotations

import pytest

from wardwatch.geo import bounds_of, box_around, distance_km, is_same_location, nearest_station
from wardwatch.models import Coordinate, Station

DELHI = Coordinate(lat=28.6139, lng=77.2090)
MUMBAI = Coordinate(lat=19.0760, lng=72.8777)


def _station(station_id: str, lat: float, lng: float, aqi: int = 100) -> Station:
    return Station(id=station_id, name=station_id, location=Coordinate(lat=lat, lng=lng), aqi=aqi)


def test_distance_is_zero_for_identical_points() -> None:
    assert distance_km(DELHI, DELHI) == 0.0


def test_distance_is_symmetric() -> None:
    assert distance_km(DELHI, MUMBAI) == pytest.approx(distance_km(MUMBAI, DELHI))


def test_distance_matches_known_city_pair() -> None:
    # Delhi to Mumbai is roughly 1150 km as the crow flies.
    assert distance_km(DELHI, MUMBAI) == pytest.approx(1150, rel=0.02)


def test_distance_of_antipodal_points_is_half_circumference() -> None:
    a = Coordinate(lat=0.0, lng=0.0)
    b = Coordinate(lat=0.0, lng=180.0)
    assert distance_km(a, b) == pytest.approx(20015.1, rel=1e-3)


def test_same_location_threshold_is_half_a_kilometer() -> None:
    # 0.001 degree of latitude is about 111 m; 0.01 is about 1.1 km.
    assert is_same_location(DELHI, Coordinate(lat=DELHI.lat + 0.001, lng=DELHI.lng))
    assert not is_same_location(DELHI, Coordinate(lat=DELHI.lat + 0.01, lng=DELHI.lng))


def test_nearest_station_returns_none_for_empty_input() -> None:
    assert nearest_station(DELHI, []) is None


def test_nearest_station_picks_closest() -> None:
    far = _station("far", 28.70, 77.30)
    near = _station("near", 28.62, 77.21)
    assert nearest_station(DELHI, [far, near]) is near


def test_nearest_station_tie_goes_to_first_seen() -> None:
    east = _station("east", DELHI.lat, DELHI.lng + 0.05)
    west = _station("west", DELHI.lat, DELHI.lng - 0.05)
    assert nearest_station(DELHI, [east, west]) is east
    assert nearest_station(DELHI, [west, east]) is west


def test_bounds_of_encloses_every_point() -> None:
    bounds = bounds_of([DELHI, MUMBAI])
    assert bounds is not None
    assert bounds.contains(DELHI)
    assert bounds.contains(MUMBAI)
    assert bounds.south == MUMBAI.lat
    assert bounds.north == DELHI.lat


def test_bounds_of_empty_is_none() -> None:
    assert bounds_of([]) is None


def test_box_around_is_clamped() -> None:
    box = box_around(Coordinate(lat=89.9, lng=179.9), 0.25)
    assert box.north == 90.0
    assert box.east == 180.0
    assert box.south == pytest.approx(89.65)
