import pytest

from buzzd.deals.geo import distance_fn, format_distance, haversine_km, walking_minutes
from buzzd.deals.models import Establishment, UserPosition


def test_haversine_zero_distance():
    assert haversine_km(1.28, 103.85, 1.28, 103.85) == 0.0


def test_haversine_known_distance():
    # One degree of latitude is roughly 111 km
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.19, abs=0.01)


def test_haversine_is_rounded_to_two_decimals():
    d = haversine_km(1.2820, 103.8465, 1.3890, 103.9877)
    assert d == round(d, 2)


def test_distance_fn_without_position():
    establishment = Establishment(id=1, latitude=1.28, longitude=103.85)
    assert distance_fn(None)(establishment) is None


def test_distance_fn_with_position():
    establishment = Establishment(id=1, latitude=1.0, longitude=0.0)
    measure = distance_fn(UserPosition(lat=0.0, lng=0.0))
    assert measure(establishment) == pytest.approx(111.19, abs=0.01)


def test_format_distance():
    assert format_distance(0.35) == "350m"
    assert format_distance(1.234) == "1.2km"


def test_walking_minutes():
    assert walking_minutes(1.0) == 12
    assert walking_minutes(0.5) == 6
