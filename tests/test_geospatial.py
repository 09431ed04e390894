import math

import pytest

from nobetci.errors import InvalidCoordinateError
from nobetci.models.domain import Pharmacy
from nobetci.services.geospatial import haversine_km, is_geolocatable, validate_coordinates


def _pharmacy(lat: float, lng: float) -> Pharmacy:
    return Pharmacy(
        id="P1",
        city="Istanbul",
        district="Kadıköy",
        name="Eczane",
        address="Adres",
        phone="",
        date="2025-01-20",
        latitude=lat,
        longitude=lng,
    )


@pytest.mark.parametrize(
    "lat, lng, message",
    [
        ("41", 29.0, "Latitude and longitude must be numbers"),
        (41.0, None, "Latitude and longitude must be numbers"),
        (True, 29.0, "Latitude and longitude must be numbers"),
        (math.nan, 0.0, "Latitude and longitude cannot be NaN"),
        (0.0, math.nan, "Latitude and longitude cannot be NaN"),
        (91.0, 0.0, "Latitude must be between -90 and 90 degrees"),
        (-90.5, 0.0, "Latitude must be between -90 and 90 degrees"),
        (0.0, 180.01, "Longitude must be between -180 and 180 degrees"),
        (0.0, -181, "Longitude must be between -180 and 180 degrees"),
    ],
)
def test_validate_coordinates_rejects_with_contract_message(lat, lng, message):
    with pytest.raises(InvalidCoordinateError) as excinfo:
        validate_coordinates(lat, lng)
    assert str(excinfo.value) == message


def test_validate_coordinates_checks_nan_before_range():
    with pytest.raises(InvalidCoordinateError, match="cannot be NaN"):
        validate_coordinates(math.nan, 500.0)


def test_validate_coordinates_accepts_bounds():
    validate_coordinates(90, 180)
    validate_coordinates(-90, -180)
    validate_coordinates(41.0082, 28.9784)


def test_haversine_identity_and_symmetry():
    a = (41.0082, 28.9784)
    b = (39.9334, 32.8597)

    assert haversine_km(*a, *a) == 0
    assert haversine_km(*a, *b) == haversine_km(*b, *a)


def test_haversine_known_distance_istanbul_ankara():
    assert haversine_km(41.0082, 28.9784, 39.9334, 32.8597) == pytest.approx(350, abs=2)


def test_haversine_antipodal_points_are_half_circumference():
    assert haversine_km(0, 0, 0, 180) == pytest.approx(20015.09, abs=0.01)
    assert haversine_km(90, 0, -90, 0) == pytest.approx(20015.09, abs=0.01)


def test_haversine_crosses_date_line_without_wrapping():
    assert haversine_km(0, 179, 0, -179) == pytest.approx(222.39, abs=0.01)


def test_haversine_grows_with_angular_separation():
    distances = [haversine_km(0, 0, 0, lng) for lng in (1, 10, 45, 90, 135, 179)]
    assert distances == sorted(distances)
    assert all(math.isfinite(d) and 0 <= d <= 20015.09 for d in distances)


def test_haversine_rounds_to_two_decimals():
    distance = haversine_km(41.0082, 28.9784, 40.9833, 29.0167)
    assert distance == round(distance, 2)


def test_haversine_propagates_validation_errors():
    with pytest.raises(InvalidCoordinateError, match="Latitude must be between"):
        haversine_km(41.0, 29.0, 95.0, 29.0)


@pytest.mark.parametrize(
    "lat, lng, expected",
    [
        (41.0, 29.0, True),
        (0.0, 29.0, True),
        (41.0, 0.0, True),
        (0.0, 0.0, False),
        (math.nan, 29.0, False),
        (41.0, math.inf, False),
        (95.0, 29.0, False),
    ],
)
def test_is_geolocatable(lat, lng, expected):
    assert is_geolocatable(_pharmacy(lat, lng)) is expected
