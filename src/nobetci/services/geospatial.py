"""Geospatial helper functions."""

from __future__ import annotations

import math
from numbers import Real

from ..errors import InvalidCoordinateError
from ..models.domain import Pharmacy

EARTH_RADIUS_KM = 6371.0


def validate_coordinates(lat: object, lng: object) -> None:
    """Raise InvalidCoordinateError unless (lat, lng) is a usable coordinate.

    Checks run in a fixed order and the first failure wins; the messages are
    returned to API clients verbatim.
    """

    if not _is_number(lat) or not _is_number(lng):
        raise InvalidCoordinateError("Latitude and longitude must be numbers")
    if math.isnan(lat) or math.isnan(lng):
        raise InvalidCoordinateError("Latitude and longitude cannot be NaN")
    if lat < -90 or lat > 90:
        raise InvalidCoordinateError("Latitude must be between -90 and 90 degrees")
    if lng < -180 or lng > 180:
        raise InvalidCoordinateError("Longitude must be between -180 and 180 degrees")


def _is_number(value: object) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, Real) and not isinstance(value, bool)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula.

    Both points are validated first. The result is rounded to two decimals.
    """

    validate_coordinates(lat1, lon1)
    validate_coordinates(lat2, lon2)

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 2)


def is_geolocatable(pharmacy: Pharmacy) -> bool:
    """True when the record carries finite, in-range coordinates other than (0, 0)."""

    lat, lng = pharmacy.latitude, pharmacy.longitude
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    if lat == 0 and lng == 0:
        return False
    return -90 <= lat <= 90 and -180 <= lng <= 180
