"""Parsing of raw query-string values.

Query values arrive as text and are converted here so that malformed input
is reported with the API's own messages rather than a framework error.
"""

from __future__ import annotations

from ..errors import ClientInputError, InvalidCoordinateError
from ..services.geospatial import validate_coordinates
from ..services.lookup import invalid_limit_message


def clean(value: str | None) -> str | None:
    """Trim a parameter; blank counts as absent."""

    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_coordinates(lat: str | None, lng: str | None) -> tuple[float, float]:
    lat, lng = clean(lat), clean(lng)
    if lat is None or lng is None:
        raise ClientInputError("Missing required parameters: lat and lng are required")
    try:
        latitude, longitude = float(lat), float(lng)
    except ValueError:
        raise InvalidCoordinateError("Latitude and longitude must be numbers") from None
    validate_coordinates(latitude, longitude)
    return latitude, longitude


def parse_limit(raw: str | None, default: int) -> int:
    raw = clean(raw)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ClientInputError(invalid_limit_message()) from None
