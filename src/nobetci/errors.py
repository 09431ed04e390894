"""Error kinds raised by the lookup services.

Every failure a request can end in is one of the classes below. The HTTP
layer maps them to a status code through ``status_code`` and renders
``message`` to the client, except for server-side errors whose details stay
in the logs.
"""

from __future__ import annotations


class PharmacyLookupError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(PharmacyLookupError):
    """Missing, blank or malformed request input."""

    status_code = 400


class InvalidCoordinateError(ClientInputError):
    """Coordinates rejected by the validator; the message is part of the API contract."""


class NotFoundError(PharmacyLookupError):
    """A well-formed query matched no data."""

    status_code = 404


class NoCitiesError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("No cities with on-duty pharmacies found for today")


class NoDistrictsError(NotFoundError):
    def __init__(self, city: str) -> None:
        super().__init__(f"No districts with on-duty pharmacies found for {city}")
        self.city = city


class NoOnDutyRecordsError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("No on-duty pharmacies found for today")


class NoGeolocatableRecordsError(NotFoundError):
    """Somebody is on duty but none of the records carry usable coordinates."""

    def __init__(self) -> None:
        super().__init__("No on-duty pharmacies with valid coordinates found for today")


class DistrictNotFoundError(NotFoundError):
    """No records for a district; the message lists the districts that do have some."""

    def __init__(self, city: str, district: str, suggestions: list[str]) -> None:
        message = f"No on-duty pharmacies found in {district}, {city}. "
        if suggestions:
            message += f"Available districts in {city}: {', '.join(suggestions)}"
        else:
            message += f"No other districts available in {city} for today."
        super().__init__(message)
        self.city = city
        self.district = district
        self.suggestions = suggestions


class NoRosterDataError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("No roster data available")


class RepositoryError(PharmacyLookupError):
    """The roster store could not be reached or returned unusable data.

    ``resource`` names what was being fetched and is the only part that
    reaches the client.
    """

    status_code = 500

    def __init__(self, message: str, resource: str = "pharmacy", cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.resource = resource
        self.cause = cause

    @property
    def public_message(self) -> str:
        return f"Database error occurred while fetching {self.resource} data"
