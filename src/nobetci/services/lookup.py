"""Request orchestration for every pharmacy lookup the API offers.

Each operation resolves the roster date afresh, fetches from the
repository (through the region aggregator where composite regions apply)
and either returns domain objects or raises one of the errors in
:mod:`nobetci.errors`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from ..config import settings
from ..data.pharmacy_repository import PharmacyRepository
from ..errors import (
    ClientInputError,
    DistrictNotFoundError,
    NoCitiesError,
    NoDistrictsError,
    NoOnDutyRecordsError,
    NoRosterDataError,
)
from ..models.domain import Pharmacy, RankedPharmacy
from . import geospatial
from .calendar import format_day_month, resolve_effective_date
from .ranking import rank_pharmacies
from .regions import DEFAULT_CATALOG, RegionAggregator, RegionCatalog
from .suggestions import suggest_alternatives
from .text import restore_turkish_spelling

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require(value: str | None, message: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ClientInputError(message)
    return cleaned


def validate_limit(limit: object) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= settings.nearby_max_limit:
        raise ClientInputError(invalid_limit_message())
    return limit


def invalid_limit_message() -> str:
    return f"Invalid limit: must be an integer between 1 and {settings.nearby_max_limit}"


class PharmacyLookupService:
    def __init__(
        self,
        repository: PharmacyRepository | None = None,
        catalog: RegionCatalog = DEFAULT_CATALOG,
        clock: Clock = _utc_now,
    ) -> None:
        self.repository = repository or PharmacyRepository()
        self.catalog = catalog
        self.aggregator = RegionAggregator(self.repository, catalog)
        self.clock = clock

    def effective_date(self) -> str:
        return resolve_effective_date(self.clock())

    def list_cities(self, country: str | None = None) -> list[str]:
        query_date = self.effective_date()
        cities = self.catalog.filter_cities(self.repository.list_cities(query_date), country)
        logger.info(f"{len(cities)} cities on duty for {query_date} (country={country!r})")
        if not cities:
            raise NoCitiesError()
        return cities

    def list_districts(self, city: str | None) -> list[str]:
        city = _require(city, "Missing required parameter: city is required")
        query_date = self.effective_date()
        districts = self.aggregator.list_districts(city, query_date)
        logger.info(f"{len(districts)} districts on duty in '{city}' for {query_date}")
        if not districts:
            raise NoDistrictsError(self.catalog.display_name(city))
        return districts

    def list_pharmacies(self, city: str | None, district: str | None) -> list[Pharmacy]:
        message = "Missing required parameters: city and district are required"
        city = _require(city, message)
        district = _require(district, message)
        query_date = self.effective_date()

        pharmacies = self.aggregator.list_pharmacies(city, query_date, restore_turkish_spelling(district))
        logger.info(f"{len(pharmacies)} pharmacies on duty in '{district}, {city}' for {query_date}")
        if not pharmacies:
            suggestions = suggest_alternatives(self.aggregator, city, district, query_date)
            raise DistrictNotFoundError(self.catalog.display_name(city), district, suggestions)
        return pharmacies

    def _on_duty(self) -> list[Pharmacy]:
        query_date = self.effective_date()
        pharmacies = self.repository.list_on_duty(query_date)
        logger.info(f"{len(pharmacies)} pharmacies on duty for {query_date}")
        if not pharmacies:
            raise NoOnDutyRecordsError()
        return pharmacies

    def find_closest(self, lat: float, lng: float) -> RankedPharmacy:
        geospatial.validate_coordinates(lat, lng)
        return rank_pharmacies(self._on_duty(), lat, lng, limit=1)[0]

    def find_nearby(self, lat: float, lng: float, limit: int) -> list[RankedPharmacy]:
        geospatial.validate_coordinates(lat, lng)
        validate_limit(limit)
        return rank_pharmacies(self._on_duty(), lat, lng, limit=limit)

    def list_geolocatable(self) -> list[Pharmacy]:
        """Every on-duty pharmacy that can be placed on a map."""

        pharmacies = [p for p in self._on_duty() if geospatial.is_geolocatable(p)]
        logger.info(f"{len(pharmacies)} on-duty pharmacies have usable coordinates")
        return pharmacies

    def last_update(self) -> dict:
        latest = self.repository.latest_roster_date()
        if not latest:
            raise NoRosterDataError()
        return {
            "last_date": latest,
            "formatted_date": format_day_month(latest),
            "timestamp": self.clock().isoformat(),
        }
