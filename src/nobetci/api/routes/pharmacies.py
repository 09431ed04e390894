"""On-duty pharmacy endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...config import settings
from ...schemas.pharmacies import (
    AllPharmaciesResponse,
    ApiResponse,
    LastUpdateModel,
    PharmacyModel,
    RankedPharmacyModel,
)
from ...services.lookup import PharmacyLookupService
from ..params import clean, parse_coordinates, parse_limit

router = APIRouter(tags=["pharmacies"])


def get_lookup_service() -> PharmacyLookupService:
    return PharmacyLookupService()


@router.get(
    "/cities",
    response_model=ApiResponse[List[str]],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def list_cities(
    country: str | None = Query(default=None, description="Optional region filter: 'kibris' or 'turkiye'"),
    service: PharmacyLookupService = Depends(get_lookup_service),
) -> ApiResponse[List[str]]:
    return ApiResponse[List[str]](success=True, data=service.list_cities(clean(country)))


@router.get(
    "/districts",
    response_model=ApiResponse[List[str]],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def list_districts(
    city: str | None = Query(default=None, description="City or composite region"),
    service: PharmacyLookupService = Depends(get_lookup_service),
) -> ApiResponse[List[str]]:
    return ApiResponse[List[str]](success=True, data=service.list_districts(city))


@router.get(
    "/pharmacies",
    response_model=ApiResponse[List[PharmacyModel]],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def list_pharmacies(
    city: str | None = Query(default=None, description="City or composite region"),
    district: str | None = Query(default=None, description="District name or ASCII slug"),
    service: PharmacyLookupService = Depends(get_lookup_service),
) -> ApiResponse[List[PharmacyModel]]:
    pharmacies = service.list_pharmacies(city, district)
    return ApiResponse[List[PharmacyModel]](
        success=True,
        data=[PharmacyModel.from_domain(pharmacy) for pharmacy in pharmacies],
    )


@router.get(
    "/closest",
    response_model=ApiResponse[RankedPharmacyModel],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def closest_pharmacy(
    lat: str | None = Query(default=None, description="Latitude in decimal degrees"),
    lng: str | None = Query(default=None, description="Longitude in decimal degrees"),
    service: PharmacyLookupService = Depends(get_lookup_service),
) -> ApiResponse[RankedPharmacyModel]:
    latitude, longitude = parse_coordinates(lat, lng)
    closest = service.find_closest(latitude, longitude)
    return ApiResponse[RankedPharmacyModel](success=True, data=RankedPharmacyModel.from_ranked(closest))


@router.get(
    "/nearby",
    response_model=ApiResponse[List[RankedPharmacyModel]],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def nearby_pharmacies(
    lat: str | None = Query(default=None, description="Latitude in decimal degrees"),
    lng: str | None = Query(default=None, description="Longitude in decimal degrees"),
    limit: str | None = Query(default=None, description="Number of results (1-20, default 5)"),
    service: PharmacyLookupService = Depends(get_lookup_service),
) -> ApiResponse[List[RankedPharmacyModel]]:
    latitude, longitude = parse_coordinates(lat, lng)
    count = parse_limit(limit, default=settings.nearby_default_limit)
    nearby = service.find_nearby(latitude, longitude, count)
    return ApiResponse[List[RankedPharmacyModel]](
        success=True,
        data=[RankedPharmacyModel.from_ranked(candidate) for candidate in nearby],
    )


@router.get(
    "/all-pharmacies",
    response_model=AllPharmaciesResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def all_pharmacies(service: PharmacyLookupService = Depends(get_lookup_service)) -> AllPharmaciesResponse:
    """Every on-duty pharmacy with usable coordinates, for the map view."""
    pharmacies = service.list_geolocatable()
    return AllPharmaciesResponse(
        success=True,
        data=[PharmacyModel.from_domain(pharmacy) for pharmacy in pharmacies],
        total=len(pharmacies),
    )


@router.get(
    "/last-update",
    response_model=ApiResponse[LastUpdateModel],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def last_update(service: PharmacyLookupService = Depends(get_lookup_service)) -> ApiResponse[LastUpdateModel]:
    return ApiResponse[LastUpdateModel](success=True, data=LastUpdateModel(**service.last_update()))
