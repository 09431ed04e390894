"""Pharmacy API schemas."""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

from ..models.domain import Pharmacy, RankedPharmacy

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


class PharmacyModel(BaseModel):
    id: str
    city: str
    district: str
    name: str
    address: str
    phone: str
    date: str
    latitude: float
    longitude: float

    @classmethod
    def from_domain(cls, pharmacy: Pharmacy) -> "PharmacyModel":
        return cls(**pharmacy.to_dict())


class RankedPharmacyModel(PharmacyModel):
    distance_km: float

    @classmethod
    def from_ranked(cls, ranked: RankedPharmacy) -> "RankedPharmacyModel":
        return cls(**ranked.to_dict())


class AllPharmaciesResponse(ApiResponse[List[PharmacyModel]]):
    total: int = 0


class LastUpdateModel(BaseModel):
    last_date: str
    formatted_date: str
    timestamp: str
