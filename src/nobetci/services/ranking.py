"""Distance ranking of on-duty pharmacies around an origin point."""

from __future__ import annotations

from typing import Iterable

from ..errors import NoGeolocatableRecordsError
from ..models.domain import Pharmacy, RankedPharmacy
from . import geospatial


def rank_pharmacies(
    pharmacies: Iterable[Pharmacy],
    origin_lat: float,
    origin_lng: float,
    limit: int | None = None,
) -> list[RankedPharmacy]:
    """Return geolocatable pharmacies ordered by distance from the origin.

    Records without usable coordinates are dropped before any distance is
    computed. Equal distances keep their input order. Raises
    NoGeolocatableRecordsError when nothing is left to rank.
    """

    candidates = [pharmacy for pharmacy in pharmacies if geospatial.is_geolocatable(pharmacy)]
    if not candidates:
        raise NoGeolocatableRecordsError()

    ranked = [
        RankedPharmacy(
            pharmacy=pharmacy,
            distance_km=geospatial.haversine_km(origin_lat, origin_lng, pharmacy.latitude, pharmacy.longitude),
        )
        for pharmacy in candidates
    ]
    ranked.sort(key=lambda candidate: candidate.distance_km)
    if limit is not None:
        return ranked[:limit]
    return ranked
