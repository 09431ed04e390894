"""Domain models for roster records."""

from dataclasses import asdict, dataclass


@dataclass(slots=True, frozen=True)
class Pharmacy:
    """A single pharmacy's on-duty entry for one calendar date."""

    id: str
    city: str
    district: str
    name: str
    address: str
    phone: str
    date: str
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class RankedPharmacy:
    """A roster record annotated with its distance from a query origin."""

    pharmacy: Pharmacy
    distance_km: float

    def to_dict(self) -> dict:
        payload = self.pharmacy.to_dict()
        payload["distance_km"] = self.distance_km
        return payload
