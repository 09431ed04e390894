"""Composite regions: several stored city labels selectable as one unit."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Sequence, TypeVar

from ..config import settings
from ..data.pharmacy_repository import PharmacyRepository
from ..errors import RepositoryError
from ..models.domain import Pharmacy
from .text import fold_ascii, sort_turkish, turkish_lower, turkish_sort_key

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CompositeRegion:
    key: str
    display_name: str
    aliases: tuple[str, ...]

    def contains(self, city: str) -> bool:
        needle = turkish_lower(city.strip())
        return any(turkish_lower(alias) == needle for alias in self.aliases)


class RegionCatalog:
    """Immutable lookup of composite regions by their folded key.

    ``home_key`` names the discriminator that selects every city outside
    the composite regions.
    """

    def __init__(self, regions: Iterable[CompositeRegion], home_key: str = "turkiye") -> None:
        self._regions: Mapping[str, CompositeRegion] = MappingProxyType(
            {fold_ascii(region.key): region for region in regions}
        )
        self.home_key = fold_ascii(home_key)

    def __iter__(self):
        return iter(self._regions.values())

    def get(self, label: str | None) -> CompositeRegion | None:
        if not label:
            return None
        return self._regions.get(fold_ascii(label))

    def expand(self, label: str) -> list[str]:
        """Alias list of a composite region, or ``[label]`` for a plain city."""

        region = self.get(label)
        if region is None:
            return [label.strip()]
        return list(region.aliases)

    def display_name(self, label: str) -> str:
        region = self.get(label)
        return region.display_name if region else label.strip()

    def is_composite_member(self, city: str) -> bool:
        return any(region.contains(city) for region in self._regions.values())

    def filter_cities(self, cities: Sequence[str], country: str | None) -> list[str]:
        """Keep the members of the selected composite region, or the non-members for the home key."""

        region = self.get(country)
        if region is not None:
            return [city for city in cities if region.contains(city)]
        if country and fold_ascii(country) == self.home_key:
            return [city for city in cities if not self.is_composite_member(city)]
        return list(cities)


# Northern Cyprus, stored under both accented and unaccented spellings.
CYPRUS = CompositeRegion(
    key="kibris",
    display_name="Kıbrıs",
    aliases=(
        "Kıbrıs",
        "Kibris",
        "Lefkoşa",
        "Lefkosa",
        "Girne",
        "Gazimağusa",
        "Gazimagusa",
        "Güzelyurt",
        "Guzelyurt",
        "İskele",
        "Iskele",
        "Lefke",
        "KKTC",
        "Kuzey Kıbrıs",
    ),
)

DEFAULT_CATALOG = RegionCatalog((CYPRUS,), home_key="turkiye")


class RegionAggregator:
    """Runs repository lookups over every alias of a composite region.

    Alias sub-queries run concurrently. A failing alias is logged and
    skipped; the aggregate only fails when every alias fails.
    """

    def __init__(
        self,
        repository: PharmacyRepository,
        catalog: RegionCatalog = DEFAULT_CATALOG,
        max_workers: int | None = None,
    ) -> None:
        self.repository = repository
        self.catalog = catalog
        self.max_workers = max_workers or settings.region_max_workers

    def expand_region(self, label: str) -> list[str]:
        return self.catalog.expand(label)

    def list_districts(self, city: str, date: str) -> list[str]:
        aliases = self.expand_region(city)
        if len(aliases) == 1:
            return self.repository.list_districts(aliases[0], date)

        results = self._fan_out(aliases, lambda alias: self.repository.list_districts(alias, date))
        merged: set[str] = set()
        for districts in results:
            merged.update(district.strip() for district in districts if district.strip())
        return sort_turkish(merged)

    def list_pharmacies(self, city: str, date: str, district: str | None = None) -> list[Pharmacy]:
        aliases = self.expand_region(city)
        if len(aliases) == 1:
            return self.repository.list_pharmacies(aliases[0], date, district)

        results = self._fan_out(aliases, lambda alias: self.repository.list_pharmacies(alias, date, district))
        seen: set[str] = set()
        merged: list[Pharmacy] = []
        for pharmacies in results:
            for pharmacy in pharmacies:
                if pharmacy.id in seen:
                    continue
                seen.add(pharmacy.id)
                merged.append(pharmacy)
        return sorted(merged, key=lambda p: turkish_sort_key(p.name))

    def _fan_out(self, aliases: Sequence[str], lookup: Callable[[str], T]) -> list[T]:
        """Run ``lookup`` for each alias; results come back in alias order."""

        outcomes: dict[str, T] = {}
        failures: dict[str, Exception] = {}
        workers = max(1, min(len(aliases), self.max_workers))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_alias = {executor.submit(lookup, alias): alias for alias in aliases}
            for future in as_completed(future_to_alias):
                alias = future_to_alias[future]
                try:
                    outcomes[alias] = future.result()
                except Exception as exc:
                    logger.warning(f"Region lookup for alias '{alias}' failed: {exc}")
                    failures[alias] = exc

        if not outcomes and failures:
            first = failures[next(alias for alias in aliases if alias in failures)]
            if isinstance(first, RepositoryError):
                raise first
            raise RepositoryError(f"All {len(aliases)} region lookups failed: {first}", cause=first) from first

        return [outcomes[alias] for alias in aliases if alias in outcomes]
