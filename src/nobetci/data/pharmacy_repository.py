"""Read access to the daily pharmacy roster stored in Supabase."""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Iterable

from ..config import settings
from ..db.supabase import get_supabase_client
from ..errors import RepositoryError
from ..models.domain import Pharmacy
from ..services.text import sort_turkish, turkish_sort_key

logger = logging.getLogger(__name__)

QueryFilter = Callable[[Any], Any]


def _coerce_coordinate(value: Any) -> float:
    """Parse a stored coordinate; anything absent or unparsable becomes 0.0."""

    if value is None or value == "":
        return 0.0
    try:
        parsed = float(str(value).strip().replace(",", "."))
    except (TypeError, ValueError):
        logger.debug(f"Unparsable coordinate value {value!r}, defaulting to 0.0")
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so labels match literally (case-insensitively)."""

    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def row_to_pharmacy(row: dict[str, Any]) -> Pharmacy:
    return Pharmacy(
        id=str(row["id"]),
        city=_text(row.get("city")),
        district=_text(row.get("district")),
        name=_text(row.get("pharmacy") or row.get("name")),
        address=_text(row.get("address")),
        phone=_text(row.get("phone")),
        date=_text(row.get("date")),
        latitude=_coerce_coordinate(row.get("latitude")),
        longitude=_coerce_coordinate(row.get("longitude")),
    )


def _distinct_labels(rows: Iterable[dict[str, Any]], column: str) -> list[str]:
    labels = {_text(row.get(column)) for row in rows}
    labels.discard("")
    return sort_turkish(labels)


class PharmacyRepository:
    """Filtered, read-only queries against the roster table.

    Every operation is scoped to a roster date. An empty result is returned
    as an empty list; only transport or storage failures raise
    :class:`RepositoryError`.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        table: str | None = None,
        page_size: int | None = None,
        max_rows: int | None = None,
    ) -> None:
        self._client = client
        self.table = table or settings.pharmacies_table
        self.page_size = page_size or settings.page_size
        self.max_rows = max_rows or settings.max_rows

    def _get_client(self) -> Any:
        client = self._client or get_supabase_client()
        if client is None:
            raise RepositoryError("Supabase is not configured")
        return client

    def _fetch(self, columns: str, filters: Iterable[QueryFilter], order: str, resource: str) -> list[dict[str, Any]]:
        """Read every matching row, one page at a time, up to ``max_rows``."""

        client = self._get_client()
        filters = list(filters)
        rows: list[dict[str, Any]] = []
        try:
            while len(rows) < self.max_rows:
                start = len(rows)
                end = min(start + self.page_size, self.max_rows) - 1
                query = client.table(self.table).select(columns)
                for apply_filter in filters:
                    query = apply_filter(query)
                response = query.order(order).range(start, end).execute()
                page = response.data or []
                rows.extend(page)
                if len(page) < end - start + 1:
                    break
        except Exception as exc:
            raise RepositoryError(f"Failed to query '{self.table}': {exc}", resource=resource, cause=exc) from exc

        if len(rows) >= self.max_rows:
            logger.warning(f"Roster query on '{self.table}' hit the {self.max_rows} row cap")
        return rows

    def _to_pharmacies(self, rows: Iterable[dict[str, Any]]) -> list[Pharmacy]:
        pharmacies: list[Pharmacy] = []
        for row in rows:
            try:
                pharmacies.append(row_to_pharmacy(row))
            except KeyError as e:
                logger.warning(f"Skipping roster row without {e}")
        return pharmacies

    def list_cities(self, date: str) -> list[str]:
        """Distinct cities with at least one record on ``date``."""

        rows = self._fetch("city", [lambda q: q.eq("date", date)], order="city", resource="cities")
        return _distinct_labels(rows, "city")

    def list_districts(self, city: str, date: str) -> list[str]:
        """Distinct districts of ``city`` (case-insensitive) on ``date``."""

        rows = self._fetch(
            "district",
            [lambda q: q.ilike("city", _escape_like(city)), lambda q: q.eq("date", date)],
            order="district",
            resource="districts",
        )
        return _distinct_labels(rows, "district")

    def list_pharmacies(self, city: str, date: str, district: str | None = None) -> list[Pharmacy]:
        """Records for a city, optionally narrowed to one district, ordered by name."""

        filters: list[QueryFilter] = [lambda q: q.ilike("city", _escape_like(city))]
        if district:
            filters.append(lambda q: q.ilike("district", _escape_like(district)))
        filters.append(lambda q: q.eq("date", date))

        rows = self._fetch("*", filters, order="pharmacy", resource="pharmacies")
        return sorted(self._to_pharmacies(rows), key=lambda p: turkish_sort_key(p.name))

    def list_on_duty(self, date: str) -> list[Pharmacy]:
        """Every record on duty on ``date``, in store order."""

        rows = self._fetch("*", [lambda q: q.eq("date", date)], order="id", resource="pharmacy")
        return self._to_pharmacies(rows)

    def latest_roster_date(self) -> str | None:
        """Most recent roster date present in the store, if any."""

        client = self._get_client()
        try:
            response = client.table(self.table).select("date").order("date", desc=True).limit(1).execute()
        except Exception as exc:
            raise RepositoryError(f"Failed to query '{self.table}': {exc}", resource="roster", cause=exc) from exc
        rows = response.data or []
        if not rows:
            return None
        return _text(rows[0].get("date")) or None
