from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Callable

import pytest

ROSTER_DATE = "2025-01-20"
# 15:00 in Istanbul, after the cutoff, so the roster date is ROSTER_DATE
FIXED_NOW = datetime(2025, 1, 20, 12, 0, tzinfo=timezone.utc)


def _unescape_like(pattern: str) -> str:
    return pattern.replace("\\%", "%").replace("\\_", "_").replace("\\\\", "\\")


class FakeQuery:
    """Mimics the subset of the postgrest query builder the repository uses."""

    def __init__(self, store: "FakeSupabase", table: str) -> None:
        self.store = store
        self.table = table
        self.columns = "*"
        self.filters: list[tuple[str, str, Any]] = []
        self.order_by: tuple[str, bool] | None = None
        self.window: tuple[int, int] | None = None
        self.max_rows: int | None = None

    def select(self, columns: str, **_: Any) -> "FakeQuery":
        self.columns = columns
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(("eq", column, value))
        return self

    def ilike(self, column: str, pattern: str) -> "FakeQuery":
        self.filters.append(("ilike", column, _unescape_like(pattern)))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def range(self, start: int, end: int) -> "FakeQuery":
        self.window = (start, end)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self.max_rows = count
        return self

    def _matches(self, row: dict) -> bool:
        for kind, column, value in self.filters:
            cell = row.get(column)
            if kind == "eq" and cell != value:
                return False
            if kind == "ilike" and (cell is None or str(cell).lower() != str(value).lower()):
                return False
        return True

    def execute(self) -> SimpleNamespace:
        self.store.queries.append(self)
        if self.store.fail_when and self.store.fail_when(self):
            raise ConnectionError("store unavailable")

        rows = [row for row in self.store.rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            rows.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
        if self.window:
            start, end = self.window
            rows = rows[start : end + 1]
        if self.max_rows is not None:
            rows = rows[: self.max_rows]
        if self.columns != "*":
            wanted = [column.strip() for column in self.columns.split(",")]
            rows = [{column: row.get(column) for column in wanted} for row in rows]
        return SimpleNamespace(data=rows)

    def filter_value(self, column: str) -> Any:
        for _, name, value in self.filters:
            if name == column:
                return value
        return None


class FakeSupabase:
    def __init__(self, rows: list[dict] | None = None, fail_when: Callable[[FakeQuery], bool] | None = None) -> None:
        self.rows = list(rows or [])
        self.fail_when = fail_when
        self.queries: list[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


def make_row(
    pid: str,
    city: str = "Istanbul",
    district: str = "Kadıköy",
    lat: Any = 40.9833,
    lng: Any = 29.0167,
    name: str | None = None,
    date: str = ROSTER_DATE,
) -> dict:
    return {
        "id": pid,
        "city": city,
        "district": district,
        "pharmacy": name or f"Eczane {pid}",
        "address": f"Adres {pid}",
        "phone": "0216 000 00 00",
        "date": date,
        "latitude": lat,
        "longitude": lng,
    }


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW
