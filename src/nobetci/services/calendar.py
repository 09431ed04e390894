"""Roster calendar: which day's duty list applies right now."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from ..config import settings

logger = logging.getLogger(__name__)


def resolve_effective_date(
    now: datetime | None = None,
    *,
    tz_name: str | None = None,
    cutoff_hour: int | None = None,
) -> str:
    """Return the ``YYYY-MM-DD`` roster date in effect at ``now``.

    A roster published for a day only takes effect at ``cutoff_hour`` local
    time, so before that hour the previous day's roster is still on duty.
    Naive datetimes are taken to be UTC.
    """

    tz = ZoneInfo(tz_name or settings.timezone)
    cutoff = settings.cutoff_hour if cutoff_hour is None else cutoff_hour

    instant = now or datetime.now(timezone.utc)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)

    local = instant.astimezone(tz)
    roster_day = local.date()
    if local.hour < cutoff:
        roster_day -= timedelta(days=1)

    effective = roster_day.isoformat()
    logger.debug(f"Resolved roster date {effective} for local time {local.isoformat()}")
    return effective


_TURKISH_MONTHS = (
    "Ocak",
    "Şubat",
    "Mart",
    "Nisan",
    "Mayıs",
    "Haziran",
    "Temmuz",
    "Ağustos",
    "Eylül",
    "Ekim",
    "Kasım",
    "Aralık",
)


def format_day_month(iso_date: str) -> str:
    """``"2025-10-19"`` -> ``"19 Ekim"``."""

    day = date.fromisoformat(iso_date)
    return f"{day.day} {_TURKISH_MONTHS[day.month - 1]}"
