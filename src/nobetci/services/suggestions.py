"""Alternative districts offered when a district lookup comes back empty."""

from __future__ import annotations

import logging

from .regions import RegionAggregator

logger = logging.getLogger(__name__)


def suggest_alternatives(aggregator: RegionAggregator, city: str, excluded_district: str, date: str) -> list[str]:
    """Districts of ``city`` with pharmacies on duty on ``date``.

    The district list only contains districts with on-duty records, so the
    empty district never shows up in it. Suggestions are advisory: a failed
    lookup yields an empty list instead of an error.
    """

    try:
        return aggregator.list_districts(city, date)
    except Exception as exc:
        logger.warning(f"Could not look up alternatives to '{excluded_district}' in '{city}': {exc}")
        return []
