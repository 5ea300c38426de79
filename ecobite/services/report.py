"""Inventory report aggregation."""

from collections.abc import Iterable
from datetime import date

from ecobite.models.enums import Category, DisplayStatus
from ecobite.models.inventory import InventoryItem
from ecobite.schemas.report import ReportSummary
from ecobite.services.status import resolve_status

CATEGORY_COUNTERS = {c.value for c in Category}

STATUS_COUNTERS = {
    DisplayStatus.DONATED: "Donated",
    DisplayStatus.EXPIRED: "Expired",
    DisplayStatus.NEAR_EXPIRY: "NearExpiry",
    DisplayStatus.AVAILABLE: "Available",
}


def summarize(items: Iterable[InventoryItem], today: date) -> ReportSummary:
    """Count items per category and per display status in one pass."""
    counts = dict.fromkeys(ReportSummary.model_fields, 0)

    for item in items:
        if item.category in CATEGORY_COUNTERS:
            counts[item.category] += 1
        counts[STATUS_COUNTERS[resolve_status(item.status_source, today)]] += 1
        counts["total"] += 1

    return ReportSummary(**counts)
