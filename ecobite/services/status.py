"""Freshness status derivation for inventory items.

Status is computed on every read from the expiry date and the persisted
state. Only the terminal "donated" state is stored.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from ecobite.models.enums import DisplayStatus, ItemState

NEAR_EXPIRY_DAYS = 3


@dataclass(frozen=True)
class Donated:
    """Item was donated; status no longer depends on the date."""


@dataclass(frozen=True)
class Derived:
    """Status follows the expiry date."""

    expiry_date: date


StatusSource = Donated | Derived


def status_from_date(expiry_date: date, today: date) -> DisplayStatus:
    """Classify an expiry date relative to today (calendar days, no time)."""
    diff_days = (expiry_date - today).days
    if diff_days < 0:
        return DisplayStatus.EXPIRED
    if diff_days <= NEAR_EXPIRY_DAYS:
        return DisplayStatus.NEAR_EXPIRY
    return DisplayStatus.AVAILABLE


def resolve_status(source: StatusSource, today: date) -> DisplayStatus:
    if isinstance(source, Donated):
        return DisplayStatus.DONATED
    return status_from_date(source.expiry_date, today)


def compute_display_status(
    expiry_date: date, persisted_state: ItemState | str, today: date
) -> DisplayStatus:
    """Derive the display status. Donated overrides any date."""
    if ItemState(persisted_state) == ItemState.DONATED:
        return DisplayStatus.DONATED
    return status_from_date(expiry_date, today)


def current_date() -> date:
    """Today's date in UTC, the one calendar used for every status computation."""
    return datetime.now(UTC).date()
