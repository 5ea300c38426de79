"""Enums for model fields."""

from enum import Enum


class Category(str, Enum):
    """Storage categories for inventory items."""

    REFRIGERATED = "Refrigerated"
    PANTRY = "Pantry"
    FROZEN = "Frozen"


class ItemState(str, Enum):
    """Persisted state of an inventory item. DONATED is terminal."""

    NORMAL = "normal"
    DONATED = "donated"


class DisplayStatus(str, Enum):
    """Status shown to clients, derived at read time."""

    EXPIRED = "expired"
    NEAR_EXPIRY = "near_expiry"
    AVAILABLE = "available"
    DONATED = "donated"
