"""Inventory item schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from ecobite.models.enums import DisplayStatus


class ItemDraft(BaseModel):
    """Fields submitted when creating or updating an item.

    Only types are enforced here; business rules live in
    ``inventory_service.validate_item``.
    """

    name: str = Field(..., max_length=255)
    quantity: int = Field(..., strict=True)
    category: str
    expiry_date: date


class ItemResponse(BaseModel):
    """Inventory item with its computed display status."""

    id: int
    user_id: int | None
    name: str
    quantity: int
    category: str
    expiry_date: date
    status: DisplayStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
