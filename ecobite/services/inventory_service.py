"""Inventory item lifecycle: validation, create/update/delete and donation."""

import logging
from datetime import date

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ecobite.errors import AlreadyDonatedError, NotFoundError, ValidationError
from ecobite.models.enums import Category, ItemState
from ecobite.models.inventory import InventoryItem
from ecobite.schemas.inventory import ItemDraft
from ecobite.services.notification_service import NotificationService
from ecobite.services.status import current_date

logger = logging.getLogger(__name__)

ALLOWED_CATEGORIES = {c.value for c in Category}

# Largest value the INTEGER column holds on every supported database
MAX_QUANTITY = 2**31 - 1


def validate_item(draft: ItemDraft, today: date) -> str | None:
    """Return a field-specific error message, or None if the draft is valid."""
    if not draft.name.strip():
        return "Name is required"
    if draft.quantity <= 0:
        return "Quantity must be a positive integer"
    if draft.quantity > MAX_QUANTITY:
        return f"Quantity must be at most {MAX_QUANTITY}"
    if draft.category not in ALLOWED_CATEGORIES:
        return "Category must be one of: Refrigerated, Pantry, Frozen"
    if draft.expiry_date < today:
        return "Expiry must be today or later"
    return None


def visible_to(user_id: int):
    """Filter for items a user may see: their own plus shared (ownerless) ones."""
    return or_(InventoryItem.user_id == user_id, InventoryItem.user_id.is_(None))


class InventoryService:
    """Service for inventory item operations.

    Every mutating method commits its own transaction, including the
    notification it records.
    """

    def __init__(self, db: Session, notifications: NotificationService | None = None):
        self.db = db
        self.notifications = notifications or NotificationService(db)

    def _check(self, draft: ItemDraft) -> None:
        error = validate_item(draft, current_date())
        if error:
            raise ValidationError(error)

    def _notify(self, user_id: int, title: str, message: str) -> None:
        self.notifications.record(user_id, title, message)

    def list_items(self, user_id: int) -> list[InventoryItem]:
        """Visible items ordered by soonest expiry."""
        return (
            self.db.query(InventoryItem)
            .filter(visible_to(user_id))
            .order_by(InventoryItem.expiry_date.asc(), InventoryItem.id.asc())
            .all()
        )

    def find_item(self, item_id: int, user_id: int) -> InventoryItem | None:
        return (
            self.db.query(InventoryItem)
            .filter(InventoryItem.id == item_id, visible_to(user_id))
            .first()
        )

    def get_item(self, item_id: int, user_id: int) -> InventoryItem:
        item = self.find_item(item_id, user_id)
        if item is None:
            raise NotFoundError()
        return item

    def create(self, owner_id: int, draft: ItemDraft) -> InventoryItem:
        self._check(draft)

        name = draft.name.strip()
        item = InventoryItem(
            user_id=owner_id,
            name=name,
            quantity=draft.quantity,
            category=draft.category,
            expiry_date=draft.expiry_date,
            state=ItemState.NORMAL.value,
        )
        self.db.add(item)
        self._notify(owner_id, "New Item Added", f'You added "{name}" ({draft.quantity})')
        self.db.commit()
        self.db.refresh(item)

        logger.info(f"User {owner_id} created item {item.id}")
        return item

    def update(self, item_id: int, owner_id: int, draft: ItemDraft) -> InventoryItem | None:
        """Overwrite an item's fields.

        Returns None when the item is missing or not visible to the user.
        Donated items are returned unchanged.
        """
        self._check(draft)

        updated = (
            self.db.query(InventoryItem)
            .filter(
                InventoryItem.id == item_id,
                visible_to(owner_id),
                InventoryItem.state != ItemState.DONATED.value,
            )
            .update(
                {
                    InventoryItem.name: draft.name.strip(),
                    InventoryItem.quantity: draft.quantity,
                    InventoryItem.category: draft.category,
                    InventoryItem.expiry_date: draft.expiry_date,
                },
                synchronize_session=False,
            )
        )
        self.db.commit()

        if updated:
            logger.info(f"User {owner_id} updated item {item_id}")
        return self.find_item(item_id, owner_id)

    def delete(self, item_id: int, owner_id: int) -> bool:
        """Remove an item. Missing or foreign items are treated as already gone."""
        deleted = (
            self.db.query(InventoryItem)
            .filter(InventoryItem.id == item_id, visible_to(owner_id))
            .delete(synchronize_session=False)
        )
        if deleted:
            self._notify(owner_id, "Item Deleted", "You deleted an item from your inventory")
        self.db.commit()

        if deleted:
            logger.info(f"User {owner_id} deleted item {item_id}")
        return bool(deleted)

    def donate(self, item_id: int, owner_id: int) -> InventoryItem:
        """Move an item to the terminal donated state.

        The transition is a single conditional UPDATE, so of two concurrent
        calls exactly one changes the row and records a notification.

        Raises:
            NotFoundError: the item is missing or not visible
            AlreadyDonatedError: the item was donated before
        """
        donated = (
            self.db.query(InventoryItem)
            .filter(
                InventoryItem.id == item_id,
                visible_to(owner_id),
                InventoryItem.state != ItemState.DONATED.value,
            )
            .update({InventoryItem.state: ItemState.DONATED.value}, synchronize_session=False)
        )

        if not donated:
            self.db.rollback()
            if self.find_item(item_id, owner_id) is None:
                raise NotFoundError()
            raise AlreadyDonatedError()

        self._notify(owner_id, "Item Donated", "You donated an inventory item")
        self.db.commit()

        logger.info(f"User {owner_id} donated item {item_id}")
        return self.get_item(item_id, owner_id)
