"""Inventory item model for perishable food tracking."""

from sqlalchemy import Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ecobite.database import Base
from ecobite.models.enums import ItemState
from ecobite.models.mixins import TimestampMixin


class InventoryItem(Base, TimestampMixin):
    """A perishable item. Items without an owner are shared with every user."""

    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    category = Column(String(20), nullable=False)  # "Refrigerated" | "Pantry" | "Frozen"
    expiry_date = Column(Date, nullable=False)
    state = Column(String(20), nullable=False, default=ItemState.NORMAL.value)

    # Relationships
    user = relationship("User", backref="inventory_items")

    @property
    def is_donated(self) -> bool:
        return self.state == ItemState.DONATED.value

    @property
    def status_source(self):
        """What the display status is derived from: Donated or Derived(expiry_date)."""
        from ecobite.services.status import Derived, Donated

        if self.is_donated:
            return Donated()
        return Derived(expiry_date=self.expiry_date)
