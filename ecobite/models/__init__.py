"""SQLAlchemy models."""

from ecobite.models.inventory import InventoryItem
from ecobite.models.notification import Notification
from ecobite.models.user import User
from ecobite.models.verification_code import VerificationCode

__all__ = [
    "User",
    "InventoryItem",
    "VerificationCode",
    "Notification",
]
