"""Notification records for inventory events."""

import logging

from sqlalchemy.orm import Session

from ecobite.models.notification import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    """Appends and lists notification records.

    Records are added to the caller's session and committed with the
    mutation that produced them.
    """

    def __init__(self, db: Session):
        self.db = db

    def record(self, user_id: int, title: str, message: str) -> Notification:
        notification = Notification(user_id=user_id, title=title, message=message)
        self.db.add(notification)
        return notification

    def list_for_user(self, user_id: int) -> list[Notification]:
        """All notifications for a user, newest first."""
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .all()
        )
