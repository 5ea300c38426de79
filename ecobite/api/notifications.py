"""Notification API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ecobite.api.dependencies import CurrentIdentity, get_notification_service
from ecobite.schemas.notification import NotificationResponse
from ecobite.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
def list_notifications(
    identity: CurrentIdentity,
    notifications: Annotated[NotificationService, Depends(get_notification_service)],
):
    """List the user's notifications, newest first."""
    return notifications.list_for_user(identity.id)
