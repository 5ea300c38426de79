"""Celery tasks for verification code housekeeping."""

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from ecobite.celery_app import app as celery_app
from ecobite.config import get_settings
from ecobite.database import SessionLocal
from ecobite.services.otc import purge_expired_codes

logger = logging.getLogger(__name__)


@celery_app.task
def purge_expired_verification_codes() -> dict:
    """Delete verification codes older than the retention window.

    Runs hourly via celery-beat. Expired codes are already rejected at
    validation; this only keeps the table small.

    Returns:
        dict with the number of deleted codes
    """
    settings = get_settings()
    db: Session = SessionLocal()
    try:
        deleted = purge_expired_codes(
            db, timedelta(hours=settings.verification_code_retention_hours)
        )
        logger.info(f"Purged {deleted} verification codes")
        return {"deleted": deleted}
    finally:
        db.close()
