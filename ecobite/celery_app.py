"""Celery application configuration."""

from celery import Celery

from ecobite.config import get_settings

settings = get_settings()

app = Celery(
    "ecobite",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["ecobite.tasks.verification_codes"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max per task
    task_soft_time_limit=240,  # 4 minutes soft limit
    beat_schedule={
        "purge-expired-verification-codes": {
            "task": "ecobite.tasks.verification_codes.purge_expired_verification_codes",
            "schedule": 3600.0,
        },
    },
)
