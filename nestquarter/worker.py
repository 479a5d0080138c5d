"""Celery worker configuration.

Periodic jobs:
- Completing confirmed bookings once their checkout has passed
"""

from celery import Celery
from celery.schedules import crontab

from nestquarter.config import settings

# Create Celery app
celery_app = Celery(
    "nestquarter_tasks",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["nestquarter.tasks"],
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_time_limit=300,  # 5 minutes max
    task_soft_time_limit=240,

    # Worker settings
    worker_prefetch_multiplier=1,

    # Results expire after 1 hour
    result_expires=3600,

    # Retry settings
    task_default_retry_delay=60,
    task_max_retries=3,

    beat_schedule={
        # Complete finished stays daily; completion makes bookings payout-eligible
        "complete-finished-bookings": {
            "task": "nestquarter.tasks.complete_finished_bookings",
            "schedule": crontab(hour=settings.completion_sweep_hour, minute=0),
        },
    },
)


if __name__ == "__main__":
    celery_app.start()
