"""Celery background tasks."""

import asyncio
import logging
from datetime import date

from celery import shared_task

from nestquarter.database import close_db, get_db_context
from nestquarter.services.booking_service import booking_service

logger = logging.getLogger(__name__)


def run_async(coro):
    """Run async function in sync context."""
    return asyncio.run(coro)


# ==================== BOOKING TASKS ====================


@shared_task(bind=True, max_retries=3)
def complete_finished_bookings(self, today: str | None = None):
    """Complete confirmed bookings whose checkout plus grace period has passed.

    Runs daily at ``settings.completion_sweep_hour`` (UTC).

    Args:
        today: ISO date to sweep as of (defaults to the current UTC date)
    """
    try:
        booking_ids = run_async(_complete_finished_bookings(date.fromisoformat(today) if today else None))
    except Exception as exc:
        logger.exception("Completion sweep failed, retrying")
        raise self.retry(exc=exc, countdown=300) from exc
    return {"status": "success", "completed": len(booking_ids), "booking_ids": booking_ids}


async def _complete_finished_bookings(today: date | None = None) -> list[str]:
    try:
        async with get_db_context() as db:
            completed = await booking_service.complete_due_bookings(db, today)
            return [str(b.id) for b in completed]
    finally:
        # Pooled connections are bound to this event loop
        await close_db()
