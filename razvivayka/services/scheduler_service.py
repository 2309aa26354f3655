"""
razvivayka/services/scheduler_service.py

Purpose: Daily reminder dispatch

- APScheduler interval job scans all users once per minute
- Matches each user's HH:MM against their city's wall-clock time
- Sends one random catalog message per due user
- A second job expires temporary messages
"""

import random
from datetime import datetime
from typing import List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from telegram.error import TelegramError

from razvivayka.core.logging import get_logger, LogContext
from razvivayka.models.user import User
from razvivayka.services.user_service import list_users
from razvivayka.utils.message_utils import pick_message
from razvivayka.utils.time_utils import utc_now, local_hhmm

logger = get_logger(__name__)

REMINDER_JOB_ID = "reminder_scan"
EPHEMERAL_JOB_ID = "ephemeral_flush"


def is_due(user: User, now: datetime) -> bool:
    """
    True if the user's reminder fires in the minute containing `now` (UTC).
    """
    if not (user.enabled and user.has_started and user.chat_id is not None):
        return False
    return user.time == local_hhmm(now, user.timezone)


def due_users(users: List[User], now: datetime) -> List[User]:
    """
    Filters users whose reminder is due at `now`.
    """
    return [user for user in users if is_due(user, now)]


class NotificationScheduler:
    """
    Owns the AsyncIOScheduler and the per-minute reminder scan.
    """

    def __init__(
        self,
        ctx,
        interval_seconds: int = 60,
        flush_seconds: int = 1,
        rng: Optional[random.Random] = None,
    ):
        self.ctx = ctx
        self.interval_seconds = interval_seconds
        self.flush_seconds = flush_seconds
        self.rng = rng
        self.scheduler = AsyncIOScheduler(timezone="UTC")

    def start(self):
        """
        Registers the jobs and starts the scheduler on the running loop.
        """
        # Ticks may overlap; missed ticks are not replayed.
        self.scheduler.add_job(
            self.tick,
            IntervalTrigger(seconds=self.interval_seconds),
            id=REMINDER_JOB_ID,
            replace_existing=True,
            max_instances=3,
            coalesce=True,
            misfire_grace_time=30,
        )
        self.scheduler.add_job(
            self.flush_ephemeral,
            IntervalTrigger(seconds=self.flush_seconds),
            id=EPHEMERAL_JOB_ID,
            replace_existing=True,
            coalesce=True,
        )
        self.scheduler.start()
        logger.info(f"⏰ Scheduler started (scan every {self.interval_seconds}s)")

    def shutdown(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")

    async def tick(self, now: Optional[datetime] = None) -> List[str]:
        """
        One reminder scan.

        Args:
            now: Scan instant (UTC); defaults to the current time

        Returns:
            IDs of users a reminder was sent to
        """
        now = now or utc_now()
        users = await list_users(self.ctx.store)
        notified = []

        for user in due_users(users, now):
            with LogContext(user_id=user.user_id, chat_id=user.chat_id):
                text = pick_message(user.reminder_type, self.rng)
                try:
                    await self.ctx.transport.send_message(user.chat_id, text)
                except TelegramError as e:
                    logger.error(f"❌ Failed to send reminder: {e}")
                    continue
                notified.append(user.user_id)
                logger.info(f"🔔 Reminder sent at {user.time} ({user.timezone})")

        if notified:
            logger.info(f"Reminder scan {now:%H:%M} UTC: {len(notified)} sent")
        return notified

    async def flush_ephemeral(self) -> int:
        return await self.ctx.ephemeral.flush(self.ctx.transport)
