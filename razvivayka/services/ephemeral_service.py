"""
razvivayka/services/ephemeral_service.py

Purpose: Scheduled deletion of temporary chat messages

- Confirmation toasts and test notifications expire after a few seconds
- Entries are kept in a min-heap keyed by delete time
- A periodic flush deletes everything that is due
"""

import heapq
import itertools
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from razvivayka.core.logging import get_logger
from razvivayka.utils.time_utils import utc_now

logger = get_logger(__name__)


@dataclass(order=True)
class EphemeralMessage:
    delete_at: datetime
    seq: int
    chat_id: int = field(compare=False)
    message_id: int = field(compare=False)


class EphemeralMessageQueue:
    """
    Queue of (delete_at, chat_id, message_id) entries.
    """

    def __init__(self):
        self._heap: List[EphemeralMessage] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def schedule(self, chat_id: int, message_id: int, ttl_seconds: float, now: Optional[datetime] = None) -> EphemeralMessage:
        """
        Queues a message for deletion ttl_seconds from now.
        """
        now = now or utc_now()
        entry = EphemeralMessage(
            delete_at=now + timedelta(seconds=ttl_seconds),
            seq=next(self._counter),
            chat_id=chat_id,
            message_id=message_id,
        )
        heapq.heappush(self._heap, entry)
        return entry

    def pop_due(self, now: Optional[datetime] = None) -> List[EphemeralMessage]:
        """
        Removes and returns every entry whose delete time has passed.
        """
        now = now or utc_now()
        due = []
        while self._heap and self._heap[0].delete_at <= now:
            due.append(heapq.heappop(self._heap))
        return due

    def drain(self) -> List[EphemeralMessage]:
        """
        Removes and returns all entries regardless of delete time.
        """
        entries = sorted(self._heap)
        self._heap.clear()
        return entries

    async def flush(self, transport, now: Optional[datetime] = None) -> int:
        """
        Deletes every due message through the transport.

        Returns:
            Number of entries processed
        """
        due = self.pop_due(now)
        for entry in due:
            await transport.delete_message(entry.chat_id, entry.message_id)
        if due:
            logger.debug(f"🧹 Expired {len(due)} temporary message(s)")
        return len(due)

    async def flush_all(self, transport) -> int:
        """
        Deletes every queued message; used on shutdown.
        """
        entries = self.drain()
        for entry in entries:
            await transport.delete_message(entry.chat_id, entry.message_id)
        return len(entries)
