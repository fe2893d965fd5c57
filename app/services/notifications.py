from __future__ import annotations

import asyncio
import logging
from typing import Protocol, Set

from app.schemas.review import AdminNotification

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    async def notify(self, event: AdminNotification) -> None:
        ...


class NotificationDispatcher:
    """Runs operator notifications as fire-and-forget tasks.

    Delivery failures are logged and discarded; callers never observe them.
    """

    def __init__(self, notifier: Notifier) -> None:
        self._notifier = notifier
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def dispatch(self, event: AdminNotification) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self._deliver(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver(self, event: AdminNotification) -> None:
        try:
            await self._notifier.notify(event)
        except Exception:
            logger.exception("Failed to deliver %s notification", event.type)

    async def drain(self) -> None:
        """Wait for in-flight notifications, used on shutdown."""

        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
