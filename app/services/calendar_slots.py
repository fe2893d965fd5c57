from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict
from zoneinfo import ZoneInfo

from app.clients.base import RecordStore
from app.schemas.calendar import (
    CalendarSlot,
    CalendarSlotListResponse,
    CalendarSlotResponse,
    CalendarSlotUpdateRequest,
)
from app.services.exceptions import InvalidSlotError, NotFoundError

logger = logging.getLogger(__name__)

AWAY_TITLE = "Away - Not Available"
AWAY_DESCRIPTION = "Admin is away/unavailable"
BUSY_TITLE = "Busy - Admin Block"
BUSY_DESCRIPTION = "Time blocked by admin"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_utc_iso(date: str, time: str, tz: ZoneInfo) -> str:
    try:
        local = datetime.strptime(f"{date}T{time}", "%Y-%m-%dT%H:%M")
    except ValueError as exc:
        raise InvalidSlotError(f"Invalid date or time: {date} {time}", cause=exc) from exc
    return local.replace(tzinfo=tz).astimezone(timezone.utc).isoformat()


def build_slot_patch(
    request: CalendarSlotUpdateRequest, *, tz: ZoneInfo, now: str
) -> Dict[str, Any]:
    start = _to_utc_iso(request.date, request.start_time, tz)
    end = _to_utc_iso(request.date, request.end_time, tz)
    if datetime.fromisoformat(end) <= datetime.fromisoformat(start):
        raise InvalidSlotError("End time must be after start time")

    reason = (request.reason or "").strip() or None
    if request.away_status:
        title, description = AWAY_TITLE, AWAY_DESCRIPTION
    else:
        title = reason or BUSY_TITLE
        description = reason or BUSY_DESCRIPTION
    return {
        "title": title,
        "description": description,
        "start_time": start,
        "end_time": end,
        "updated_at": now,
    }


class CalendarSlotService:
    """Admin maintenance of blocked slots on the booking calendar."""

    def __init__(
        self,
        store: RecordStore,
        *,
        table: str = "calendar_events",
        timezone_name: str = "UTC",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._table = table
        self._tz = ZoneInfo(timezone_name)
        self._clock = clock

    async def list(self) -> CalendarSlotListResponse:
        rows = await self._store.query(self._table, order=[("start_time", False)])
        items = [CalendarSlot(**row) for row in rows]
        return CalendarSlotListResponse(total=len(items), items=items)

    async def update(
        self, slot_id: str, request: CalendarSlotUpdateRequest
    ) -> CalendarSlotResponse:
        patch = build_slot_patch(request, tz=self._tz, now=self._clock().isoformat())
        logger.info("Updating slot %s (away=%s, title=%s)", slot_id, request.away_status, patch["title"])
        if await self._store.find(self._table, {"id": slot_id}) is None:
            raise NotFoundError(self._table, slot_id)
        row = await self._store.update(self._table, slot_id, patch)
        return CalendarSlotResponse(
            message="Busy slot updated successfully",
            data=CalendarSlot(**row),
        )

    async def delete(self, slot_id: str) -> CalendarSlotResponse:
        logger.info("Deleting slot %s", slot_id)
        await self._store.delete(self._table, slot_id)
        return CalendarSlotResponse(message="Busy slot deleted successfully")
