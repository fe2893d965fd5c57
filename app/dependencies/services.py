from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from app.clients.base import RecordStore
from app.clients.notifier import AdminNotifier
from app.clients.supabase import SupabaseRecordStore
from app.config import Settings, get_settings
from app.services import CalendarSlotService, NotificationDispatcher, ReviewService
from app.services.mock_store import get_mock_store
from app.security import admin_key_matches

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase_store_cached() -> SupabaseRecordStore:
    settings = get_settings()
    logger.info("Using Supabase record store at %s", settings.supabase_url)
    return SupabaseRecordStore(
        str(settings.supabase_url),
        settings.supabase_service_role_key,
        timeout=settings.supabase_timeout,
    )


@lru_cache(maxsize=1)
def get_notifier_cached() -> AdminNotifier:
    settings = get_settings()
    return AdminNotifier(
        str(settings.app_public_url) if settings.app_public_url else None,
        timeout=settings.notification_timeout,
    )


@lru_cache(maxsize=1)
def get_dispatcher_cached() -> NotificationDispatcher:
    return NotificationDispatcher(get_notifier_cached())


def get_record_store_instance(settings: Settings | None = None) -> RecordStore:
    settings = settings or get_settings()
    if settings.mock_mode:
        return get_mock_store()
    return get_supabase_store_cached()


def get_record_store(settings: Settings = Depends(get_settings)) -> RecordStore:
    return get_record_store_instance(settings)


def get_dispatcher() -> NotificationDispatcher:
    return get_dispatcher_cached()


def build_review_service() -> ReviewService:
    return ReviewService(
        get_record_store_instance(),
        dispatcher=get_dispatcher_cached(),
        table=get_settings().reviews_table,
    )


def get_review_service(
    store: RecordStore = Depends(get_record_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
) -> ReviewService:
    return ReviewService(store, dispatcher=dispatcher, table=settings.reviews_table)


def get_calendar_slot_service(
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
) -> CalendarSlotService:
    return CalendarSlotService(
        store,
        table=settings.calendar_events_table,
        timezone_name=settings.calendar_timezone,
    )


def require_admin_key(
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> bool:
    if not admin_key_matches(settings, x_api_key):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
    return True
