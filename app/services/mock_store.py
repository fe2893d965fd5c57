from __future__ import annotations

import itertools
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, DefaultDict, Dict, Iterator, List, Mapping, Optional

from app.clients.base import Filters, Ordering, Record
from app.config import get_settings
from app.services.exceptions import NotFoundError

SAMPLE_REVIEWS: List[Dict[str, Any]] = [
    {
        "submitter_name": "Sarah Johnson",
        "submitter_email": "sarah.j@email.com",
        "rating": 5,
        "review_text": (
            "This training completely transformed my sales approach. I went from "
            "struggling to close deals to consistently exceeding my targets. The "
            "techniques are practical and immediately applicable."
        ),
    },
    {
        "submitter_name": "Michael Chen",
        "submitter_email": "m.chen@email.com",
        "rating": 5,
        "review_text": (
            "After taking this course, my sales increased by 150% in just 3 months. "
            "The ROI-focused approach and proven methodologies are exactly what I needed."
        ),
    },
    {
        "submitter_name": "Emily Rodriguez",
        "submitter_email": "emily.r@email.com",
        "rating": 5,
        "review_text": (
            "I was skeptical at first, but this training delivered beyond my "
            "expectations. My confidence and results have improved dramatically."
        ),
    },
]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_sample_reviews(now: datetime | None = None) -> List[Dict[str, Any]]:
    """Return the sample testimonials as approved rows, spread over past days."""

    now = now or _utc_now()
    rows = []
    for days_ago, sample in enumerate(SAMPLE_REVIEWS, start=1):
        created = (now - timedelta(days=days_ago * 7)).isoformat()
        rows.append(
            {
                **sample,
                "status": "approved",
                "created_at": created,
                "updated_at": created,
                "approved_at": now.isoformat(),
                "rejected_at": None,
                "admin_notes": None,
            }
        )
    return rows


def _sort_key(value: Any) -> tuple:
    # None sorts first so missing values never raise during comparison.
    return (value is not None, value)


class InMemoryRecordStore:
    """Record store used in mock mode; keeps one dict of rows per table."""

    _PREFIXES = {"reviews": "REV", "calendar_events": "CAL"}

    def __init__(self) -> None:
        self._tables: DefaultDict[str, Dict[str, Record]] = defaultdict(dict)
        self._counters: Dict[str, Iterator[int]] = {}

    def _next_id(self, table: str) -> str:
        counter = self._counters.setdefault(table, itertools.count(1))
        prefix = self._PREFIXES.get(table, table[:3].upper())
        return f"{prefix}-{next(counter):05d}"

    @staticmethod
    def _matches(row: Mapping[str, Any], filters: Filters | None) -> bool:
        return all(row.get(column) == value for column, value in (filters or {}).items())

    def tables(self) -> Dict[str, List[Record]]:
        return {name: [dict(row) for row in rows.values()] for name, rows in self._tables.items()}

    async def insert(self, table: str, record: Mapping[str, Any]) -> Record:
        record_id = self._next_id(table)
        row = {"id": record_id, **record}
        self._tables[table][record_id] = row
        return dict(row)

    async def update(self, table: str, record_id: str, patch: Mapping[str, Any]) -> Record:
        row = self._tables[table].get(record_id)
        if row is None:
            raise NotFoundError(table, record_id)
        row.update(patch)
        return dict(row)

    async def delete(self, table: str, record_id: str) -> None:
        if self._tables[table].pop(record_id, None) is None:
            raise NotFoundError(table, record_id)

    async def find(self, table: str, filters: Filters) -> Optional[Record]:
        for row in self._tables[table].values():
            if self._matches(row, filters):
                return dict(row)
        return None

    async def query(
        self,
        table: str,
        filters: Filters | None = None,
        *,
        order: Ordering | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> List[Record]:
        rows = [dict(row) for row in self._tables[table].values() if self._matches(row, filters)]
        # Apply the least significant key first; sort is stable.
        for column, descending in reversed(list(order or [])):
            rows.sort(key=lambda row: _sort_key(row.get(column)), reverse=descending)
        end = None if limit is None else offset + limit
        return rows[offset:end]

    async def count(self, table: str, filters: Filters | None = None) -> int:
        return sum(1 for row in self._tables[table].values() if self._matches(row, filters))

    async def close(self) -> None:
        return None

    def seed(self, table: str, rows: List[Mapping[str, Any]]) -> None:
        for row in rows:
            record_id = self._next_id(table)
            self._tables[table][record_id] = {"id": record_id, **row}


def _seed_calendar_events(store: InMemoryRecordStore, table: str) -> None:
    now = _utc_now().replace(minute=0, second=0, microsecond=0)
    slots = [
        (timedelta(days=1, hours=2), "Busy - Admin Block", "Time blocked by admin"),
        (timedelta(days=3), "Away - Not Available", "Admin is away/unavailable"),
    ]
    rows = []
    for delta, title, description in slots:
        start = now + delta
        rows.append(
            {
                "title": title,
                "description": description,
                "start_time": start.isoformat(),
                "end_time": (start + timedelta(hours=1)).isoformat(),
                "created_at": now.isoformat(),
                "updated_at": now.isoformat(),
            }
        )
    store.seed(table, rows)


_mock_store: Optional[InMemoryRecordStore] = None


def get_mock_store() -> InMemoryRecordStore:
    global _mock_store
    if _mock_store is None:
        settings = get_settings()
        store = InMemoryRecordStore()
        _seed_calendar_events(store, settings.calendar_events_table)
        if settings.seed_sample_reviews:
            store.seed(settings.reviews_table, build_sample_reviews())
        _mock_store = store
    return _mock_store


def reset_mock_store() -> None:
    global _mock_store
    _mock_store = None
