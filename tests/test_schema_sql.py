import asyncio
import re
from pathlib import Path

from app.schemas.calendar import CalendarSlot
from app.schemas.review import ReviewRecord, ReviewSubmitRequest
from app.services.mock_store import InMemoryRecordStore
from app.services.reviews import ReviewService

SCHEMA = (Path(__file__).resolve().parents[1] / "scripts" / "reviews_schema.sql").read_text()


def _columns(table: str) -> set:
    body = re.search(rf"CREATE TABLE IF NOT EXISTS {table} \((.*?)\n\);", SCHEMA, re.S).group(1)
    return {line.split()[0] for line in body.strip().splitlines() if not line.lstrip().startswith("CHECK")}


def test_reviews_table_has_every_column_the_service_writes() -> None:
    store = InMemoryRecordStore()
    asyncio.run(
        ReviewService(store).submit(
            ReviewSubmitRequest(name="Ana", email="ana@example.com", rating=5, review="Great")
        )
    )
    written = set(store.tables()["reviews"][0])

    assert written <= _columns("reviews")
    assert set(ReviewRecord.model_fields) == _columns("reviews")


def test_calendar_events_table_matches_slot_model() -> None:
    assert set(CalendarSlot.model_fields) == _columns("calendar_events")


def test_storage_enforces_rating_and_status_domains() -> None:
    assert "CHECK (rating >= 1 AND rating <= 5)" in SCHEMA
    assert "CHECK (status IN ('pending', 'approved', 'rejected'))" in SCHEMA
    assert "ON reviews(created_at DESC)" in SCHEMA
