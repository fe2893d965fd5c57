"""Routes for browsing rows held by the in-memory record store."""
from __future__ import annotations

from html import escape
from typing import Any, Dict, List, Mapping, Sequence

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from app.config import get_settings
from app.schemas.calendar import CalendarSlot
from app.schemas.review import ReviewRecord
from app.services.exceptions import NotFoundError
from app.services.mock_store import get_mock_store

router = APIRouter()

_PAGE = """<html><head><title>Mock Data Overview</title>
<style>table {{ border-collapse: collapse; }} th, td {{ border: 1px solid #ccc; padding: 4px; }}</style>
</head><body><h1>Mock Data Overview</h1>{sections}</body></html>"""


def _render_rows(title: str, columns: Sequence[str], rows: List[Mapping[str, Any]]) -> str:
    heading = f"<h2>{escape(title)} ({len(rows)})</h2>"
    if not rows:
        return heading + "<p>No records found.</p>"
    header = "".join(f"<th>{escape(column)}</th>" for column in columns)
    body = "".join(
        "<tr>"
        + "".join(
            f"<td>{escape('' if row.get(column) is None else str(row.get(column)))}</td>"
            for column in columns
        )
        + "</tr>"
        for row in rows
    )
    return f"{heading}<table><tr>{header}</tr>{body}</table>"


def _collections() -> Dict[str, str]:
    settings = get_settings()
    return {
        "reviews": settings.reviews_table,
        "calendar-slots": settings.calendar_events_table,
    }


@router.get("/mock-data", response_class=HTMLResponse)
async def view_mock_data() -> HTMLResponse:
    """Render the review and calendar tables of the shared in-memory store."""
    tables = get_mock_store().tables()
    collections = _collections()

    reviews = sorted(
        tables.get(collections["reviews"], []),
        key=lambda row: row.get("created_at") or "",
        reverse=True,
    )
    slots = sorted(
        tables.get(collections["calendar-slots"], []),
        key=lambda row: row.get("start_time") or "",
    )
    sections = _render_rows("Reviews", list(ReviewRecord.model_fields), reviews) + _render_rows(
        "Calendar Slots", list(CalendarSlot.model_fields), slots
    )
    return HTMLResponse(content=_PAGE.format(sections=sections))


@router.delete("/mock-data/{collection}/{record_id}")
async def delete_mock_record(collection: str, record_id: str) -> Dict[str, str]:
    """Remove a row from one of the in-memory tables."""

    table = _collections().get(collection.strip().lower())
    if not table:
        raise HTTPException(status_code=404, detail="Unsupported mock data collection")

    try:
        await get_mock_store().delete(table, record_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Record not found") from exc

    return {"status": "deleted", "collection": table, "record_id": record_id}
