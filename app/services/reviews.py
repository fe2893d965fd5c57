"""Review submission, moderation and the public approved-reviews projection."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from app.clients.base import RecordStore
from app.schemas.review import (
    AdminNotification,
    ApprovedReviewsResponse,
    NotificationData,
    PublicReview,
    ReviewActionRequest,
    ReviewActionResponse,
    ReviewListResponse,
    ReviewRecord,
    ReviewStatus,
    ReviewSubmitRequest,
    ReviewSubmitResponse,
)
from app.services.exceptions import (
    DuplicateSubmissionError,
    NotFoundError,
    ServiceError,
)
from app.services.notifications import NotificationDispatcher
from app.services.validation import validate_submission

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
NEWEST_FIRST = [("created_at", True)]

_PAST_TENSE = {"approve": "approved", "reject": "rejected", "delete": "deleted"}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def apply_transition(
    record: Mapping[str, Any],
    action: str,
    *,
    now: str,
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    """Return the patch that moves ``record`` through ``action``.

    Both transitions are idempotent apart from ``updated_at``: re-approving
    keeps the original ``approved_at`` and re-rejecting keeps ``rejected_at``.
    """

    current = record.get("status")
    if action == "approve":
        return {
            "status": ReviewStatus.APPROVED.value,
            "approved_at": record.get("approved_at")
            if current == ReviewStatus.APPROVED.value
            else now,
            "rejected_at": None,
            "admin_notes": None,
            "updated_at": now,
        }
    if action == "reject":
        return {
            "status": ReviewStatus.REJECTED.value,
            "rejected_at": record.get("rejected_at")
            if current == ReviewStatus.REJECTED.value
            else now,
            "approved_at": None,
            "admin_notes": notes if notes is not None else record.get("admin_notes"),
            "updated_at": now,
        }
    raise ValueError(f"Unsupported transition: {action}")


class ReviewService:
    def __init__(
        self,
        store: RecordStore,
        *,
        dispatcher: NotificationDispatcher | None = None,
        table: str = "reviews",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._table = table
        self._clock = clock

    def _now_iso(self) -> str:
        return self._clock().isoformat()

    async def submit(self, request: ReviewSubmitRequest) -> ReviewSubmitResponse:
        rating = validate_submission(request)
        name = request.name.strip()
        text = request.review.strip()
        logger.info("Received review submission from %s", name)

        try:
            existing = await self._store.find(
                self._table, {"submitter_name": name, "review_text": text}
            )
            if existing is not None:
                raise DuplicateSubmissionError()

            now = self._now_iso()
            record = await self._store.insert(
                self._table,
                {
                    "submitter_name": name,
                    "submitter_email": request.email,
                    "rating": rating,
                    "review_text": text,
                    "status": ReviewStatus.PENDING.value,
                    "created_at": now,
                    "updated_at": now,
                    "approved_at": None,
                    "rejected_at": None,
                    "admin_notes": None,
                },
            )
        except ServiceError:
            raise
        except Exception as exc:  # pragma: no cover - defensive
            logger.exception("Unexpected error while submitting review")
            raise ServiceError("Failed to submit review", cause=exc)

        review_id = str(record["id"])
        self._notify_new_submission(review_id, name, rating, text)
        return ReviewSubmitResponse(
            message="Testimonial submitted successfully",
            review_id=review_id,
        )

    def _notify_new_submission(self, review_id: str, name: str, rating: int, text: str) -> None:
        if self._dispatcher is None:
            return
        event = AdminNotification(
            type="new_testimonial",
            message=f"New testimonial submitted by {name}",
            data=NotificationData(review_id=review_id, name=name, rating=rating, review=text),
        )
        try:
            self._dispatcher.dispatch(event)
        except Exception:
            logger.exception("Unable to schedule notification for review %s", review_id)

    async def list_for_moderation(
        self, status: ReviewStatus | None = None
    ) -> ReviewListResponse:
        logger.info("Listing reviews for moderation (status=%s)", status.value if status else "all")
        filters = {"status": status.value} if status else {}
        rows = await self._store.query(self._table, filters, order=NEWEST_FIRST)
        reviews = [ReviewRecord(**row) for row in rows]
        return ReviewListResponse(status=status, total=len(reviews), reviews=reviews)

    async def get(self, review_id: str) -> ReviewRecord:
        return ReviewRecord(**await self._require(review_id))

    async def _require(self, review_id: str) -> Dict[str, Any]:
        record = await self._store.find(self._table, {"id": review_id})
        if record is None:
            raise NotFoundError(self._table, review_id)
        return record

    async def _transition(self, review_id: str, action: str, notes: Optional[str] = None) -> ReviewRecord:
        record = await self._require(review_id)
        patch = apply_transition(record, action, now=self._now_iso(), notes=notes)
        updated = await self._store.update(self._table, review_id, patch)
        logger.info("Review %s %s", review_id, _PAST_TENSE[action])
        return ReviewRecord(**updated)

    async def approve(self, review_id: str) -> ReviewRecord:
        return await self._transition(review_id, "approve")

    async def reject(self, review_id: str, notes: Optional[str] = None) -> ReviewRecord:
        return await self._transition(review_id, "reject", notes)

    async def delete(self, review_id: str) -> None:
        await self._require(review_id)
        await self._store.delete(self._table, review_id)
        logger.info("Review %s deleted", review_id)

    async def act(self, request: ReviewActionRequest) -> ReviewActionResponse:
        message = f"Review {_PAST_TENSE[request.action]} successfully"
        try:
            if request.action == "delete":
                await self.delete(request.review_id)
                return ReviewActionResponse(message=message)
            if request.action == "approve":
                review = await self.approve(request.review_id)
            else:
                review = await self.reject(request.review_id, request.admin_notes)
        except ServiceError:
            raise
        except Exception as exc:  # pragma: no cover - defensive
            logger.exception("Unexpected error while applying %s", request.action)
            raise ServiceError(f"Failed to {request.action} review", cause=exc)
        return ReviewActionResponse(message=message, review=review)

    async def list_approved(
        self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0
    ) -> ApprovedReviewsResponse:
        filters = {"status": ReviewStatus.APPROVED.value}
        rows = await self._store.query(
            self._table, filters, order=NEWEST_FIRST, limit=limit, offset=offset
        )
        total = await self._store.count(self._table, filters)
        return ApprovedReviewsResponse(
            reviews=[
                PublicReview(
                    submitter_name=row["submitter_name"],
                    rating=row["rating"],
                    review_text=row["review_text"],
                    created_at=row["created_at"],
                )
                for row in rows
            ],
            total=total,
            limit=limit,
            offset=offset,
        )
