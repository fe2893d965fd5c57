from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.dependencies.services import get_review_service
from app.schemas.review import (
    ReviewActionRequest,
    ReviewActionResponse,
    ReviewListResponse,
    ReviewStatus,
)
from app.services import ReviewService
from app.services.exceptions import NotFoundError, ServiceError

router = APIRouter()


@router.get("", response_model=ReviewListResponse)
async def list_reviews(
    status: Optional[ReviewStatus] = Query(None),
    service: ReviewService = Depends(get_review_service),
):
    try:
        return await service.list_for_moderation(status)
    except ServiceError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.post("/action", response_model=ReviewActionResponse)
async def moderate_review(
    req: ReviewActionRequest,
    service: ReviewService = Depends(get_review_service),
):
    try:
        return await service.act(req)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Review not found") from exc
    except ServiceError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
