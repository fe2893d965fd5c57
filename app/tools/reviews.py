from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from app.dependencies.services import get_review_service
from app.schemas.review import (
    ApprovedReviewsResponse,
    ReviewSubmitRequest,
    ReviewSubmitResponse,
)
from app.services import ReviewService
from app.services.exceptions import ReviewSubmissionError, ServiceError

router = APIRouter()


@router.post("/submit", response_model=ReviewSubmitResponse)
async def submit_review(
    req: ReviewSubmitRequest,
    service: ReviewService = Depends(get_review_service),
):
    try:
        return await service.submit(req)
    except ReviewSubmissionError as exc:
        # Error code sits at the top level of the body, not under "detail".
        return JSONResponse(
            status_code=400, content={"error": exc.code, "message": str(exc)}
        )
    except ServiceError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.get("/approved", response_model=ApprovedReviewsResponse)
async def list_approved_reviews(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: ReviewService = Depends(get_review_service),
):
    try:
        return await service.list_approved(limit=limit, offset=offset)
    except ServiceError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
