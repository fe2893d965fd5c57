# app/mcp_server.py (operator tools for review moderation)
from __future__ import annotations

import logging
from typing import List, Literal, Optional

from pydantic import BaseModel, Field
from mcp.server.fastmcp import FastMCP

from app.dependencies.services import build_review_service
from app.schemas.review import (
    ApprovedReviewsResponse,
    ReviewActionRequest,
    ReviewActionResponse,
    ReviewRecord,
    ReviewStatus,
)

log = logging.getLogger("site.mcp")

# Name shown to clients
mcp = FastMCP("site_reviews_mcp", streamable_http_path="/")

# --------------------------
# Tool I/O models
# --------------------------
class ReviewListInput(BaseModel):
    status: Optional[Literal["pending", "approved", "rejected"]] = Field(
        None, description="Only return reviews in this moderation state"
    )

class ReviewListOutput(BaseModel):
    total: int
    reviews: List[ReviewRecord]

class ReviewModerateInput(BaseModel):
    review_id: str = Field(..., description="Review id as returned by reviews_list")
    action: Literal["approve", "reject", "delete"]
    notes: Optional[str] = Field(None, description="Admin note recorded on rejection")

class ApprovedInput(BaseModel):
    limit: int = Field(10, ge=1, le=100)
    offset: int = Field(0, ge=0)

# --------------------------
# Tools
# --------------------------
@mcp.tool(name="reviews_list", description="List reviews awaiting or past moderation")
async def reviews_list(input: ReviewListInput) -> ReviewListOutput:
    log.debug("reviews_list input=%s", input.model_dump())
    status = ReviewStatus(input.status) if input.status else None
    result = await build_review_service().list_for_moderation(status)
    return ReviewListOutput(total=result.total, reviews=result.reviews)

@mcp.tool(name="reviews_moderate", description="Approve, reject or delete one review")
async def reviews_moderate(input: ReviewModerateInput) -> ReviewActionResponse:
    log.debug("reviews_moderate input=%s", input.model_dump())
    out = await build_review_service().act(
        ReviewActionRequest(
            review_id=input.review_id,
            action=input.action,
            admin_notes=input.notes,
        )
    )
    log.debug("reviews_moderate output=%s", out.model_dump())
    return out

@mcp.tool(name="reviews_approved", description="Page through the publicly visible reviews")
async def reviews_approved(input: ApprovedInput) -> ApprovedReviewsResponse:
    log.debug("reviews_approved input=%s", input.model_dump())
    return await build_review_service().list_approved(limit=input.limit, offset=input.offset)

@mcp.tool(name="ping", description="Health check")
async def ping(message: str) -> str:
    log.debug("ping %s", message)
    return f"pong: {message}"
