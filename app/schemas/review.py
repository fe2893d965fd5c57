from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
)


class ReviewStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


ReviewAction = Literal["approve", "reject", "delete"]


class ReviewSubmitRequest(BaseModel):
    # Presence is checked by the validation layer so a missing field reports
    # which one it was instead of a generic schema error.
    name: Optional[str] = None
    email: Optional[str] = None
    # Kept raw so blank strings and booleans reach the validation layer.
    rating: Optional[Union[StrictInt, StrictBool, StrictFloat, StrictStr]] = None
    review: Optional[str] = None


class ReviewSubmitResponse(BaseModel):
    message: str
    review_id: str


class ReviewRecord(BaseModel):
    id: str
    submitter_name: str
    submitter_email: str
    rating: int
    review_text: str
    status: ReviewStatus
    created_at: str
    updated_at: str
    approved_at: Optional[str] = None
    rejected_at: Optional[str] = None
    admin_notes: Optional[str] = None


class PublicReview(BaseModel):
    submitter_name: str
    rating: int
    review_text: str
    created_at: str


class ApprovedReviewsResponse(BaseModel):
    reviews: List[PublicReview]
    total: int
    limit: int
    offset: int


class ReviewListResponse(BaseModel):
    status: Optional[ReviewStatus] = None
    total: int
    reviews: List[ReviewRecord]


class ReviewActionRequest(BaseModel):
    review_id: str = Field(validation_alias=AliasChoices("review_id", "reviewId"))
    action: ReviewAction
    admin_notes: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("admin_notes", "adminNotes")
    )


class ReviewActionResponse(BaseModel):
    message: str
    review: Optional[ReviewRecord] = None


class NotificationData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    review_id: str = Field(alias="reviewId")
    name: str
    rating: int
    review: str


class AdminNotification(BaseModel):
    type: str
    message: str
    data: NotificationData
