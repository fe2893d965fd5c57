from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


class CalendarSlotUpdateRequest(BaseModel):
    date: str = Field(..., description="Local date, YYYY-MM-DD")
    start_time: str = Field(
        ..., description="Local start time, HH:MM",
        validation_alias=AliasChoices("start_time", "startTime"),
    )
    end_time: str = Field(
        ..., description="Local end time, HH:MM",
        validation_alias=AliasChoices("end_time", "endTime"),
    )
    reason: Optional[str] = None
    away_status: bool = Field(
        default=False, validation_alias=AliasChoices("away_status", "awayStatus")
    )


class CalendarSlot(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    start_time: str
    end_time: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CalendarSlotResponse(BaseModel):
    success: bool = True
    message: str
    data: Optional[CalendarSlot] = None


class CalendarSlotListResponse(BaseModel):
    total: int
    items: List[CalendarSlot]
