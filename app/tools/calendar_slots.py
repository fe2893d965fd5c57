from fastapi import APIRouter, Depends, HTTPException

from app.dependencies.services import get_calendar_slot_service
from app.schemas.calendar import (
    CalendarSlotListResponse,
    CalendarSlotResponse,
    CalendarSlotUpdateRequest,
)
from app.services import CalendarSlotService
from app.services.exceptions import InvalidSlotError, NotFoundError, ServiceError

router = APIRouter()


@router.get("", response_model=CalendarSlotListResponse)
async def list_slots(
    service: CalendarSlotService = Depends(get_calendar_slot_service),
):
    try:
        return await service.list()
    except ServiceError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.put("/{slot_id}", response_model=CalendarSlotResponse)
async def update_slot(
    slot_id: str,
    req: CalendarSlotUpdateRequest,
    service: CalendarSlotService = Depends(get_calendar_slot_service),
):
    try:
        return await service.update(slot_id, req)
    except InvalidSlotError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Slot not found") from exc
    except ServiceError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.delete("/{slot_id}", response_model=CalendarSlotResponse)
async def delete_slot(
    slot_id: str,
    service: CalendarSlotService = Depends(get_calendar_slot_service),
):
    try:
        return await service.delete(slot_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Slot not found") from exc
    except ServiceError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
