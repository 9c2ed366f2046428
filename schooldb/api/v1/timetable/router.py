from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.exceptions import ServiceError
from schooldb.db.session import get_db

from .schemas import TimetableSlotCreate, TimetableSlotResponse
from . import service

router = APIRouter(prefix="/api/v1/timetable", tags=["timetable"])


@router.post("", response_model=TimetableSlotResponse, status_code=status.HTTP_201_CREATED)
async def create_timetable_slot(
    payload: TimetableSlotCreate,
    db: AsyncSession = Depends(get_db),
) -> TimetableSlotResponse:
    try:
        return await service.create_timetable_slot(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/class/{class_id}", response_model=List[TimetableSlotResponse])
async def list_class_timetable(class_id: int, db: AsyncSession = Depends(get_db)) -> List[TimetableSlotResponse]:
    return await service.list_class_timetable(db, class_id)
