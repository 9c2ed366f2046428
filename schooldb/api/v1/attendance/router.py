from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.exceptions import ServiceError
from schooldb.db.session import get_db

from .schemas import AttendanceMark, AttendanceRecord
from . import service

router = APIRouter(prefix="/api/v1/attendance", tags=["attendance"])


@router.post("", response_model=AttendanceRecord, status_code=status.HTTP_201_CREATED)
async def mark_attendance(
    payload: AttendanceMark,
    db: AsyncSession = Depends(get_db),
) -> AttendanceRecord:
    try:
        return await service.mark_attendance(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/student/{student_id}", response_model=List[AttendanceRecord])
async def list_attendance(
    student_id: int,
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> List[AttendanceRecord]:
    return await service.list_attendance(db, student_id, from_date=from_date, to_date=to_date)
