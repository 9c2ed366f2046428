from typing import List

from fastapi import status
from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.enums import WEEKDAY_ORDER
from schooldb.core.exceptions import NotFound, ServiceError
from schooldb.core.models import SchoolClass, Subject, Teacher, Timetable

from .schemas import TimetableSlotCreate, TimetableSlotResponse


def weekday_sort_key(column):
    """SQL expression ordering Monday..Friday instead of alphabetically."""
    return case({day: i for i, day in enumerate(WEEKDAY_ORDER)}, value=column, else_=len(WEEKDAY_ORDER))


async def create_timetable_slot(db: AsyncSession, payload: TimetableSlotCreate) -> TimetableSlotResponse:
    if await db.get(SchoolClass, payload.class_id) is None:
        raise NotFound(f"Class {payload.class_id} does not exist")
    if await db.get(Subject, payload.subject_id) is None:
        raise NotFound(f"Subject {payload.subject_id} does not exist")
    if await db.get(Teacher, payload.teacher_id) is None:
        raise NotFound(f"Teacher {payload.teacher_id} does not exist")
    if payload.end_time <= payload.start_time:
        raise ServiceError("end_time must be after start_time", status.HTTP_400_BAD_REQUEST)
    obj = Timetable(
        class_id=payload.class_id,
        subject_id=payload.subject_id,
        teacher_id=payload.teacher_id,
        day_of_week=payload.day_of_week.value,
        start_time=payload.start_time,
        end_time=payload.end_time,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return TimetableSlotResponse.model_validate(obj)


async def list_class_timetable(db: AsyncSession, class_id: int) -> List[TimetableSlotResponse]:
    stmt = (
        select(Timetable)
        .where(Timetable.class_id == class_id)
        .order_by(weekday_sort_key(Timetable.day_of_week), Timetable.start_time)
    )
    result = await db.execute(stmt)
    return [TimetableSlotResponse.model_validate(t) for t in result.scalars().all()]
