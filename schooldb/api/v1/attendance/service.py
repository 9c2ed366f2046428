"""Daily student attendance."""

from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.exceptions import UnknownStudent
from schooldb.core.models import Attendance, Student

from .schemas import AttendanceMark, AttendanceRecord


async def mark_attendance(db: AsyncSession, payload: AttendanceMark) -> AttendanceRecord:
    """Record one day's status. Re-marking the same day overwrites the earlier status."""
    if await db.get(Student, payload.student_id) is None:
        raise UnknownStudent(f"Student {payload.student_id} does not exist")
    existing = (
        await db.execute(
            select(Attendance).where(
                Attendance.student_id == payload.student_id,
                Attendance.date == payload.date,
            )
        )
    ).scalar_one_or_none()
    if existing:
        existing.status = payload.status.value
        obj = existing
    else:
        obj = Attendance(student_id=payload.student_id, date=payload.date, status=payload.status.value)
        db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return AttendanceRecord.model_validate(obj)


async def list_attendance(
    db: AsyncSession,
    student_id: int,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
) -> List[AttendanceRecord]:
    stmt = select(Attendance).where(Attendance.student_id == student_id)
    if from_date is not None:
        stmt = stmt.where(Attendance.date >= from_date)
    if to_date is not None:
        stmt = stmt.where(Attendance.date <= to_date)
    stmt = stmt.order_by(Attendance.date)
    result = await db.execute(stmt)
    return [AttendanceRecord.model_validate(a) for a in result.scalars().all()]
