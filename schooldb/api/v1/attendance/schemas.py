from datetime import date
from typing import Optional

from pydantic import BaseModel

from schooldb.core.enums import AttendanceStatus


class AttendanceMark(BaseModel):
    student_id: int
    date: date
    status: AttendanceStatus


class AttendanceRecord(BaseModel):
    attendance_id: int
    student_id: int
    date: date
    status: AttendanceStatus

    class Config:
        from_attributes = True


class AttendanceSummary(BaseModel):
    student_id: int
    total_days: int
    days_present: int
    days_absent: int
    days_late: int
    attendance_rate: Optional[float] = None
