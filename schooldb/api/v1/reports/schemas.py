"""Report schemas."""

from datetime import time
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from schooldb.core.enums import DayOfWeek


class TopStudentItem(BaseModel):
    student_id: int
    student_name: str
    average_marks: Decimal


class ReportCardLine(BaseModel):
    first_name: str
    last_name: str
    class_name: Optional[str] = None
    subject_name: str
    marks_obtained: Decimal
    grade: Optional[str] = None
    remarks: Optional[str] = None


class PendingFeeItem(BaseModel):
    student_id: int
    student_name: str
    amount_due: Decimal
    amount_paid: Decimal
    balance: Decimal


class TeacherTimetableItem(BaseModel):
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    class_name: str
    subject_name: str
