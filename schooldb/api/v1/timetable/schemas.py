from datetime import time

from pydantic import BaseModel

from schooldb.core.enums import DayOfWeek


class TimetableSlotCreate(BaseModel):
    class_id: int
    subject_id: int
    teacher_id: int
    day_of_week: DayOfWeek
    start_time: time
    end_time: time


class TimetableSlotResponse(BaseModel):
    timetable_id: int
    class_id: int
    subject_id: int
    teacher_id: int
    day_of_week: DayOfWeek
    start_time: time
    end_time: time

    class Config:
        from_attributes = True
