"""Timetable slot. One row per class/subject/teacher/day/time."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Time
from sqlalchemy.orm import relationship

from schooldb.db.session import Base


class Timetable(Base):
    __tablename__ = "timetable"
    __table_args__ = (
        CheckConstraint(
            "day_of_week IN ('Monday','Tuesday','Wednesday','Thursday','Friday')",
            name="chk_timetable_day",
        ),
    )

    timetable_id = Column(Integer, primary_key=True, autoincrement=True)
    class_id = Column(Integer, ForeignKey("classes.class_id"), nullable=False)
    subject_id = Column(Integer, ForeignKey("subjects.subject_id"), nullable=False)
    teacher_id = Column(Integer, ForeignKey("teachers.teacher_id"), nullable=False, index=True)
    day_of_week = Column(String(10), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    school_class = relationship("SchoolClass")
    subject = relationship("Subject")
    teacher = relationship("Teacher")
