from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from schooldb.db.session import Base


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        CheckConstraint("status IN ('Present','Absent','Late')", name="chk_attendance_status"),
    )

    attendance_id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.student_id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    status = Column(String(10), nullable=False)  # Present, Absent, Late

    student = relationship("Student")
