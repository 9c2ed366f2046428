from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from schooldb.db.session import Base


class Mark(Base):
    """Marks obtained by a student in one subject of one exam."""

    __tablename__ = "marks"
    __table_args__ = (
        CheckConstraint("marks_obtained >= 0 AND marks_obtained <= 100", name="chk_marks_range"),
    )

    mark_id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.student_id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.subject_id"), nullable=False)
    exam_id = Column(Integer, ForeignKey("exams.exam_id"), nullable=False, index=True)
    marks_obtained = Column(Numeric(5, 2), nullable=False)
    grade = Column(String(2), nullable=True)
    remarks = Column(Text, nullable=True)

    student = relationship("Student")
    subject = relationship("Subject")
    exam = relationship("Exam")
