from sqlalchemy import Boolean, CheckConstraint, Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from schooldb.db.session import Base


class Student(Base):
    """Student master. Soft delete via is_active; fee and payment rows reference it."""

    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint("gender IN ('Male','Female')", name="chk_student_gender"),
    )

    student_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    dob = Column(Date, nullable=True)
    gender = Column(String(10), nullable=True)
    class_id = Column(Integer, ForeignKey("classes.class_id"), nullable=True)
    admission_date = Column(Date, nullable=True)
    address = Column(Text, nullable=True)
    parent_id = Column(Integer, ForeignKey("parents.parent_id"), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    school_class = relationship("SchoolClass", foreign_keys=[class_id])
    parent = relationship("Parent", foreign_keys=[parent_id])
