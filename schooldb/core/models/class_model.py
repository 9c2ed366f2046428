"""School classes (e.g. Form 1 Blue). Model named SchoolClass to avoid Python 'class' keyword."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from schooldb.db.session import Base


class SchoolClass(Base):
    __tablename__ = "classes"

    class_id = Column(Integer, primary_key=True, autoincrement=True)
    class_name = Column(String(50), nullable=False)
    class_teacher_id = Column(Integer, ForeignKey("teachers.teacher_id", ondelete="SET NULL"), nullable=True)

    class_teacher = relationship("Teacher", foreign_keys=[class_teacher_id])
