from sqlalchemy import Column, Integer, String

from schooldb.db.session import Base


class Exam(Base):
    __tablename__ = "exams"

    exam_id = Column(Integer, primary_key=True, autoincrement=True)
    exam_name = Column(String(100), nullable=False)
    term = Column(String(20), nullable=True)
    year = Column(Integer, nullable=True)
