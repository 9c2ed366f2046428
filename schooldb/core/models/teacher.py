from sqlalchemy import Column, Date, Integer, String

from schooldb.db.session import Base


class Teacher(Base):
    __tablename__ = "teachers"

    teacher_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    subject = Column(String(100), nullable=True)  # specialism, free text
    hire_date = Column(Date, nullable=True)
