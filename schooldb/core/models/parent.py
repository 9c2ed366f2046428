from sqlalchemy import Column, Integer, String, Text

from schooldb.db.session import Base


class Parent(Base):
    __tablename__ = "parents"

    parent_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True)
    address = Column(Text, nullable=True)
