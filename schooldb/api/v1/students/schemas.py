from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from schooldb.core.enums import Gender


class ParentCreate(BaseModel):
    name: str = Field(..., max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = None


class ParentResponse(ParentCreate):
    parent_id: int

    class Config:
        from_attributes = True


class StudentCreate(BaseModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    dob: Optional[date] = None
    gender: Optional[Gender] = None
    class_id: Optional[int] = None
    admission_date: Optional[date] = None
    address: Optional[str] = None
    parent_id: Optional[int] = None


class StudentUpdate(BaseModel):
    """Mirrors the admin 'update student info' form: all four fields are replaced."""

    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    class_id: Optional[int] = None
    address: Optional[str] = None


class StudentResponse(BaseModel):
    student_id: int
    first_name: str
    last_name: str
    dob: Optional[date] = None
    gender: Optional[Gender] = None
    class_id: Optional[int] = None
    admission_date: Optional[date] = None
    address: Optional[str] = None
    parent_id: Optional[int] = None
    is_active: bool

    class Config:
        from_attributes = True
