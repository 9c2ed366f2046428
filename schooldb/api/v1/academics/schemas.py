from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


# --- Teachers ---
class TeacherCreate(BaseModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    subject: Optional[str] = Field(None, max_length=100)
    hire_date: Optional[date] = None


class TeacherResponse(TeacherCreate):
    teacher_id: int

    class Config:
        from_attributes = True


# --- Classes ---
class ClassCreate(BaseModel):
    class_name: str = Field(..., max_length=50)
    class_teacher_id: Optional[int] = None


class ClassTeacherUpdate(BaseModel):
    class_teacher_id: int


class ClassResponse(ClassCreate):
    class_id: int

    class Config:
        from_attributes = True


# --- Subjects ---
class SubjectCreate(BaseModel):
    subject_name: str = Field(..., max_length=100)


class SubjectResponse(SubjectCreate):
    subject_id: int

    class Config:
        from_attributes = True


# --- Exams ---
class ExamCreate(BaseModel):
    exam_name: str = Field(..., max_length=100)
    term: Optional[str] = Field(None, max_length=20)
    year: Optional[int] = Field(None, ge=1901, le=2155)


class ExamResponse(ExamCreate):
    exam_id: int

    class Config:
        from_attributes = True


# --- Marks ---
class MarkCreate(BaseModel):
    student_id: int
    subject_id: int
    exam_id: int
    marks_obtained: Decimal = Field(..., ge=0, le=100, max_digits=5, decimal_places=2)
    grade: Optional[str] = Field(None, max_length=2)
    remarks: Optional[str] = None


class MarkResponse(BaseModel):
    mark_id: int
    student_id: int
    subject_id: int
    exam_id: int
    marks_obtained: Decimal
    grade: Optional[str] = None
    remarks: Optional[str] = None

    class Config:
        from_attributes = True
