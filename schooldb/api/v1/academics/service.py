"""Teachers, classes, subjects, exams and marks."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.exceptions import NotFound, UnknownStudent
from schooldb.core.models import Exam, Mark, SchoolClass, Student, Subject, Teacher

from .schemas import (
    ClassCreate,
    ClassResponse,
    ExamCreate,
    ExamResponse,
    MarkCreate,
    MarkResponse,
    SubjectCreate,
    SubjectResponse,
    TeacherCreate,
    TeacherResponse,
)


async def _require(db: AsyncSession, model, ident: int, label: str):
    obj = await db.get(model, ident)
    if obj is None:
        raise NotFound(f"{label} {ident} does not exist")
    return obj


# --- Teachers ---
async def create_teacher(db: AsyncSession, payload: TeacherCreate) -> TeacherResponse:
    obj = Teacher(**payload.model_dump())
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return TeacherResponse.model_validate(obj)


async def list_teachers(db: AsyncSession) -> List[TeacherResponse]:
    result = await db.execute(select(Teacher).order_by(Teacher.teacher_id))
    return [TeacherResponse.model_validate(t) for t in result.scalars().all()]


# --- Classes ---
async def create_class(db: AsyncSession, payload: ClassCreate) -> ClassResponse:
    if payload.class_teacher_id is not None:
        await _require(db, Teacher, payload.class_teacher_id, "Teacher")
    obj = SchoolClass(**payload.model_dump())
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return ClassResponse.model_validate(obj)


async def list_classes(db: AsyncSession) -> List[ClassResponse]:
    result = await db.execute(select(SchoolClass).order_by(SchoolClass.class_id))
    return [ClassResponse.model_validate(c) for c in result.scalars().all()]


async def update_class_teacher(db: AsyncSession, class_id: int, teacher_id: int) -> ClassResponse:
    cl = await _require(db, SchoolClass, class_id, "Class")
    await _require(db, Teacher, teacher_id, "Teacher")
    cl.class_teacher_id = teacher_id
    await db.commit()
    await db.refresh(cl)
    return ClassResponse.model_validate(cl)


# --- Subjects ---
async def create_subject(db: AsyncSession, payload: SubjectCreate) -> SubjectResponse:
    obj = Subject(subject_name=payload.subject_name.strip())
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return SubjectResponse.model_validate(obj)


async def list_subjects(db: AsyncSession) -> List[SubjectResponse]:
    result = await db.execute(select(Subject).order_by(Subject.subject_id))
    return [SubjectResponse.model_validate(s) for s in result.scalars().all()]


# --- Exams ---
async def create_exam(db: AsyncSession, payload: ExamCreate) -> ExamResponse:
    obj = Exam(**payload.model_dump())
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return ExamResponse.model_validate(obj)


async def list_exams(db: AsyncSession) -> List[ExamResponse]:
    result = await db.execute(select(Exam).order_by(Exam.exam_id))
    return [ExamResponse.model_validate(e) for e in result.scalars().all()]


# --- Marks ---
async def record_marks(db: AsyncSession, payload: MarkCreate) -> MarkResponse:
    if await db.get(Student, payload.student_id) is None:
        raise UnknownStudent(f"Student {payload.student_id} does not exist")
    await _require(db, Subject, payload.subject_id, "Subject")
    await _require(db, Exam, payload.exam_id, "Exam")
    obj = Mark(**payload.model_dump())
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return MarkResponse.model_validate(obj)


async def list_marks(db: AsyncSession, student_id: int) -> List[MarkResponse]:
    stmt = select(Mark).where(Mark.student_id == student_id).order_by(Mark.exam_id, Mark.subject_id)
    result = await db.execute(stmt)
    return [MarkResponse.model_validate(m) for m in result.scalars().all()]
