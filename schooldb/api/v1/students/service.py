"""Students and parents. Also the student directory used by the fee ledger."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.exceptions import NotFound, UnknownStudent
from schooldb.core.logging import get_logger
from schooldb.core.models import Parent, SchoolClass, Student

from .schemas import (
    ParentCreate,
    ParentResponse,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
)

logger = get_logger(__name__)


# ----- Directory -----
async def student_exists(db: AsyncSession, student_id: int) -> bool:
    return await db.get(Student, student_id) is not None


async def is_active(db: AsyncSession, student_id: int) -> bool:
    student = await db.get(Student, student_id)
    return bool(student and student.is_active)


async def _check_refs(db: AsyncSession, class_id, parent_id) -> None:
    if class_id is not None and await db.get(SchoolClass, class_id) is None:
        raise NotFound(f"Class {class_id} does not exist")
    if parent_id is not None and await db.get(Parent, parent_id) is None:
        raise NotFound(f"Parent {parent_id} does not exist")


# ----- Parents -----
async def create_parent(db: AsyncSession, payload: ParentCreate) -> ParentResponse:
    obj = Parent(**payload.model_dump())
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return ParentResponse.model_validate(obj)


async def list_parents(db: AsyncSession) -> List[ParentResponse]:
    result = await db.execute(select(Parent).order_by(Parent.parent_id))
    return [ParentResponse.model_validate(p) for p in result.scalars().all()]


# ----- Students -----
async def add_student(db: AsyncSession, payload: StudentCreate) -> StudentResponse:
    await _check_refs(db, payload.class_id, payload.parent_id)
    data = payload.model_dump()
    if payload.gender is not None:
        data["gender"] = payload.gender.value
    obj = Student(**data, is_active=True)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info("Student added: student_id=%s", obj.student_id)
    return StudentResponse.model_validate(obj)


async def get_student(db: AsyncSession, student_id: int) -> StudentResponse:
    obj = await db.get(Student, student_id)
    if not obj:
        raise UnknownStudent(f"Student {student_id} does not exist")
    return StudentResponse.model_validate(obj)


async def list_students(db: AsyncSession, active_only: bool = False) -> List[StudentResponse]:
    stmt = select(Student)
    if active_only:
        stmt = stmt.where(Student.is_active.is_(True))
    stmt = stmt.order_by(Student.student_id)
    result = await db.execute(stmt)
    return [StudentResponse.model_validate(s) for s in result.scalars().all()]


async def update_student_info(db: AsyncSession, student_id: int, payload: StudentUpdate) -> StudentResponse:
    obj = await db.get(Student, student_id)
    if not obj:
        raise UnknownStudent(f"Student {student_id} does not exist")
    await _check_refs(db, payload.class_id, None)
    obj.first_name = payload.first_name
    obj.last_name = payload.last_name
    obj.class_id = payload.class_id
    obj.address = payload.address
    await db.commit()
    await db.refresh(obj)
    return StudentResponse.model_validate(obj)


async def deactivate_student(db: AsyncSession, student_id: int) -> StudentResponse:
    obj = await db.get(Student, student_id)
    if not obj:
        raise UnknownStudent(f"Student {student_id} does not exist")
    obj.is_active = False
    await db.commit()
    await db.refresh(obj)
    logger.info("Student deactivated: student_id=%s", student_id)
    return StudentResponse.model_validate(obj)
