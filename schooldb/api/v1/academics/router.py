from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.exceptions import ServiceError
from schooldb.db.session import get_db

from .schemas import (
    ClassCreate,
    ClassResponse,
    ClassTeacherUpdate,
    ExamCreate,
    ExamResponse,
    MarkCreate,
    MarkResponse,
    SubjectCreate,
    SubjectResponse,
    TeacherCreate,
    TeacherResponse,
)
from . import service

router = APIRouter(prefix="/api/v1", tags=["academics"])


# --- Teachers ---
@router.post("/teachers", response_model=TeacherResponse, status_code=status.HTTP_201_CREATED)
async def create_teacher(payload: TeacherCreate, db: AsyncSession = Depends(get_db)) -> TeacherResponse:
    return await service.create_teacher(db, payload)


@router.get("/teachers", response_model=List[TeacherResponse])
async def list_teachers(db: AsyncSession = Depends(get_db)) -> List[TeacherResponse]:
    return await service.list_teachers(db)


# --- Classes ---
@router.post("/classes", response_model=ClassResponse, status_code=status.HTTP_201_CREATED)
async def create_class(payload: ClassCreate, db: AsyncSession = Depends(get_db)) -> ClassResponse:
    try:
        return await service.create_class(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/classes", response_model=List[ClassResponse])
async def list_classes(db: AsyncSession = Depends(get_db)) -> List[ClassResponse]:
    return await service.list_classes(db)


@router.patch("/classes/{class_id}/teacher", response_model=ClassResponse)
async def update_class_teacher(
    class_id: int,
    payload: ClassTeacherUpdate,
    db: AsyncSession = Depends(get_db),
) -> ClassResponse:
    try:
        return await service.update_class_teacher(db, class_id, payload.class_teacher_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


# --- Subjects ---
@router.post("/subjects", response_model=SubjectResponse, status_code=status.HTTP_201_CREATED)
async def create_subject(payload: SubjectCreate, db: AsyncSession = Depends(get_db)) -> SubjectResponse:
    return await service.create_subject(db, payload)


@router.get("/subjects", response_model=List[SubjectResponse])
async def list_subjects(db: AsyncSession = Depends(get_db)) -> List[SubjectResponse]:
    return await service.list_subjects(db)


# --- Exams ---
@router.post("/exams", response_model=ExamResponse, status_code=status.HTTP_201_CREATED)
async def create_exam(payload: ExamCreate, db: AsyncSession = Depends(get_db)) -> ExamResponse:
    return await service.create_exam(db, payload)


@router.get("/exams", response_model=List[ExamResponse])
async def list_exams(db: AsyncSession = Depends(get_db)) -> List[ExamResponse]:
    return await service.list_exams(db)


# --- Marks ---
@router.post("/marks", response_model=MarkResponse, status_code=status.HTTP_201_CREATED)
async def record_marks(payload: MarkCreate, db: AsyncSession = Depends(get_db)) -> MarkResponse:
    try:
        return await service.record_marks(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/marks/student/{student_id}", response_model=List[MarkResponse])
async def list_marks(student_id: int, db: AsyncSession = Depends(get_db)) -> List[MarkResponse]:
    return await service.list_marks(db, student_id)
