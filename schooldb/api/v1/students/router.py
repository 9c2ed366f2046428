from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.exceptions import ServiceError
from schooldb.db.session import get_db

from .schemas import ParentCreate, ParentResponse, StudentCreate, StudentResponse, StudentUpdate
from . import service

router = APIRouter(prefix="/api/v1", tags=["students"])


# --- Parents ---
@router.post("/parents", response_model=ParentResponse, status_code=status.HTTP_201_CREATED)
async def create_parent(
    payload: ParentCreate,
    db: AsyncSession = Depends(get_db),
) -> ParentResponse:
    return await service.create_parent(db, payload)


@router.get("/parents", response_model=List[ParentResponse])
async def list_parents(db: AsyncSession = Depends(get_db)) -> List[ParentResponse]:
    return await service.list_parents(db)


# --- Students ---
@router.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def add_student(
    payload: StudentCreate,
    db: AsyncSession = Depends(get_db),
) -> StudentResponse:
    try:
        return await service.add_student(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/students", response_model=List[StudentResponse])
async def list_students(
    active_only: bool = Query(False),
    db: AsyncSession = Depends(get_db),
) -> List[StudentResponse]:
    return await service.list_students(db, active_only=active_only)


@router.get("/students/{student_id}", response_model=StudentResponse)
async def get_student(student_id: int, db: AsyncSession = Depends(get_db)) -> StudentResponse:
    try:
        return await service.get_student(db, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/students/{student_id}", response_model=StudentResponse)
async def update_student_info(
    student_id: int,
    payload: StudentUpdate,
    db: AsyncSession = Depends(get_db),
) -> StudentResponse:
    try:
        return await service.update_student_info(db, student_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch("/students/{student_id}/deactivate", response_model=StudentResponse)
async def deactivate_student(student_id: int, db: AsyncSession = Depends(get_db)) -> StudentResponse:
    try:
        return await service.deactivate_student(db, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
