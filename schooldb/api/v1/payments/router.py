"""Payments router: record, inspect and delete payments."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.exceptions import ServiceError
from schooldb.db.session import get_db

from .schemas import PaymentCreate, PaymentDeleted, PaymentReceipt, PaymentResponse, TotalPaidResponse
from . import service

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])


@router.post("", response_model=PaymentReceipt, status_code=status.HTTP_201_CREATED)
async def record_payment(
    payload: PaymentCreate,
    db: AsyncSession = Depends(get_db),
) -> PaymentReceipt:
    try:
        return await service.record_payment(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/student/{student_id}", response_model=List[PaymentResponse])
async def get_payment_history(
    student_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[PaymentResponse]:
    try:
        return await service.list_payments(db, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/student/{student_id}/total", response_model=TotalPaidResponse)
async def get_total_fees_paid(
    student_id: int,
    db: AsyncSession = Depends(get_db),
) -> TotalPaidResponse:
    try:
        return await service.get_total_fees_paid(db, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: int,
    db: AsyncSession = Depends(get_db),
) -> PaymentResponse:
    try:
        return await service.get_payment(db, payment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{payment_id}", response_model=PaymentDeleted)
async def delete_payment(
    payment_id: int,
    db: AsyncSession = Depends(get_db),
) -> PaymentDeleted:
    try:
        return await service.delete_payment(db, payment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
