"""Fees router: assign fee, read fee records, re-run reconciliation."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.enums import PaymentStatus
from schooldb.core.exceptions import ServiceError
from schooldb.db.session import get_db

from .schemas import FeeAssign, FeeRecordResponse
from . import reconciler, service

router = APIRouter(prefix="/api/v1/fees", tags=["fees"])


@router.post("", response_model=FeeRecordResponse, status_code=status.HTTP_201_CREATED)
async def assign_fee(
    payload: FeeAssign,
    db: AsyncSession = Depends(get_db),
) -> FeeRecordResponse:
    try:
        return await service.assign_fee(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[FeeRecordResponse])
async def list_fee_records(
    payment_status: Optional[PaymentStatus] = Query(None, description="Paid, Partially Paid or Unpaid"),
    db: AsyncSession = Depends(get_db),
) -> List[FeeRecordResponse]:
    return await service.list_fee_records(db, payment_status=payment_status)


@router.get("/{student_id}", response_model=FeeRecordResponse)
async def get_fee_record(
    student_id: int,
    db: AsyncSession = Depends(get_db),
) -> FeeRecordResponse:
    try:
        return await service.get_fee_record(db, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{student_id}/reconcile", response_model=FeeRecordResponse)
async def reconcile_fee_record(
    student_id: int,
    db: AsyncSession = Depends(get_db),
) -> FeeRecordResponse:
    """Recompute amount_paid and status from the payment log."""
    try:
        return await reconciler.reconcile_student(db, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
