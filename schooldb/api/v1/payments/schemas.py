"""Payments schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from schooldb.api.v1.fees.schemas import FeeRecordResponse


class PaymentCreate(BaseModel):
    student_id: int
    # Sign is checked by the ledger so that direct callers get InvalidAmount too
    amount: Decimal = Field(..., max_digits=10, decimal_places=2)
    payment_date: Optional[date] = None


class PaymentResponse(BaseModel):
    payment_id: int
    student_id: int
    amount: Decimal
    payment_date: date
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaymentReceipt(BaseModel):
    """Payment as recorded plus the fee record it left behind."""

    payment: PaymentResponse
    fee: FeeRecordResponse


class PaymentDeleted(BaseModel):
    payment_id: int
    fee: FeeRecordResponse


class TotalPaidResponse(BaseModel):
    student_id: int
    total_paid: Decimal
