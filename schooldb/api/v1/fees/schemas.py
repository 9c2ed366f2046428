"""Fees schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from schooldb.core.enums import PaymentStatus


class FeeAssign(BaseModel):
    student_id: int
    amount_due: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class FeeRecordResponse(BaseModel):
    fee_id: int
    student_id: int
    amount_due: Decimal
    amount_paid: Decimal
    payment_status: PaymentStatus
    balance: Decimal
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
