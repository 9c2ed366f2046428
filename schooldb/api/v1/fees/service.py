"""Fee record store: one fee row per student, lookup and assignment.

amount_paid and payment_status are only ever written through
apply_reconciliation, which the reconciler calls.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.enums import FeeAuditAction, PaymentStatus
from schooldb.core.exceptions import AlreadyAssigned, InvalidAmount, NotFound, UnknownStudent
from schooldb.core.logging import get_logger
from schooldb.core.models import Fee, FeeAuditLog
from schooldb.api.v1.students import service as student_service

from .schemas import FeeAssign, FeeRecordResponse

logger = get_logger(__name__)

CENTS = Decimal("0.01")


def to_money(val) -> Decimal:
    """Coerce driver values (Decimal, float, int, None) to a 2dp Decimal."""
    if val is None:
        return Decimal("0.00")
    d = val if isinstance(val, Decimal) else Decimal(str(val))
    return d.quantize(CENTS)


def fee_to_response(fee: Fee) -> FeeRecordResponse:
    due = to_money(fee.amount_due)
    paid = to_money(fee.amount_paid)
    return FeeRecordResponse(
        fee_id=fee.fee_id,
        student_id=fee.student_id,
        amount_due=due,
        amount_paid=paid,
        payment_status=PaymentStatus(fee.payment_status),
        balance=due - paid,
        updated_at=fee.updated_at,
    )


# --- Audit helper ---
def log_fee_audit(
    db: AsyncSession,
    student_id: int,
    reference_table: str,
    reference_id: int,
    action_type: FeeAuditAction,
    old_value: Optional[dict],
    new_value: Optional[dict],
) -> None:
    db.add(
        FeeAuditLog(
            student_id=student_id,
            reference_table=reference_table,
            reference_id=reference_id,
            action_type=action_type.value,
            old_value=old_value,
            new_value=new_value,
        )
    )


async def find_fee(db: AsyncSession, student_id: int, for_update: bool = False) -> Optional[Fee]:
    stmt = select(Fee).where(Fee.student_id == student_id)
    if for_update:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    return (await db.execute(stmt)).scalar_one_or_none()


async def get_fee_record(db: AsyncSession, student_id: int) -> FeeRecordResponse:
    fee = await find_fee(db, student_id)
    if not fee:
        raise NotFound(f"No fee record for student {student_id}")
    return fee_to_response(fee)


async def list_fee_records(
    db: AsyncSession,
    payment_status: Optional[PaymentStatus] = None,
) -> List[FeeRecordResponse]:
    stmt = select(Fee)
    if payment_status is not None:
        stmt = stmt.where(Fee.payment_status == payment_status.value)
    stmt = stmt.order_by(Fee.student_id)
    result = await db.execute(stmt)
    return [fee_to_response(f) for f in result.scalars().all()]


async def assign_fee(db: AsyncSession, payload: FeeAssign) -> FeeRecordResponse:
    """Create the student's fee record with nothing paid yet."""
    if payload.amount_due < 0:
        raise InvalidAmount("Fee amount cannot be negative")
    if not await student_service.student_exists(db, payload.student_id):
        raise UnknownStudent(f"Student {payload.student_id} does not exist")
    if await find_fee(db, payload.student_id):
        raise AlreadyAssigned(f"Fee already assigned to student {payload.student_id}")

    fee = Fee(
        student_id=payload.student_id,
        amount_due=payload.amount_due,
        amount_paid=Decimal("0"),
        payment_status=PaymentStatus.UNPAID.value,
    )
    db.add(fee)
    try:
        await db.flush()
        log_fee_audit(
            db, fee.student_id, "fees", fee.fee_id,
            FeeAuditAction.CREATE,
            None,
            {"amount_due": str(to_money(payload.amount_due)), "payment_status": fee.payment_status},
        )
        await db.commit()
    except IntegrityError:
        # Lost a race against a concurrent assignment for the same student
        await db.rollback()
        raise AlreadyAssigned(f"Fee already assigned to student {payload.student_id}")
    await db.refresh(fee)
    logger.info("Fee assigned: student_id=%s amount_due=%s", fee.student_id, to_money(fee.amount_due))
    return fee_to_response(fee)


def apply_reconciliation(
    db: AsyncSession,
    fee: Fee,
    total_paid: Decimal,
    new_status: PaymentStatus,
) -> bool:
    """Write derived totals onto the fee row. Returns False when nothing changed."""
    old_paid = to_money(fee.amount_paid)
    old_status = fee.payment_status
    total_paid = to_money(total_paid)
    if old_paid == total_paid and old_status == new_status.value:
        return False
    fee.amount_paid = total_paid
    fee.payment_status = new_status.value
    log_fee_audit(
        db, fee.student_id, "fees", fee.fee_id,
        FeeAuditAction.RECONCILE,
        {"amount_paid": str(old_paid), "payment_status": old_status},
        {"amount_paid": str(total_paid), "payment_status": new_status.value},
    )
    return True
