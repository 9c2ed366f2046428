"""Status reconciler: keeps fees.amount_paid and fees.payment_status in step with the payment log.

Invoked by the payment ledger after every insert or delete, inside the same
transaction. It never commits; the caller owns the unit of work.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.enums import PaymentStatus
from schooldb.core.exceptions import NoFeeRecord
from schooldb.core.locks import StudentLockRegistry, student_locks
from schooldb.core.logging import get_logger
from schooldb.core.models import Fee, Payment

from . import service as fee_store
from .schemas import FeeRecordResponse

logger = get_logger(__name__)


def derive_status(total_paid: Decimal, amount_due: Decimal) -> PaymentStatus:
    # Nothing paid is Unpaid even for a zero fee, matching a freshly assigned record.
    # Overpayment is still Paid; the excess stays in amount_paid.
    if total_paid <= 0:
        return PaymentStatus.UNPAID
    if total_paid >= amount_due:
        return PaymentStatus.PAID
    return PaymentStatus.PARTIALLY_PAID


async def sum_payments(db: AsyncSession, student_id: int) -> Decimal:
    total = (
        await db.execute(
            select(func.coalesce(func.sum(Payment.amount), 0)).where(Payment.student_id == student_id)
        )
    ).scalar()
    return fee_store.to_money(total)


async def reconcile(db: AsyncSession, student_id: int) -> Fee:
    """Recompute the student's paid total and status from all payments on record."""
    fee = await fee_store.find_fee(db, student_id, for_update=True)
    if fee is None:
        raise NoFeeRecord(f"No fee assigned to student {student_id}; cannot reconcile")
    total_paid = await sum_payments(db, student_id)
    new_status = derive_status(total_paid, fee_store.to_money(fee.amount_due))
    changed = fee_store.apply_reconciliation(db, fee, total_paid, new_status)
    if changed:
        await db.flush()
        logger.info(
            "Fee reconciled: student_id=%s amount_paid=%s status=%s",
            student_id, total_paid, new_status.value,
        )
    return fee


async def reconcile_student(
    db: AsyncSession,
    student_id: int,
    locks: StudentLockRegistry = student_locks,
) -> FeeRecordResponse:
    """Standalone reconciliation run. Idempotent when no payments changed."""
    async with locks.hold(student_id):
        try:
            fee = await reconcile(db, student_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        await db.refresh(fee)
        return fee_store.fee_to_response(fee)
