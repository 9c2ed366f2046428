"""Payment ledger: append-only payment log with administrative deletion.

Every mutation runs the reconciler in the same transaction and under the
student's lock, so callers never observe a stale fee status.
"""

from datetime import date
from decimal import Decimal
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.enums import FeeAuditAction
from schooldb.core.exceptions import InvalidAmount, NotFound, UnknownStudent
from schooldb.core.locks import StudentLockRegistry, student_locks
from schooldb.core.logging import get_logger
from schooldb.core.models import Payment
from schooldb.api.v1.fees import reconciler
from schooldb.api.v1.fees import service as fee_store
from schooldb.api.v1.students import service as student_service

from .schemas import PaymentCreate, PaymentDeleted, PaymentReceipt, PaymentResponse, TotalPaidResponse

logger = get_logger(__name__)


def _payment_to_response(p: Payment) -> PaymentResponse:
    return PaymentResponse(
        payment_id=p.payment_id,
        student_id=p.student_id,
        amount=fee_store.to_money(p.amount),
        payment_date=p.payment_date,
        created_at=p.created_at,
    )


async def record_payment(
    db: AsyncSession,
    payload: PaymentCreate,
    locks: StudentLockRegistry = student_locks,
) -> PaymentReceipt:
    if payload.amount is None or payload.amount <= 0:
        logger.warning("Payment rejected: student_id=%s amount=%s", payload.student_id, payload.amount)
        raise InvalidAmount("Payment amount must be greater than zero")

    async with locks.hold(payload.student_id):
        if not await student_service.student_exists(db, payload.student_id):
            logger.warning("Payment rejected: unknown student_id=%s", payload.student_id)
            raise UnknownStudent(f"Student {payload.student_id} does not exist")
        if not await student_service.is_active(db, payload.student_id):
            logger.warning("Payment rejected: inactive student_id=%s", payload.student_id)
            raise UnknownStudent(f"Student {payload.student_id} is not active")

        pt = Payment(
            student_id=payload.student_id,
            amount=payload.amount,
            payment_date=payload.payment_date or date.today(),
        )
        try:
            db.add(pt)
            await db.flush()
            fee_store.log_fee_audit(
                db, pt.student_id, "payments", pt.payment_id,
                FeeAuditAction.CREATE,
                None,
                {"amount": str(fee_store.to_money(payload.amount)), "payment_date": pt.payment_date.isoformat()},
            )
            fee = await reconciler.reconcile(db, payload.student_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await db.refresh(pt)
        await db.refresh(fee)
        logger.info(
            "Payment recorded: payment_id=%s student_id=%s amount=%s",
            pt.payment_id, pt.student_id, fee_store.to_money(pt.amount),
        )
        return PaymentReceipt(payment=_payment_to_response(pt), fee=fee_store.fee_to_response(fee))


async def delete_payment(
    db: AsyncSession,
    payment_id: int,
    locks: StudentLockRegistry = student_locks,
) -> PaymentDeleted:
    """Administrative correction: remove a payment and re-derive the student's balance."""
    pt = await db.get(Payment, payment_id)
    if not pt:
        raise NotFound(f"Payment {payment_id} not found")
    student_id = pt.student_id

    async with locks.hold(student_id):
        # Re-read under the lock; a concurrent delete may have won
        pt = await db.get(Payment, payment_id, populate_existing=True)
        if not pt:
            raise NotFound(f"Payment {payment_id} not found")
        old_value = {"amount": str(fee_store.to_money(pt.amount)), "payment_date": pt.payment_date.isoformat()}
        try:
            await db.delete(pt)
            await db.flush()
            fee_store.log_fee_audit(
                db, student_id, "payments", payment_id,
                FeeAuditAction.DELETE,
                old_value,
                None,
            )
            fee = await reconciler.reconcile(db, student_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await db.refresh(fee)
        logger.info("Payment deleted: payment_id=%s student_id=%s", payment_id, student_id)
        return PaymentDeleted(payment_id=payment_id, fee=fee_store.fee_to_response(fee))


async def get_payment(db: AsyncSession, payment_id: int) -> PaymentResponse:
    pt = await db.get(Payment, payment_id)
    if not pt:
        raise NotFound(f"Payment {payment_id} not found")
    return _payment_to_response(pt)


async def list_payments(db: AsyncSession, student_id: int) -> List[PaymentResponse]:
    if not await student_service.student_exists(db, student_id):
        raise UnknownStudent(f"Student {student_id} does not exist")
    stmt = (
        select(Payment)
        .where(Payment.student_id == student_id)
        .order_by(Payment.payment_date, Payment.payment_id)
    )
    result = await db.execute(stmt)
    return [_payment_to_response(p) for p in result.scalars().all()]


async def get_total_fees_paid(db: AsyncSession, student_id: int) -> TotalPaidResponse:
    if not await student_service.student_exists(db, student_id):
        raise UnknownStudent(f"Student {student_id} does not exist")
    total: Decimal = await reconciler.sum_payments(db, student_id)
    return TotalPaidResponse(student_id=student_id, total_paid=total)
