"""Unit tests for fee status derivation and standalone reconciliation."""

from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.api.v1.fees import reconciler
from schooldb.api.v1.fees import service as fee_service
from schooldb.api.v1.payments import service as payment_service
from schooldb.api.v1.payments.schemas import PaymentCreate
from schooldb.core.enums import PaymentStatus
from schooldb.core.exceptions import NoFeeRecord
from schooldb.core.models import FeeAuditLog

from factories import make_student, make_student_with_fee


@pytest.mark.parametrize(
    "paid, due, expected",
    [
        ("0", "20000", PaymentStatus.UNPAID),
        ("0.01", "20000", PaymentStatus.PARTIALLY_PAID),
        ("15000", "20000", PaymentStatus.PARTIALLY_PAID),
        ("20000", "20000", PaymentStatus.PAID),
        ("25000", "20000", PaymentStatus.PAID),
        ("0", "0", PaymentStatus.UNPAID),
        ("5", "0", PaymentStatus.PAID),
    ],
)
def test_derive_status(paid: str, due: str, expected: PaymentStatus) -> None:
    assert reconciler.derive_status(Decimal(paid), Decimal(due)) == expected


@pytest.mark.asyncio
async def test_reconcile_without_fee_record_fails(db_session: AsyncSession) -> None:
    student_id = await make_student(db_session)
    with pytest.raises(NoFeeRecord):
        await reconciler.reconcile_student(db_session, student_id)


@pytest.mark.asyncio
async def test_reconcile_with_no_payments_stays_unpaid(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session)
    record = await reconciler.reconcile_student(db_session, student_id)
    assert record.amount_paid == Decimal("0")
    assert record.payment_status == PaymentStatus.UNPAID


@pytest.mark.asyncio
async def test_reconcile_is_idempotent(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session)
    await payment_service.record_payment(db_session, PaymentCreate(student_id=student_id, amount=Decimal("7500")))

    audit_count = select(func.count(FeeAuditLog.id)).where(FeeAuditLog.student_id == student_id)
    before = await fee_service.get_fee_record(db_session, student_id)
    logs_before = (await db_session.execute(audit_count)).scalar()

    first = await reconciler.reconcile_student(db_session, student_id)
    second = await reconciler.reconcile_student(db_session, student_id)

    assert first.amount_paid == before.amount_paid == second.amount_paid == Decimal("7500")
    assert first.payment_status == before.payment_status == second.payment_status == PaymentStatus.PARTIALLY_PAID
    assert (await db_session.execute(audit_count)).scalar() == logs_before


@pytest.mark.asyncio
async def test_sum_payments_is_zero_without_payments(db_session: AsyncSession) -> None:
    student_id = await make_student(db_session)
    assert await reconciler.sum_payments(db_session, student_id) == Decimal("0")


@pytest.mark.asyncio
async def test_zero_fee_record_is_reconciled_from_the_start(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session, amount_due="0")
    assigned = await fee_service.get_fee_record(db_session, student_id)
    assert assigned.payment_status == PaymentStatus.UNPAID

    reconciled = await reconciler.reconcile_student(db_session, student_id)
    assert reconciled.payment_status == assigned.payment_status == PaymentStatus.UNPAID
    assert reconciled.amount_paid == Decimal("0")

    receipt = await payment_service.record_payment(db_session, PaymentCreate(student_id=student_id, amount=Decimal("10")))
    assert receipt.fee.payment_status == PaymentStatus.PAID

    result = await payment_service.delete_payment(db_session, receipt.payment.payment_id)
    assert result.fee.amount_paid == Decimal("0")
    assert result.fee.payment_status == PaymentStatus.UNPAID
