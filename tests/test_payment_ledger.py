"""Payment ledger behaviour: every mutation leaves the fee record reconciled."""

import asyncio
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.api.v1.fees import reconciler
from schooldb.api.v1.fees import service as fee_service
from schooldb.api.v1.fees.schemas import FeeAssign
from schooldb.api.v1.payments import service as payment_service
from schooldb.api.v1.payments.schemas import PaymentCreate
from schooldb.api.v1.students import service as student_service
from schooldb.core.enums import PaymentStatus
from schooldb.core.exceptions import (
    AlreadyAssigned,
    InvalidAmount,
    NoFeeRecord,
    NotFound,
    UnknownStudent,
)
from schooldb.core.locks import StudentLockRegistry
from schooldb.core.models import Fee, Payment

from factories import make_student, make_student_with_fee


async def _pay(db: AsyncSession, student_id: int, amount: str, **kwargs):
    return await payment_service.record_payment(
        db, PaymentCreate(student_id=student_id, amount=Decimal(amount), **kwargs)
    )


async def _payment_count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count(Payment.payment_id)))).scalar()


@pytest.mark.asyncio
async def test_assign_fee_starts_unpaid(db_session: AsyncSession) -> None:
    student_id = await make_student(db_session)
    record = await fee_service.assign_fee(db_session, FeeAssign(student_id=student_id, amount_due=Decimal("20000")))
    assert record.amount_due == Decimal("20000")
    assert record.amount_paid == Decimal("0")
    assert record.payment_status == PaymentStatus.UNPAID
    assert record.balance == Decimal("20000")


@pytest.mark.asyncio
async def test_assign_fee_twice_fails(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session)
    with pytest.raises(AlreadyAssigned):
        await fee_service.assign_fee(db_session, FeeAssign(student_id=student_id, amount_due=Decimal("100")))


@pytest.mark.asyncio
async def test_assign_fee_unknown_student(db_session: AsyncSession) -> None:
    with pytest.raises(UnknownStudent):
        await fee_service.assign_fee(db_session, FeeAssign(student_id=999, amount_due=Decimal("100")))


@pytest.mark.asyncio
async def test_get_fee_record_not_found(db_session: AsyncSession) -> None:
    student_id = await make_student(db_session)
    with pytest.raises(NotFound):
        await fee_service.get_fee_record(db_session, student_id)


@pytest.mark.asyncio
async def test_partial_then_full_payment(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session)

    receipt = await _pay(db_session, student_id, "15000", payment_date=date(2025, 3, 10))
    assert receipt.fee.amount_paid == Decimal("15000")
    assert receipt.fee.payment_status == PaymentStatus.PARTIALLY_PAID

    receipt = await _pay(db_session, student_id, "5000")
    assert receipt.fee.amount_paid == Decimal("20000")
    assert receipt.fee.payment_status == PaymentStatus.PAID
    assert receipt.fee.balance == Decimal("0")


@pytest.mark.asyncio
async def test_two_halves_make_paid(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session, first_name="Lilian", last_name="Chebet")
    await _pay(db_session, student_id, "10000", payment_date=date(2025, 3, 18))
    await _pay(db_session, student_id, "10000", payment_date=date(2025, 3, 25))

    record = await fee_service.get_fee_record(db_session, student_id)
    assert record.amount_paid == Decimal("20000")
    assert record.payment_status == PaymentStatus.PAID


@pytest.mark.asyncio
async def test_amount_paid_tracks_running_sum(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session, amount_due="1000.00")
    running = Decimal("0")
    for amount in ("100.25", "0.75", "399.00", "250.00", "250.00", "75.50"):
        running += Decimal(amount)
        receipt = await _pay(db_session, student_id, amount)
        assert receipt.fee.amount_paid == running
        expected = PaymentStatus.PAID if running >= Decimal("1000") else PaymentStatus.PARTIALLY_PAID
        assert receipt.fee.payment_status == expected


@pytest.mark.asyncio
async def test_overpayment_is_kept(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session)
    receipt = await _pay(db_session, student_id, "25000")
    assert receipt.fee.amount_paid == Decimal("25000")
    assert receipt.fee.payment_status == PaymentStatus.PAID
    assert receipt.fee.balance == Decimal("-5000")


@pytest.mark.asyncio
async def test_unknown_student_leaves_store_unchanged(db_session: AsyncSession) -> None:
    other = await make_student_with_fee(db_session)
    with pytest.raises(UnknownStudent):
        await _pay(db_session, 999, "100")
    assert await _payment_count(db_session) == 0
    record = await fee_service.get_fee_record(db_session, other)
    assert record.amount_paid == Decimal("0")
    assert record.payment_status == PaymentStatus.UNPAID


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", ["-50", "0"])
async def test_non_positive_amount_rejected(db_session: AsyncSession, amount: str) -> None:
    student_id = await make_student_with_fee(db_session)
    with pytest.raises(InvalidAmount):
        await _pay(db_session, student_id, amount)
    assert await _payment_count(db_session) == 0
    record = await fee_service.get_fee_record(db_session, student_id)
    assert record.payment_status == PaymentStatus.UNPAID


@pytest.mark.asyncio
async def test_inactive_student_rejected(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session)
    await student_service.deactivate_student(db_session, student_id)
    with pytest.raises(UnknownStudent):
        await _pay(db_session, student_id, "100")
    assert await _payment_count(db_session) == 0


@pytest.mark.asyncio
async def test_payment_without_fee_record_rolls_back(db_session: AsyncSession) -> None:
    student_id = await make_student(db_session)
    with pytest.raises(NoFeeRecord):
        await _pay(db_session, student_id, "500")
    assert await _payment_count(db_session) == 0


@pytest.mark.asyncio
async def test_delete_payment_recomputes(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session)
    first = await _pay(db_session, student_id, "15000")
    await _pay(db_session, student_id, "5000")

    result = await payment_service.delete_payment(db_session, first.payment.payment_id)
    assert result.fee.amount_paid == Decimal("5000")
    assert result.fee.payment_status == PaymentStatus.PARTIALLY_PAID
    with pytest.raises(NotFound):
        await payment_service.get_payment(db_session, first.payment.payment_id)


@pytest.mark.asyncio
async def test_delete_last_payment_yields_unpaid(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session)
    receipt = await _pay(db_session, student_id, "20000")
    assert receipt.fee.payment_status == PaymentStatus.PAID

    result = await payment_service.delete_payment(db_session, receipt.payment.payment_id)
    assert result.fee.amount_paid == Decimal("0")
    assert result.fee.payment_status == PaymentStatus.UNPAID


@pytest.mark.asyncio
async def test_delete_missing_payment(db_session: AsyncSession) -> None:
    with pytest.raises(NotFound):
        await payment_service.delete_payment(db_session, 12345)


@pytest.mark.asyncio
async def test_total_fees_paid_and_history(db_session: AsyncSession) -> None:
    student_id = await make_student_with_fee(db_session)
    await _pay(db_session, student_id, "300", payment_date=date(2025, 3, 25))
    await _pay(db_session, student_id, "200", payment_date=date(2025, 3, 10))

    total = await payment_service.get_total_fees_paid(db_session, student_id)
    assert total.total_paid == Decimal("500")

    history = await payment_service.list_payments(db_session, student_id)
    assert [p.payment_date for p in history] == [date(2025, 3, 10), date(2025, 3, 25)]


@pytest.mark.asyncio
async def test_concurrent_payments_same_student(session_factory) -> None:
    async with session_factory() as db:
        student_id = await make_student_with_fee(db)

    locks = StudentLockRegistry()

    async def pay_once() -> None:
        async with session_factory() as db:
            await payment_service.record_payment(
                db, PaymentCreate(student_id=student_id, amount=Decimal("2000")), locks=locks
            )

    await asyncio.gather(*(pay_once() for _ in range(10)))

    async with session_factory() as db:
        fee = (await db.execute(select(Fee).where(Fee.student_id == student_id))).scalar_one()
        assert Decimal(str(fee.amount_paid)) == Decimal("20000")
        assert fee.payment_status == PaymentStatus.PAID.value
        assert await _payment_count(db) == 10


@pytest.mark.asyncio
async def test_unexpected_failure_rolls_back_payment(db_session: AsyncSession, monkeypatch) -> None:
    student_id = await make_student_with_fee(db_session)

    async def failing_reconcile(db, sid):
        raise RuntimeError("numeric field overflow")

    monkeypatch.setattr(reconciler, "reconcile", failing_reconcile)
    with pytest.raises(RuntimeError):
        await _pay(db_session, student_id, "100")

    # Session is usable again and nothing was persisted
    assert await _payment_count(db_session) == 0
    record = await fee_service.get_fee_record(db_session, student_id)
    assert record.amount_paid == Decimal("0")


@pytest.mark.asyncio
async def test_unexpected_failure_rolls_back_delete(db_session: AsyncSession, monkeypatch) -> None:
    student_id = await make_student_with_fee(db_session)
    receipt = await _pay(db_session, student_id, "100")

    async def failing_reconcile(db, sid):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(reconciler, "reconcile", failing_reconcile)
    with pytest.raises(RuntimeError):
        await payment_service.delete_payment(db_session, receipt.payment.payment_id)

    monkeypatch.undo()
    assert await _payment_count(db_session) == 1
    payment = await payment_service.get_payment(db_session, receipt.payment.payment_id)
    assert payment.amount == Decimal("100")
