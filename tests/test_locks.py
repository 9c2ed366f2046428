import asyncio
import gc

import pytest

from schooldb.core.locks import StudentLockRegistry


def test_same_student_shares_lock() -> None:
    locks = StudentLockRegistry()
    first, again, other = locks.get(1), locks.get(1), locks.get(2)
    assert first is again
    assert first is not other
    assert len(locks) == 2


@pytest.mark.asyncio
async def test_released_locks_are_dropped() -> None:
    locks = StudentLockRegistry()
    for student_id in range(50):
        async with locks.hold(student_id):
            assert len(locks) >= 1
    gc.collect()
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_hold_serializes_same_student() -> None:
    locks = StudentLockRegistry()
    events = []

    async def critical(tag: str) -> None:
        async with locks.hold(7):
            events.append(f"{tag}-in")
            await asyncio.sleep(0.01)
            events.append(f"{tag}-out")

    await asyncio.gather(critical("a"), critical("b"))
    assert events in (["a-in", "a-out", "b-in", "b-out"], ["b-in", "b-out", "a-in", "a-out"])


@pytest.mark.asyncio
async def test_different_students_do_not_block() -> None:
    locks = StudentLockRegistry()
    async with locks.hold(1):
        await asyncio.wait_for(_enter(locks, 2), timeout=1)


async def _enter(locks: StudentLockRegistry, student_id: int) -> None:
    async with locks.hold(student_id):
        pass
