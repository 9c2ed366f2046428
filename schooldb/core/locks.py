"""Per-student serialization for fee ledger mutations."""

import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator


class StudentLockRegistry:
    """
    One asyncio.Lock per student id. Ledger operations for the same student run
    one at a time; different students never wait on each other.

    Locks are held weakly: an entry lives only while some operation holds or
    waits on it, so ids that are no longer touched do not accumulate.
    """

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()

    def get(self, student_id: int) -> asyncio.Lock:
        lock = self._locks.get(student_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[student_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, student_id: int) -> AsyncIterator[None]:
        lock = self.get(student_id)
        async with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)


student_locks = StudentLockRegistry()
