"""Shared pytest fixtures."""

from datetime import date

import pytest

from bms.core.modules.counter.allocator import SequenceAllocator
from bms.core.modules.counter.store import InMemoryCounterStore


class FakeClock:
    """Clock whose date the test can move."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


class RecordingSleep:
    """Replacement for asyncio.sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def clock():
    return FakeClock(date(2024, 6, 15))


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def memory_store():
    return InMemoryCounterStore()


@pytest.fixture
def allocator(memory_store, clock, sleep):
    return SequenceAllocator(memory_store, clock=clock, sleep=sleep)
