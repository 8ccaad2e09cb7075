"""Unit test configuration.

Unit tests should not depend on app.py or external services: they build
handlers and repositories directly.
"""

from datetime import datetime, timedelta, timezone

import pytest

from domain.session.core.value_objects.session_kind import SessionKind
from infrastructure.persistence.in_memory.session_repository import (
    InMemorySessionRepository,
)

T0 = datetime(2024, 3, 10, 8, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock for deterministic durations."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def t0() -> datetime:
    """Fixed reference instant (2024-03-10 08:00 UTC)."""
    return T0


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fasting_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository(SessionKind.FASTING)


@pytest.fixture
def exercise_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository(SessionKind.EXERCISE)
