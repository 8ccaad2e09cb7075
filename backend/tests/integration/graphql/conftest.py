"""Fixtures for session GraphQL resolver tests."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import MagicMock

import pytest

from domain.session.calculation.analytics_service import AnalyticsService
from domain.session.core.value_objects.session_kind import SessionKind
from infrastructure.persistence.in_memory.session_repository import (
    InMemorySessionRepository,
)


class SteppingClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 3, 10, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class MockInfo:
    """Mock GraphQL Info object."""

    def __init__(
        self,
        fasting_repository,
        exercise_repository,
        clock,
        sub: Optional[str] = None,
        auth_required: bool = True,
        headers: Optional[dict] = None,
    ):
        mock_request = MagicMock()
        mock_request.headers = headers or {}
        self.context = {
            "fasting_repository": fasting_repository,
            "exercise_repository": exercise_repository,
            "analytics_service": AnalyticsService(),
            "clock": clock,
            "auth_required": auth_required,
            "auth_claims": {"sub": sub} if sub else None,
            "request": mock_request,
        }


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def fasting_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository(SessionKind.FASTING)


@pytest.fixture
def exercise_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository(SessionKind.EXERCISE)


@pytest.fixture
def make_info(fasting_repository, exercise_repository, clock):
    def _make(sub: Optional[str] = "user-123", **kwargs) -> MockInfo:
        return MockInfo(fasting_repository, exercise_repository, clock, sub=sub, **kwargs)

    return _make
