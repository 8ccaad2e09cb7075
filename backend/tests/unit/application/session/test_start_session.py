"""Unit tests for StartSessionCommandHandler."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from application.session.commands.start_session import (
    StartSessionCommand,
    StartSessionCommandHandler,
)
from domain.session.core.exceptions.domain_errors import (
    ActiveSessionExistsError,
    InvalidOffsetError,
    InvalidTargetSpecError,
)
from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects import (
    ExerciseType,
    FastingPlan,
    SessionKind,
    SessionStatus,
    StartMode,
    StatusFilter,
)


@pytest.fixture
def handler(fasting_repository, clock) -> StartSessionCommandHandler:
    return StartSessionCommandHandler(repository=fasting_repository, clock=clock)


class TestStartFasting:
    @pytest.mark.asyncio
    async def test_immediate_start(self, handler, fasting_repository, clock) -> None:
        session = await handler.handle(StartSessionCommand(user_id="user123", target_spec="16:8"))

        assert session.status is SessionStatus.ACTIVE
        assert session.start_time == clock.now
        assert session.target_spec is FastingPlan.PLAN_16_8
        assert session.kind is SessionKind.FASTING

        stored = await fasting_repository.find_active("user123")
        assert stored is not None
        assert stored.session_id == session.session_id

    @pytest.mark.asyncio
    async def test_custom_start(self, handler, clock) -> None:
        session = await handler.handle(
            StartSessionCommand(
                user_id="user123",
                start_mode=StartMode.CUSTOM,
                custom_start_hours=3,
                custom_start_minutes=20,
                target_spec="18:6",
            )
        )
        assert session.start_time == clock.now - timedelta(hours=3, minutes=20)
        assert session.custom_offset.total_minutes == 200

    @pytest.mark.asyncio
    async def test_custom_start_without_offset(self, handler, fasting_repository) -> None:
        with pytest.raises(InvalidOffsetError):
            await handler.handle(
                StartSessionCommand(
                    user_id="user123", start_mode=StartMode.CUSTOM, target_spec="16:8"
                )
            )
        assert fasting_repository.count_all() == 0

    @pytest.mark.asyncio
    async def test_invalid_plan(self, handler, fasting_repository) -> None:
        with pytest.raises(InvalidTargetSpecError):
            await handler.handle(StartSessionCommand(user_id="user123", target_spec="17:7"))
        assert fasting_repository.count_all() == 0

    @pytest.mark.asyncio
    async def test_notes_are_stored(self, handler) -> None:
        session = await handler.handle(
            StartSessionCommand(user_id="user123", target_spec="16:8", notes=" first fast ")
        )
        assert session.notes == "first fast"

    @pytest.mark.asyncio
    async def test_second_start_rejected(self, handler) -> None:
        await handler.handle(StartSessionCommand(user_id="user123", target_spec="16:8"))

        with pytest.raises(ActiveSessionExistsError) as exc_info:
            await handler.handle(StartSessionCommand(user_id="user123", target_spec="16:8"))
        assert exc_info.value.code == "ACTIVE_SESSION_EXISTS"

    @pytest.mark.asyncio
    async def test_other_users_unaffected(self, handler) -> None:
        await handler.handle(StartSessionCommand(user_id="user123", target_spec="16:8"))
        other = await handler.handle(StartSessionCommand(user_id="user456", target_spec="16:8"))
        assert other.user_id == "user456"

    @pytest.mark.asyncio
    async def test_concurrent_starts_leave_one_active(self, handler, fasting_repository) -> None:
        """GIVEN many simultaneous starts WHEN they race THEN exactly one succeeds."""
        results = await asyncio.gather(
            *[
                handler.handle(StartSessionCommand(user_id="user123", target_spec="16:8"))
                for _ in range(10)
            ],
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        failures = [r for r in results if isinstance(r, ActiveSessionExistsError)]
        assert len(successes) == 1
        assert len(failures) == 9
        assert await fasting_repository.count("user123", StatusFilter.ACTIVE) == 1


class TestStartExercise:
    @pytest.mark.asyncio
    async def test_start_workout(self, exercise_repository, clock) -> None:
        handler = StartSessionCommandHandler(repository=exercise_repository, clock=clock)

        session = await handler.handle(
            StartSessionCommand(user_id="user123", exercise_type="Cycling")
        )

        assert session.kind is SessionKind.EXERCISE
        assert session.exercise_type is ExerciseType.CYCLING
        assert session.target_spec is None

    @pytest.mark.asyncio
    async def test_unknown_type(self, exercise_repository, clock) -> None:
        handler = StartSessionCommandHandler(repository=exercise_repository, clock=clock)
        with pytest.raises(InvalidTargetSpecError):
            await handler.handle(StartSessionCommand(user_id="user123", exercise_type="chess"))

    @pytest.mark.asyncio
    async def test_fast_and_workout_can_overlap(
        self, fasting_repository, exercise_repository, clock
    ) -> None:
        await StartSessionCommandHandler(fasting_repository, clock).handle(
            StartSessionCommand(user_id="user123", target_spec="16:8")
        )
        workout = await StartSessionCommandHandler(exercise_repository, clock).handle(
            StartSessionCommand(user_id="user123", exercise_type="running")
        )
        assert workout.is_active

    @pytest.mark.asyncio
    async def test_explicit_start_time(self, exercise_repository, clock) -> None:
        """GIVEN a workout logged late WHEN started with its real start THEN it is kept."""
        handler = StartSessionCommandHandler(repository=exercise_repository, clock=clock)
        started_at = clock.now - timedelta(hours=1, minutes=20)

        session = await handler.handle(
            StartSessionCommand(
                user_id="user123", exercise_type="running", start_time=started_at
            )
        )

        assert session.start_time == started_at
        assert session.start_mode is StartMode.CUSTOM
        assert (session.custom_offset.hours, session.custom_offset.minutes) == (1, 20)

    @pytest.mark.asyncio
    async def test_future_start_time_rejected(self, exercise_repository, clock) -> None:
        handler = StartSessionCommandHandler(repository=exercise_repository, clock=clock)
        with pytest.raises(InvalidOffsetError):
            await handler.handle(
                StartSessionCommand(
                    user_id="user123",
                    exercise_type="running",
                    start_time=clock.now + timedelta(minutes=5),
                )
            )
        assert await exercise_repository.find_active("user123") is None

    @pytest.mark.asyncio
    async def test_start_time_with_offset_rejected(self, exercise_repository, clock) -> None:
        handler = StartSessionCommandHandler(repository=exercise_repository, clock=clock)
        with pytest.raises(InvalidOffsetError):
            await handler.handle(
                StartSessionCommand(
                    user_id="user123",
                    exercise_type="running",
                    start_mode=StartMode.CUSTOM,
                    custom_start_hours=1,
                    start_time=clock.now - timedelta(hours=1),
                )
            )


class TestStorageConstraint:
    @pytest.mark.asyncio
    async def test_create_conflict_propagates(self, clock) -> None:
        """Repository constraint wins even when the pre-check saw nothing."""
        repository = AsyncMock(spec=ISessionRepository)
        repository.kind = SessionKind.FASTING
        repository.find_active.return_value = None
        repository.create.side_effect = ActiveSessionExistsError("user123", "fasting")

        handler = StartSessionCommandHandler(repository=repository, clock=clock)

        with pytest.raises(ActiveSessionExistsError):
            await handler.handle(StartSessionCommand(user_id="user123", target_spec="16:8"))
        repository.create.assert_awaited_once()
