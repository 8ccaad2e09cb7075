"""Unit tests for Session entity.

Tests focus on:
- Factory method (immediate and custom start)
- Invariant validation
- ACTIVE -> COMPLETED transition
- Notes editing
"""

from datetime import datetime, timedelta, timezone

import pytest

from domain.session.core.entities.session import MAX_NOTES_LENGTH, Session
from domain.session.core.exceptions.domain_errors import (
    InvalidEndTimeError,
    InvalidOffsetError,
    InvalidTargetSpecError,
    SessionNotActiveError,
)
from domain.session.core.value_objects import (
    CustomOffset,
    EndReason,
    ExerciseType,
    FastingPlan,
    SessionId,
    SessionKind,
    SessionStatus,
    StartMode,
)


@pytest.fixture
def active_fast(t0: datetime) -> Session:
    return Session.start(
        user_id="user123",
        kind=SessionKind.FASTING,
        start_mode=StartMode.IMMEDIATE,
        now=t0,
        target_spec=FastingPlan.PLAN_16_8,
    )


class TestStart:
    def test_immediate_start(self, active_fast: Session, t0: datetime) -> None:
        assert active_fast.status is SessionStatus.ACTIVE
        assert active_fast.start_time == t0
        assert active_fast.end_time is None
        assert active_fast.duration_minutes is None
        assert active_fast.custom_offset is None
        assert active_fast.created_at == t0

    def test_custom_start_backdates(self, t0: datetime) -> None:
        session = Session.start(
            user_id="user123",
            kind=SessionKind.FASTING,
            start_mode=StartMode.CUSTOM,
            now=t0,
            custom_offset=CustomOffset(hours=2, minutes=15),
            target_spec=FastingPlan.PLAN_16_8,
        )
        assert session.start_time == t0 - timedelta(hours=2, minutes=15)

    def test_custom_start_without_offset(self, t0: datetime) -> None:
        with pytest.raises(InvalidOffsetError):
            Session.start(
                user_id="user123",
                kind=SessionKind.FASTING,
                start_mode=StartMode.CUSTOM,
                now=t0,
                target_spec=FastingPlan.PLAN_16_8,
            )

    def test_fasting_requires_plan(self, t0: datetime) -> None:
        with pytest.raises(InvalidTargetSpecError):
            Session.start("user123", SessionKind.FASTING, StartMode.IMMEDIATE, t0)

    def test_exercise_requires_type(self, t0: datetime) -> None:
        with pytest.raises(InvalidTargetSpecError):
            Session.start("user123", SessionKind.EXERCISE, StartMode.IMMEDIATE, t0)

    def test_exercise_ignores_plan(self, t0: datetime) -> None:
        session = Session.start(
            "user123",
            SessionKind.EXERCISE,
            StartMode.IMMEDIATE,
            t0,
            target_spec=FastingPlan.PLAN_16_8,
            exercise_type=ExerciseType.YOGA,
        )
        assert session.target_spec is None
        assert session.exercise_type is ExerciseType.YOGA


class TestInvariants:
    def test_empty_user_id(self, t0: datetime) -> None:
        with pytest.raises(ValueError, match="User ID"):
            Session.start(
                "  ",
                SessionKind.FASTING,
                StartMode.IMMEDIATE,
                t0,
                target_spec=FastingPlan.PLAN_16_8,
            )

    def test_completed_requires_end_time(self, t0: datetime) -> None:
        with pytest.raises(ValueError):
            Session(
                session_id=SessionId.generate(),
                user_id="user123",
                kind=SessionKind.FASTING,
                start_time=t0,
                start_mode=StartMode.IMMEDIATE,
                status=SessionStatus.COMPLETED,
                target_spec=FastingPlan.PLAN_16_8,
            )

    def test_duration_requires_end_time(self, t0: datetime) -> None:
        with pytest.raises(ValueError):
            Session(
                session_id=SessionId.generate(),
                user_id="user123",
                kind=SessionKind.FASTING,
                start_time=t0,
                start_mode=StartMode.IMMEDIATE,
                duration_minutes=10,
                target_spec=FastingPlan.PLAN_16_8,
            )

    def test_naive_datetimes_become_utc(self) -> None:
        session = Session(
            session_id=SessionId.generate(),
            user_id="user123",
            kind=SessionKind.EXERCISE,
            start_time=datetime(2024, 3, 10, 8, 0),
            start_mode=StartMode.IMMEDIATE,
            exercise_type=ExerciseType.RUNNING,
        )
        assert session.start_time.tzinfo == timezone.utc


class TestComplete:
    def test_complete_at_now(self, active_fast: Session, t0: datetime) -> None:
        now = t0 + timedelta(minutes=65, seconds=30)
        active_fast.complete(now=now)

        assert active_fast.status is SessionStatus.COMPLETED
        assert active_fast.end_time == now
        assert active_fast.duration_minutes == 65
        assert active_fast.end_reason is EndReason.COMPLETED
        assert active_fast.updated_at == now

    def test_complete_with_explicit_end(self, active_fast: Session, t0: datetime) -> None:
        active_fast.complete(
            now=t0 + timedelta(hours=5),
            end_time=t0 + timedelta(hours=3),
            end_reason=EndReason.MANUALLY_STOPPED,
        )
        assert active_fast.duration_minutes == 180
        assert active_fast.end_reason is EndReason.MANUALLY_STOPPED

    def test_end_equal_to_start_gives_zero(self, active_fast: Session, t0: datetime) -> None:
        active_fast.complete(now=t0)
        assert active_fast.duration_minutes == 0

    def test_end_before_start_rejected(self, active_fast: Session, t0: datetime) -> None:
        with pytest.raises(InvalidEndTimeError):
            active_fast.complete(now=t0 + timedelta(hours=1), end_time=t0 - timedelta(minutes=1))
        assert active_fast.is_active

    def test_end_in_future_rejected(self, active_fast: Session, t0: datetime) -> None:
        with pytest.raises(InvalidEndTimeError):
            active_fast.complete(now=t0 + timedelta(hours=1), end_time=t0 + timedelta(hours=2))

    def test_second_complete_rejected(self, active_fast: Session, t0: datetime) -> None:
        active_fast.complete(now=t0 + timedelta(hours=1))
        with pytest.raises(SessionNotActiveError):
            active_fast.complete(now=t0 + timedelta(hours=2))
        assert active_fast.duration_minutes == 60


class TestElapsedMinutes:
    def test_live_while_active(self, active_fast: Session, t0: datetime) -> None:
        assert active_fast.elapsed_minutes(t0 + timedelta(minutes=90)) == 90
        assert active_fast.duration_minutes is None

    def test_stored_when_completed(self, active_fast: Session, t0: datetime) -> None:
        active_fast.complete(now=t0 + timedelta(minutes=30))
        assert active_fast.elapsed_minutes(t0 + timedelta(days=1)) == 30


class TestUpdateNotes:
    def test_update_and_clear(self, active_fast: Session, t0: datetime) -> None:
        active_fast.update_notes("  felt great  ", t0)
        assert active_fast.notes == "felt great"

        active_fast.update_notes("   ", t0)
        assert active_fast.notes is None

    def test_allowed_after_completion(self, active_fast: Session, t0: datetime) -> None:
        active_fast.complete(now=t0 + timedelta(hours=1))
        active_fast.update_notes("done", t0 + timedelta(hours=2))
        assert active_fast.notes == "done"
        assert active_fast.duration_minutes == 60

    def test_too_long(self, active_fast: Session, t0: datetime) -> None:
        with pytest.raises(ValueError):
            active_fast.update_notes("x" * (MAX_NOTES_LENGTH + 1), t0)
