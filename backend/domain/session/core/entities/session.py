"""Session entity - aggregate root for fasting and exercise tracking."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ...calculation.time_arithmetic import elapsed_minutes, ensure_utc, utc_now
from ..exceptions.domain_errors import (
    InvalidEndTimeError,
    InvalidOffsetError,
    InvalidTargetSpecError,
    SessionNotActiveError,
)
from ..value_objects.end_reason import EndReason
from ..value_objects.exercise_type import ExerciseType
from ..value_objects.fasting_plan import FastingPlan
from ..value_objects.session_id import SessionId
from ..value_objects.session_kind import SessionKind
from ..value_objects.session_status import SessionStatus
from ..value_objects.start_mode import CustomOffset, StartMode

MAX_NOTES_LENGTH = 500


@dataclass
class Session:
    """A bounded time interval for one fasting window or workout.

    Invariants:
    - ``end_time`` is set exactly when ``status`` is COMPLETED
    - ``duration_minutes`` is set exactly when ``end_time`` is set and is
      never negative
    - status only moves ACTIVE -> COMPLETED
    - fasting sessions carry a plan, exercise sessions an exercise type

    Attributes:
        session_id: Unique session identifier
        user_id: Owner of the session
        kind: Fasting or exercise
        start_time: When the activity started (UTC)
        start_mode: Immediate or backdated start
        status: Lifecycle state
        end_time: When the activity stopped (UTC)
        duration_minutes: Whole minutes between start and end
        target_spec: Fasting plan (fasting only)
        exercise_type: Workout category (exercise only)
        custom_offset: Backdating offset for custom starts
        end_reason: Why the session was stopped
        notes: Free-form user notes
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    session_id: SessionId
    user_id: str
    kind: SessionKind
    start_time: datetime
    start_mode: StartMode
    status: SessionStatus = SessionStatus.ACTIVE
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    target_spec: Optional[FastingPlan] = None
    exercise_type: Optional[ExerciseType] = None
    custom_offset: Optional[CustomOffset] = None
    end_reason: Optional[EndReason] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.start_time = ensure_utc(self.start_time)
        if self.end_time is not None:
            self.end_time = ensure_utc(self.end_time)
        self.validate_invariants()

    def validate_invariants(self) -> None:
        """Validate domain invariants.

        Raises:
            ValueError: If lifecycle fields are inconsistent
            InvalidTargetSpecError: If the kind-specific target is missing
        """
        if not self.user_id or not self.user_id.strip():
            raise ValueError("User ID cannot be empty")

        completed = self.status is SessionStatus.COMPLETED
        if completed != (self.end_time is not None):
            raise ValueError(
                f"Session in status '{self.status.value}' has inconsistent end_time"
            )
        if (self.duration_minutes is None) != (self.end_time is None):
            raise ValueError("duration_minutes must be set exactly when end_time is set")
        if self.duration_minutes is not None and self.duration_minutes < 0:
            raise ValueError(f"Duration cannot be negative, got {self.duration_minutes}")

        if self.kind is SessionKind.FASTING and self.target_spec is None:
            raise InvalidTargetSpecError("Fasting sessions require a fasting plan")
        if self.kind is SessionKind.EXERCISE and self.exercise_type is None:
            raise InvalidTargetSpecError("Exercise sessions require an exercise type")

    @staticmethod
    def start(
        user_id: str,
        kind: SessionKind,
        start_mode: StartMode,
        now: datetime,
        custom_offset: Optional[CustomOffset] = None,
        target_spec: Optional[FastingPlan] = None,
        exercise_type: Optional[ExerciseType] = None,
        start_time: Optional[datetime] = None,
    ) -> "Session":
        """Factory method for a new active session.

        Args:
            user_id: Owner of the session
            kind: Fasting or exercise
            start_mode: Immediate or custom start
            now: Current time
            custom_offset: Required for custom starts
            target_spec: Fasting plan (fasting only)
            exercise_type: Workout category (exercise only)
            start_time: Explicit start instant; recorded as a custom start
                with the equivalent offset

        Returns:
            Session: New session in ACTIVE status

        Raises:
            InvalidOffsetError: If the explicit start time is in the future
        """
        if start_time is not None:
            start_time = ensure_utc(start_time)
            if start_time > now:
                raise InvalidOffsetError(
                    f"Start time {start_time.isoformat()} is in the future"
                )
            offset_minutes = elapsed_minutes(start_time, now)
            start_mode = StartMode.CUSTOM
            custom_offset = CustomOffset(hours=offset_minutes // 60, minutes=offset_minutes % 60)
        elif start_mode is StartMode.CUSTOM:
            if custom_offset is None:
                custom_offset = CustomOffset.from_input(None, None)
            start_time = custom_offset.apply(now)
        else:
            custom_offset = None
            start_time = now

        return Session(
            session_id=SessionId.generate(),
            user_id=user_id,
            kind=kind,
            start_time=start_time,
            start_mode=start_mode,
            target_spec=target_spec if kind is SessionKind.FASTING else None,
            exercise_type=exercise_type if kind is SessionKind.EXERCISE else None,
            custom_offset=custom_offset,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE

    def complete(
        self,
        now: datetime,
        end_time: Optional[datetime] = None,
        end_reason: EndReason = EndReason.COMPLETED,
    ) -> None:
        """Stop the session (ACTIVE -> COMPLETED).

        Args:
            now: Current time, used as end time when none is given
            end_time: Explicit end time
            end_reason: Why the session stopped

        Raises:
            SessionNotActiveError: If the session is already completed
            InvalidEndTimeError: If end time precedes start or lies in the future
        """
        if not self.is_active:
            raise SessionNotActiveError(str(self.session_id))

        effective_end = ensure_utc(end_time) if end_time is not None else now
        if effective_end < self.start_time:
            raise InvalidEndTimeError(
                f"End time {effective_end.isoformat()} is before start time "
                f"{self.start_time.isoformat()}"
            )
        if effective_end > now:
            raise InvalidEndTimeError(
                f"End time {effective_end.isoformat()} is in the future"
            )

        self.end_time = effective_end
        self.duration_minutes = elapsed_minutes(self.start_time, effective_end)
        self.status = SessionStatus.COMPLETED
        self.end_reason = end_reason
        self.updated_at = now

    def elapsed_minutes(self, now: datetime) -> int:
        """Stored duration when completed, live elapsed time while active."""
        if self.duration_minutes is not None:
            return self.duration_minutes
        return max(0, elapsed_minutes(self.start_time, now))

    def update_notes(self, notes: Optional[str], now: datetime) -> None:
        """Edit non-temporal metadata; allowed in any status.

        Raises:
            ValueError: If notes exceed the maximum length
        """
        cleaned = notes.strip() if notes else None
        if cleaned and len(cleaned) > MAX_NOTES_LENGTH:
            raise ValueError(f"Notes cannot exceed {MAX_NOTES_LENGTH} characters")
        self.notes = cleaned or None
        self.updated_at = now
