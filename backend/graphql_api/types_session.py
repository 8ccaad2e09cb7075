"""GraphQL types for fasting and exercise sessions.

Targets and categories travel as strings so that unsupported values reach
the domain and come back as INVALID_TARGET_SPEC errors.
"""

from __future__ import annotations

from datetime import date as DateType, datetime
from enum import Enum
from typing import Annotated, List, Optional, Union

import strawberry


__all__ = [
    # Enums
    "SessionStatusEnum",
    "StartModeEnum",
    "StatusFilterEnum",
    # Session types
    "FastingSessionType",
    "ExerciseSessionType",
    "MetabolicPhaseType",
    "PlanProgressType",
    "CurrentFastingSessionType",
    "CurrentExerciseSessionType",
    "FastingSessionPage",
    "ExerciseSessionPage",
    "FastingSessionAnalyticsType",
    "ExerciseSessionAnalyticsType",
    # Summary types
    "PhaseHoursType",
    "PlanUsageType",
    "CategoryBreakdownType",
    "RecentSessionType",
    "FastingAnalyticsSummaryType",
    "ExerciseAnalyticsSummaryType",
    # Inputs
    "StartFastingSessionInput",
    "StartExerciseSessionInput",
    "StopSessionInput",
    "UpdateSessionNotesInput",
    # Results
    "FastingSessionSuccess",
    "ExerciseSessionSuccess",
    "SessionError",
    "FastingSessionResult",
    "ExerciseSessionResult",
]


# ============================================
# ENUMS
# ============================================


@strawberry.enum
class SessionStatusEnum(Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


@strawberry.enum
class StartModeEnum(Enum):
    IMMEDIATE = "immediate"
    CUSTOM = "custom"


@strawberry.enum
class StatusFilterEnum(Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ALL = "all"


# ============================================
# SESSION TYPES
# ============================================


@strawberry.type
class FastingSessionType:
    """A fasting window."""

    id: str
    user_id: str
    status: SessionStatusEnum
    start_mode: StartModeEnum
    start_time: datetime
    end_time: Optional[datetime]
    duration_minutes: Optional[int]
    target_spec: str
    custom_start_hours: Optional[int]
    custom_start_minutes: Optional[int]
    end_reason: Optional[str]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime


@strawberry.type
class ExerciseSessionType:
    """A workout."""

    id: str
    user_id: str
    status: SessionStatusEnum
    start_mode: StartModeEnum
    start_time: datetime
    end_time: Optional[datetime]
    duration_minutes: Optional[int]
    exercise_type: str
    custom_start_hours: Optional[int]
    custom_start_minutes: Optional[int]
    end_reason: Optional[str]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime


@strawberry.type
class MetabolicPhaseType:
    """Time spent in one metabolic phase."""

    phase: str
    label: str
    minutes: int
    hours: float
    percentage: float


@strawberry.type
class PlanProgressType:
    """Progress of a fast against its plan."""

    target_spec: str
    target_hours: int
    completed_hours: float
    completion_percentage: float
    remaining_hours: float
    is_goal_reached: bool


@strawberry.type
class CurrentFastingSessionType:
    """Active fast with live duration, phases and plan progress."""

    session: FastingSessionType
    elapsed_minutes: int
    current_phase: str
    phases: List[MetabolicPhaseType]
    plan_progress: PlanProgressType


@strawberry.type
class CurrentExerciseSessionType:
    """Active workout with live duration."""

    session: ExerciseSessionType
    elapsed_minutes: int


@strawberry.type
class FastingSessionPage:
    sessions: List[FastingSessionType]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_previous: bool


@strawberry.type
class ExerciseSessionPage:
    sessions: List[ExerciseSessionType]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_previous: bool


@strawberry.type
class FastingSessionAnalyticsType:
    """Phases and plan progress of one fast.

    For an active fast ``is_live`` is true and values use the elapsed time.
    """

    session: FastingSessionType
    duration_minutes: int
    is_live: bool
    current_phase: str
    phases: List[MetabolicPhaseType]
    plan_progress: PlanProgressType


@strawberry.type
class ExerciseSessionAnalyticsType:
    session: ExerciseSessionType
    duration_minutes: int
    duration_hours: float
    is_live: bool


# ============================================
# SUMMARY TYPES
# ============================================


@strawberry.type
class PhaseHoursType:
    phase: str
    hours: float


@strawberry.type
class PlanUsageType:
    target_spec: str
    count: int


@strawberry.type
class CategoryBreakdownType:
    exercise_type: str
    sessions: int
    total_hours: float
    average_hours: float


@strawberry.type
class RecentSessionType:
    session_id: str
    date: DateType
    ended_at: datetime
    duration_minutes: int
    duration_hours: float
    target_spec: Optional[str]
    exercise_type: Optional[str]
    phase_hours: List[PhaseHoursType]


@strawberry.type
class FastingAnalyticsSummaryType:
    """Aggregated fasting statistics over completed fasts."""

    total_sessions: int
    total_fasting_hours: float
    average_session_hours: float
    longest_session_hours: float
    current_streak_days: int
    phase_hours: List[PhaseHoursType]
    plan_usage: List[PlanUsageType]
    recent_sessions: List[RecentSessionType]


@strawberry.type
class ExerciseAnalyticsSummaryType:
    """Aggregated exercise statistics over completed workouts."""

    total_sessions: int
    total_hours: float
    average_session_hours: float
    longest_session_hours: float
    current_streak_days: int
    category_breakdown: List[CategoryBreakdownType]
    recent_sessions: List[RecentSessionType]


# ============================================
# MUTATION INPUT TYPES
# ============================================


@strawberry.input
class StartFastingSessionInput:
    """Input for starting a fast.

    ``user_id`` is honoured only when authentication is disabled.
    """

    target_spec: str
    start_mode: StartModeEnum = StartModeEnum.IMMEDIATE
    custom_start_hours: Optional[int] = None
    custom_start_minutes: Optional[int] = None
    notes: Optional[str] = None
    user_id: Optional[str] = None


@strawberry.input
class StartExerciseSessionInput:
    """Input for starting a workout.

    ``start_time`` records a workout logged after the fact; it cannot be
    combined with the custom offset fields.
    """

    exercise_type: str
    start_mode: StartModeEnum = StartModeEnum.IMMEDIATE
    custom_start_hours: Optional[int] = None
    custom_start_minutes: Optional[int] = None
    start_time: Optional[datetime] = None
    notes: Optional[str] = None
    user_id: Optional[str] = None


@strawberry.input
class StopSessionInput:
    """Input for stopping a session. ``end_time`` defaults to now."""

    session_id: str
    end_time: Optional[datetime] = None
    end_reason: Optional[str] = None
    user_id: Optional[str] = None


@strawberry.input
class UpdateSessionNotesInput:
    session_id: str
    notes: Optional[str] = None
    user_id: Optional[str] = None


# ============================================
# MUTATION RESULT TYPES
# ============================================


@strawberry.type
class FastingSessionSuccess:
    """Fasting mutation result; ``analytics`` is filled by stopSession."""

    session: FastingSessionType
    analytics: Optional[FastingSessionAnalyticsType] = None


@strawberry.type
class ExerciseSessionSuccess:
    session: ExerciseSessionType


@strawberry.type
class SessionError:
    """Session mutation error result."""

    message: str
    code: str = "INTERNAL_ERROR"


# ============================================
# UNION RESULT TYPES
# ============================================

FastingSessionResult = Annotated[
    Union[FastingSessionSuccess, SessionError],
    strawberry.union("FastingSessionResult"),
]

ExerciseSessionResult = Annotated[
    Union[ExerciseSessionSuccess, SessionError],
    strawberry.union("ExerciseSessionResult"),
]
