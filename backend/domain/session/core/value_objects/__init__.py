"""Value objects for session domain."""

from .end_reason import EndReason
from .exercise_type import ExerciseType
from .fasting_plan import FastingPlan
from .session_id import SessionId
from .session_kind import SessionKind
from .session_status import SessionStatus, StatusFilter
from .start_mode import CustomOffset, StartMode

__all__ = [
    "SessionId",
    "SessionKind",
    "SessionStatus",
    "StatusFilter",
    "StartMode",
    "CustomOffset",
    "FastingPlan",
    "ExerciseType",
    "EndReason",
]
