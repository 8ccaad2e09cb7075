"""ExerciseType value object - category of a workout."""

from enum import Enum
from typing import Optional

from ..exceptions.domain_errors import InvalidTargetSpecError


class ExerciseType(str, Enum):
    """Workout categories used for exercise breakdowns."""

    RUNNING = "running"
    CYCLING = "cycling"
    WALKING = "walking"
    SWIMMING = "swimming"
    WEIGHTLIFTING = "weightlifting"
    YOGA = "yoga"
    HIIT = "hiit"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ExerciseType":
        """Parse an exercise type (case-insensitive).

        Raises:
            InvalidTargetSpecError: If the type is missing or unknown
        """
        if raw is None or not str(raw).strip():
            raise InvalidTargetSpecError("Exercise type is required")
        try:
            return cls(str(raw).strip().lower())
        except ValueError as e:
            supported = ", ".join(t.value for t in cls)
            raise InvalidTargetSpecError(
                f"Unsupported exercise type '{raw}'. Supported types: {supported}"
            ) from e
