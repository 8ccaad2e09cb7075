"""Start mode and custom start offset value objects."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from ..exceptions.domain_errors import InvalidOffsetError


class StartMode(str, Enum):
    """How the start time of a session is chosen.

    - IMMEDIATE: the session starts now
    - CUSTOM: the session started a given offset before now
    """

    IMMEDIATE = "immediate"
    CUSTOM = "custom"


@dataclass(frozen=True)
class CustomOffset:
    """Backdating offset for a custom start.

    Attributes:
        hours: Whole hours before now (>= 0)
        minutes: Additional minutes before now (0-59)
    """

    hours: int = 0
    minutes: int = 0

    def __post_init__(self) -> None:
        if self.hours < 0:
            raise InvalidOffsetError(f"Custom start hours cannot be negative, got {self.hours}")
        if not 0 <= self.minutes <= 59:
            raise InvalidOffsetError(
                f"Custom start minutes must be between 0 and 59, got {self.minutes}"
            )

    @staticmethod
    def from_input(hours: Optional[int], minutes: Optional[int]) -> "CustomOffset":
        """Build an offset from optional request fields.

        At least one of the two fields must be supplied. Explicit zeros are
        accepted and yield a start time equal to now.

        Raises:
            InvalidOffsetError: If both fields are missing or out of range
        """
        if hours is None and minutes is None:
            raise InvalidOffsetError(
                "Custom start hours or minutes are required for custom start mode"
            )
        return CustomOffset(hours=hours or 0, minutes=minutes or 0)

    @property
    def total_minutes(self) -> int:
        """Offset expressed in minutes."""
        return self.hours * 60 + self.minutes

    def apply(self, now: datetime) -> datetime:
        """Return ``now`` moved back by this offset."""
        return now - timedelta(minutes=self.total_minutes)
