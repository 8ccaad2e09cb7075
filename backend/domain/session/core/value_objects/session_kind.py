"""SessionKind value object - which activity a session tracks."""

from enum import Enum


class SessionKind(str, Enum):
    """Kind of timed activity.

    Each kind is persisted in its own store, so the single-active-session
    rule holds per (user, kind).
    """

    FASTING = "fasting"
    EXERCISE = "exercise"

    @property
    def collection_name(self) -> str:
        """Document collection backing this kind."""
        return f"{self.value}_sessions"
