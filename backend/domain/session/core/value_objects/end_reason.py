"""EndReason value object - why a session was stopped."""

from enum import Enum
from typing import FrozenSet, Optional

from ..exceptions.domain_errors import InvalidEndReasonError
from .session_kind import SessionKind


class EndReason(str, Enum):
    """Reason recorded when a session is stopped."""

    COMPLETED = "completed"
    MANUALLY_STOPPED = "manually_stopped"
    CANCELLED = "cancelled"
    INTERRUPTED = "interrupted"

    @staticmethod
    def allowed_for(kind: SessionKind) -> FrozenSet["EndReason"]:
        """End reasons accepted for a session kind."""
        if kind is SessionKind.FASTING:
            return frozenset(
                {EndReason.COMPLETED, EndReason.MANUALLY_STOPPED, EndReason.INTERRUPTED}
            )
        return frozenset({EndReason.COMPLETED, EndReason.CANCELLED, EndReason.INTERRUPTED})

    @classmethod
    def parse(cls, raw: Optional[str], kind: SessionKind) -> "EndReason":
        """Parse an end reason, defaulting to COMPLETED.

        Raises:
            InvalidEndReasonError: If the reason is unknown or not allowed for ``kind``
        """
        if raw is None or not str(raw).strip():
            return cls.COMPLETED

        allowed = cls.allowed_for(kind)
        try:
            reason = cls(str(raw).strip().lower())
        except ValueError:
            reason = None

        if reason is None or reason not in allowed:
            names = ", ".join(sorted(r.value for r in allowed))
            raise InvalidEndReasonError(
                f"End reason '{raw}' is not valid for {kind.value} sessions. "
                f"Allowed: {names}"
            )
        return reason
