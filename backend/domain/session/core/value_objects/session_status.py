"""Session status and list filter enums."""

from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle state of a session.

    ACTIVE is the only initial state and COMPLETED is terminal.
    """

    ACTIVE = "active"
    COMPLETED = "completed"


class StatusFilter(str, Enum):
    """Status filter accepted by session listing."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ALL = "all"

    def matches(self, status: SessionStatus) -> bool:
        """Return True if a session in ``status`` passes this filter."""
        if self is StatusFilter.ALL:
            return True
        return self.value == status.value
