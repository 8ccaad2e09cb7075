"""StopSessionCommand - complete an active session."""

from dataclasses import dataclass
from datetime import datetime
import logging
from typing import Callable, Optional

from domain.session.calculation.time_arithmetic import utc_now
from domain.session.core.entities.session import Session
from domain.session.core.exceptions.domain_errors import SessionNotFoundError
from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects.end_reason import EndReason
from domain.session.core.value_objects.session_id import SessionId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StopSessionCommand:
    """Command to stop an active session.

    Attributes:
        user_id: User identifier (for ownership)
        session_id: Session to stop
        end_time: Explicit end time (defaults to now)
        end_reason: Why the session stopped (defaults to "completed")
    """

    user_id: str
    session_id: str
    end_time: Optional[datetime] = None
    end_reason: Optional[str] = None


class StopSessionCommandHandler:
    """Handler for StopSessionCommand."""

    def __init__(
        self,
        repository: ISessionRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repository = repository
        self._clock = clock

    async def handle(self, command: StopSessionCommand) -> Session:
        """
        Execute stop command.

        Flow:
        1. Validate end reason for the session kind
        2. Load session scoped to the caller
        3. Transition ACTIVE -> COMPLETED and persist only if still ACTIVE

        Args:
            command: StopSessionCommand

        Returns:
            Session: Completed session with duration

        Raises:
            InvalidEndReasonError: If end reason is not allowed for the kind
            SessionNotFoundError: If the session does not exist for the user
            SessionNotActiveError: If the session is already completed
            InvalidEndTimeError: If end time is before start or in the future
        """
        end_reason = EndReason.parse(command.end_reason, self._repository.kind)

        try:
            session_id = SessionId.from_string(command.session_id)
        except ValueError:
            raise SessionNotFoundError(command.session_id)

        session = await self._repository.find_by_id(session_id, command.user_id)
        if session is None:
            raise SessionNotFoundError(command.session_id)

        session.complete(
            now=self._clock(),
            end_time=command.end_time,
            end_reason=end_reason,
        )
        await self._repository.complete(session)

        logger.info(
            "Session stopped",
            extra={
                "session_id": str(session.session_id),
                "user_id": session.user_id,
                "kind": session.kind.value,
                "duration_minutes": session.duration_minutes,
                "end_reason": end_reason.value,
            },
        )
        return session
