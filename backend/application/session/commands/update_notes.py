"""UpdateSessionNotesCommand - edit session notes."""

from dataclasses import dataclass
from datetime import datetime
import logging
from typing import Callable, Optional

from domain.session.calculation.time_arithmetic import utc_now
from domain.session.core.entities.session import Session
from domain.session.core.exceptions.domain_errors import SessionNotFoundError
from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects.session_id import SessionId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateSessionNotesCommand:
    """
    Command: Replace the notes of a session.

    Allowed for active and completed sessions. ``None`` or blank notes
    clear the field.

    Attributes:
        user_id: User identifier (for ownership)
        session_id: Session to edit
        notes: New notes (max 500 characters)
    """

    user_id: str
    session_id: str
    notes: Optional[str] = None


class UpdateSessionNotesCommandHandler:
    """Handler for UpdateSessionNotesCommand."""

    def __init__(
        self,
        repository: ISessionRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repository = repository
        self._clock = clock

    async def handle(self, command: UpdateSessionNotesCommand) -> Session:
        """
        Execute notes update.

        Raises:
            SessionNotFoundError: If the session does not exist for the user
            ValueError: If notes are too long
        """
        try:
            session_id = SessionId.from_string(command.session_id)
        except ValueError:
            raise SessionNotFoundError(command.session_id)

        session = await self._repository.find_by_id(session_id, command.user_id)
        if session is None:
            raise SessionNotFoundError(command.session_id)

        session.update_notes(command.notes, self._clock())
        await self._repository.save(session)

        logger.info(
            "Session notes updated",
            extra={"session_id": str(session.session_id), "user_id": session.user_id},
        )
        return session
