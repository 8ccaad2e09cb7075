"""GetSessionQuery - fetch a single session by ID."""

from dataclasses import dataclass
from typing import Optional

from domain.session.core.entities.session import Session
from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects.session_id import SessionId


@dataclass(frozen=True)
class GetSessionQuery:
    """Query to get a session owned by the caller.

    Attributes:
        user_id: User identifier (for ownership)
        session_id: Session identifier
    """

    user_id: str
    session_id: str


class GetSessionQueryHandler:
    """Handler for GetSessionQuery."""

    def __init__(self, repository: ISessionRepository):
        self._repository = repository

    async def handle(self, query: GetSessionQuery) -> Optional[Session]:
        """Return the session, or None when missing, foreign or malformed."""
        try:
            session_id = SessionId.from_string(query.session_id)
        except ValueError:
            return None
        return await self._repository.find_by_id(session_id, query.user_id)
