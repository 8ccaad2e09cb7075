"""In-memory implementation of ISessionRepository for testing."""

import asyncio
from copy import deepcopy
from typing import Dict, List, Optional

from domain.session.core.entities.session import Session
from domain.session.core.exceptions.domain_errors import (
    ActiveSessionExistsError,
    SessionNotActiveError,
)
from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects.session_id import SessionId
from domain.session.core.value_objects.session_kind import SessionKind
from domain.session.core.value_objects.session_status import StatusFilter


class InMemorySessionRepository(ISessionRepository):
    """
    In-memory implementation of session repository.

    Uses a dictionary to store sessions in memory. Suitable for testing
    and development. Data is lost when the application stops.

    The active-session check and the insert run under one asyncio.Lock,
    so concurrent creates for a user cannot both succeed.
    """

    def __init__(self, kind: SessionKind) -> None:
        self._kind = kind
        self._sessions: Dict[str, Session] = {}
        self._lock = asyncio.Lock()

    @property
    def kind(self) -> SessionKind:
        return self._kind

    async def create(self, session: Session) -> None:
        """
        Insert a session.

        Raises:
            ActiveSessionExistsError: If the user already has an active session
        """
        async with self._lock:
            if session.is_active and self._active_for(session.user_id) is not None:
                raise ActiveSessionExistsError(session.user_id, self._kind.value)
            # Deep copy to prevent external mutations
            self._sessions[str(session.session_id)] = deepcopy(session)

    async def save(self, session: Session) -> None:
        async with self._lock:
            active = self._active_for(session.user_id)
            if (
                session.is_active
                and active is not None
                and active.session_id != session.session_id
            ):
                raise ActiveSessionExistsError(session.user_id, self._kind.value)
            key = str(session.session_id)
            if key in self._sessions:
                self._sessions[key] = deepcopy(session)

    async def complete(self, session: Session) -> None:
        """
        Store a completed session over its ACTIVE copy.

        Raises:
            SessionNotActiveError: If the stored session is missing or completed
        """
        async with self._lock:
            key = str(session.session_id)
            stored = self._sessions.get(key)
            if stored is None or stored.user_id != session.user_id or not stored.is_active:
                raise SessionNotActiveError(key)
            self._sessions[key] = deepcopy(session)

    async def find_active(self, user_id: str) -> Optional[Session]:
        active = self._active_for(user_id)
        return deepcopy(active) if active else None

    async def find_by_id(self, session_id: SessionId, user_id: str) -> Optional[Session]:
        session = self._sessions.get(str(session_id))
        if session is None or session.user_id != user_id:
            return None
        return deepcopy(session)

    async def list(
        self,
        user_id: str,
        status_filter: StatusFilter = StatusFilter.ALL,
        page: int = 1,
        limit: int = 20,
    ) -> List[Session]:
        matching = sorted(
            self._matching(user_id, status_filter),
            key=lambda s: s.start_time,
            reverse=True,
        )
        offset = (page - 1) * limit
        return [deepcopy(s) for s in matching[offset : offset + limit]]

    async def count(self, user_id: str, status_filter: StatusFilter = StatusFilter.ALL) -> int:
        return len(self._matching(user_id, status_filter))

    async def list_completed(self, user_id: str) -> List[Session]:
        completed = sorted(
            self._matching(user_id, StatusFilter.COMPLETED),
            key=lambda s: s.end_time,
            reverse=True,
        )
        return [deepcopy(s) for s in completed]

    async def delete_all_for_user(self, user_id: str) -> int:
        async with self._lock:
            ids = [sid for sid, s in self._sessions.items() if s.user_id == user_id]
            for sid in ids:
                del self._sessions[sid]
            return len(ids)

    def clear(self) -> None:
        """Clear all sessions (for testing)."""
        self._sessions.clear()

    def count_all(self) -> int:
        """Total number of stored sessions (for testing)."""
        return len(self._sessions)

    def _active_for(self, user_id: str) -> Optional[Session]:
        for session in self._sessions.values():
            if session.user_id == user_id and session.is_active:
                return session
        return None

    def _matching(self, user_id: str, status_filter: StatusFilter) -> List[Session]:
        return [
            s
            for s in self._sessions.values()
            if s.user_id == user_id and status_filter.matches(s.status)
        ]
