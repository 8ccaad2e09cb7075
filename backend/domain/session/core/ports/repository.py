"""ISessionRepository port - repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.session import Session
from ..value_objects.session_id import SessionId
from ..value_objects.session_kind import SessionKind
from ..value_objects.session_status import StatusFilter


class ISessionRepository(ABC):
    """Port for session persistence.

    One repository instance serves one session kind. Implementations must
    reject a second ACTIVE session for the same user atomically in
    :meth:`create`, raising ``ActiveSessionExistsError``.
    """

    @property
    @abstractmethod
    def kind(self) -> SessionKind:
        """Session kind stored by this repository."""
        pass

    @abstractmethod
    async def create(self, session: Session) -> None:
        """Insert a new session.

        Args:
            session: New session (normally ACTIVE)

        Raises:
            ActiveSessionExistsError: If the user already has an active session
        """
        pass

    @abstractmethod
    async def save(self, session: Session) -> None:
        """Persist changes to an existing session.

        Sessions that are no longer stored (erased concurrently) are not
        recreated.

        Args:
            session: Session to update
        """
        pass

    @abstractmethod
    async def complete(self, session: Session) -> None:
        """Persist a completed session if the stored copy is still ACTIVE.

        The status check and the write are one atomic step, so of two
        overlapping stops exactly one succeeds.

        Args:
            session: Session already transitioned to COMPLETED

        Raises:
            SessionNotActiveError: If the stored session is missing or no
                longer active
        """
        pass

    @abstractmethod
    async def find_active(self, user_id: str) -> Optional[Session]:
        """Find the active session of a user.

        Args:
            user_id: User identifier

        Returns:
            Optional[Session]: Active session if any
        """
        pass

    @abstractmethod
    async def find_by_id(self, session_id: SessionId, user_id: str) -> Optional[Session]:
        """Find a session owned by ``user_id``.

        Args:
            session_id: Session identifier
            user_id: Owner; sessions of other users are never returned

        Returns:
            Optional[Session]: Session if found and owned by the user
        """
        pass

    @abstractmethod
    async def list(
        self,
        user_id: str,
        status_filter: StatusFilter = StatusFilter.ALL,
        page: int = 1,
        limit: int = 20,
    ) -> List[Session]:
        """List sessions ordered by start_time descending.

        Args:
            user_id: User identifier
            status_filter: Status to include
            page: 1-based page number
            limit: Page size

        Returns:
            List[Session]: Sessions in the requested page
        """
        pass

    @abstractmethod
    async def count(self, user_id: str, status_filter: StatusFilter = StatusFilter.ALL) -> int:
        """Count sessions of a user matching ``status_filter``."""
        pass

    @abstractmethod
    async def list_completed(self, user_id: str) -> List[Session]:
        """All completed sessions of a user, most recent end first."""
        pass

    @abstractmethod
    async def delete_all_for_user(self, user_id: str) -> int:
        """Erase every session of a user (account deletion).

        Returns:
            int: Number of sessions deleted
        """
        pass
