"""ListSessionsQuery - paginated session history."""

from dataclasses import dataclass
import math
from typing import List

from domain.session.core.entities.session import Session
from domain.session.core.exceptions.domain_errors import InvalidPaginationError
from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects.session_status import StatusFilter

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100


@dataclass(frozen=True)
class ListSessionsQuery:
    """Query to list sessions newest first.

    Attributes:
        user_id: User identifier
        page: 1-based page number
        limit: Page size (1-100)
        status_filter: Status to include
    """

    user_id: str
    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT
    status_filter: StatusFilter = StatusFilter.ALL


@dataclass(frozen=True)
class SessionPage:
    """One page of sessions.

    Attributes:
        sessions: Sessions ordered by start_time descending
        total: Number of sessions matching the filter
        page: Current page
        limit: Page size
        total_pages: ceil(total / limit)
    """

    sessions: List[Session]
    total: int
    page: int
    limit: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class ListSessionsQueryHandler:
    """Handler for ListSessionsQuery."""

    def __init__(self, repository: ISessionRepository):
        self._repository = repository

    async def handle(self, query: ListSessionsQuery) -> SessionPage:
        """
        Handle list query.

        Raises:
            InvalidPaginationError: If page < 1 or limit outside 1-100
        """
        if query.page < 1:
            raise InvalidPaginationError(f"Page must be >= 1, got {query.page}")
        if not 1 <= query.limit <= MAX_PAGE_LIMIT:
            raise InvalidPaginationError(
                f"Limit must be between 1 and {MAX_PAGE_LIMIT}, got {query.limit}"
            )

        sessions = await self._repository.list(
            query.user_id,
            status_filter=query.status_filter,
            page=query.page,
            limit=query.limit,
        )
        total = await self._repository.count(query.user_id, status_filter=query.status_filter)

        return SessionPage(
            sessions=sessions,
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=math.ceil(total / query.limit),
        )
