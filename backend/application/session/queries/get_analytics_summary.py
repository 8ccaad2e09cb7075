"""GetAnalyticsSummaryQuery - aggregate statistics over completed sessions."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from domain.session.calculation.analytics_service import (
    AnalyticsService,
    AnalyticsSummary,
)
from domain.session.calculation.time_arithmetic import utc_now
from domain.session.core.ports.repository import ISessionRepository


@dataclass(frozen=True)
class GetAnalyticsSummaryQuery:
    """Query for the caller's analytics summary."""

    user_id: str


class GetAnalyticsSummaryQueryHandler:
    """Handler for GetAnalyticsSummaryQuery.

    Recomputes the summary from stored sessions on every call.
    """

    def __init__(
        self,
        repository: ISessionRepository,
        clock: Callable[[], datetime] = utc_now,
        analytics_service: Optional[AnalyticsService] = None,
    ):
        self._repository = repository
        self._clock = clock
        self._analytics = analytics_service or AnalyticsService()

    async def handle(self, query: GetAnalyticsSummaryQuery) -> AnalyticsSummary:
        sessions = await self._repository.list_completed(query.user_id)
        return self._analytics.summarize(
            kind=self._repository.kind,
            sessions=sessions,
            today=self._clock().date(),
        )
