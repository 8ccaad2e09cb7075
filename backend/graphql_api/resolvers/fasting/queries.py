"""Query resolvers for fasting sessions.

These resolvers execute CQRS queries using Query Handlers:
- currentSession: Active fast with live phases and plan progress
- sessions: Paginated history
- session: Single fast by ID
- sessionAnalytics: Phases and plan progress of one fast
- analyticsSummary: Aggregated statistics and streak
"""

from typing import Optional

import strawberry

from application.session.queries.get_analytics_summary import (
    GetAnalyticsSummaryQuery,
    GetAnalyticsSummaryQueryHandler,
)
from application.session.queries.get_current_session import (
    GetCurrentSessionQuery,
    GetCurrentSessionQueryHandler,
)
from application.session.queries.get_session import GetSessionQuery, GetSessionQueryHandler
from application.session.queries.get_session_analytics import (
    GetSessionAnalyticsQuery,
    GetSessionAnalyticsQueryHandler,
)
from application.session.queries.list_sessions import (
    DEFAULT_PAGE_LIMIT,
    ListSessionsQuery,
    ListSessionsQueryHandler,
)
from domain.session.core.value_objects.session_kind import SessionKind
from domain.session.core.value_objects.session_status import StatusFilter
from graphql_api.context import resolve_user_id
from graphql_api.mappers import (
    map_fasting_analytics,
    map_fasting_session,
    map_fasting_summary,
    map_phases,
    map_plan_progress,
)
from graphql_api.resolvers.common import get_analytics_service, get_clock, get_repository
from graphql_api.types_session import (
    CurrentFastingSessionType,
    FastingAnalyticsSummaryType,
    FastingSessionAnalyticsType,
    FastingSessionPage,
    FastingSessionType,
    StatusFilterEnum,
)

KIND = SessionKind.FASTING


@strawberry.type
class FastingQueries:
    """Read operations for fasting sessions.

    Example:
        query {
          fasting {
            currentSession { elapsedMinutes currentPhase planProgress { remainingHours } }
            sessions(page: 1, limit: 20, status: COMPLETED) { totalPages sessions { id } }
          }
        }
    """

    @strawberry.field(description="Active fast with live duration, phases and plan progress")
    async def current_session(
        self, info: strawberry.types.Info, user_id: Optional[str] = None
    ) -> Optional[CurrentFastingSessionType]:
        handler = GetCurrentSessionQueryHandler(
            repository=get_repository(info, KIND), clock=get_clock(info)
        )
        view = await handler.handle(GetCurrentSessionQuery(user_id=resolve_user_id(info, user_id)))
        if view is None:
            return None

        return CurrentFastingSessionType(
            session=map_fasting_session(view.session),
            elapsed_minutes=view.elapsed_minutes,
            current_phase=view.metabolic_profile.current_phase.value,
            phases=map_phases(view.metabolic_profile),
            plan_progress=map_plan_progress(view.plan_progress),
        )

    @strawberry.field(description="Fasting history, newest first")
    async def sessions(
        self,
        info: strawberry.types.Info,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
        status: StatusFilterEnum = StatusFilterEnum.ALL,
        user_id: Optional[str] = None,
    ) -> FastingSessionPage:
        """List fasts.

        Raises:
            InvalidPaginationError: If page < 1 or limit outside 1-100
        """
        handler = ListSessionsQueryHandler(repository=get_repository(info, KIND))
        result = await handler.handle(
            ListSessionsQuery(
                user_id=resolve_user_id(info, user_id),
                page=page,
                limit=limit,
                status_filter=StatusFilter(status.value),
            )
        )
        return FastingSessionPage(
            sessions=[map_fasting_session(s) for s in result.sessions],
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
            has_next=result.has_next,
            has_previous=result.has_previous,
        )

    @strawberry.field(description="Single fast by ID")
    async def session(
        self, info: strawberry.types.Info, session_id: str, user_id: Optional[str] = None
    ) -> Optional[FastingSessionType]:
        handler = GetSessionQueryHandler(repository=get_repository(info, KIND))
        session = await handler.handle(
            GetSessionQuery(user_id=resolve_user_id(info, user_id), session_id=session_id)
        )
        return map_fasting_session(session) if session else None

    @strawberry.field(description="Metabolic phases and plan progress of one fast")
    async def session_analytics(
        self, info: strawberry.types.Info, session_id: str, user_id: Optional[str] = None
    ) -> Optional[FastingSessionAnalyticsType]:
        handler = GetSessionAnalyticsQueryHandler(
            repository=get_repository(info, KIND), clock=get_clock(info)
        )
        analytics = await handler.handle(
            GetSessionAnalyticsQuery(user_id=resolve_user_id(info, user_id), session_id=session_id)
        )
        if analytics is None:
            return None
        return map_fasting_analytics(analytics)

    @strawberry.field(description="Aggregated fasting statistics and streak")
    async def analytics_summary(
        self, info: strawberry.types.Info, user_id: Optional[str] = None
    ) -> FastingAnalyticsSummaryType:
        handler = GetAnalyticsSummaryQueryHandler(
            repository=get_repository(info, KIND),
            clock=get_clock(info),
            analytics_service=get_analytics_service(info),
        )
        summary = await handler.handle(
            GetAnalyticsSummaryQuery(user_id=resolve_user_id(info, user_id))
        )
        return map_fasting_summary(summary)
