"""Query resolvers for exercise sessions."""

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
from domain.session.calculation.time_arithmetic import minutes_to_hours
from domain.session.core.value_objects.session_kind import SessionKind
from domain.session.core.value_objects.session_status import StatusFilter
from graphql_api.context import resolve_user_id
from graphql_api.mappers import map_exercise_session, map_exercise_summary
from graphql_api.resolvers.common import get_analytics_service, get_clock, get_repository
from graphql_api.types_session import (
    CurrentExerciseSessionType,
    ExerciseAnalyticsSummaryType,
    ExerciseSessionAnalyticsType,
    ExerciseSessionPage,
    ExerciseSessionType,
    StatusFilterEnum,
)

KIND = SessionKind.EXERCISE


@strawberry.type
class ExerciseQueries:
    """Read operations for exercise sessions.

    Example:
        query {
          exercise {
            analyticsSummary {
              totalSessions
              categoryBreakdown { exerciseType sessions totalHours averageHours }
            }
          }
        }
    """

    @strawberry.field(description="Active workout with live duration")
    async def current_session(
        self, info: strawberry.types.Info, user_id: Optional[str] = None
    ) -> Optional[CurrentExerciseSessionType]:
        handler = GetCurrentSessionQueryHandler(
            repository=get_repository(info, KIND), clock=get_clock(info)
        )
        view = await handler.handle(GetCurrentSessionQuery(user_id=resolve_user_id(info, user_id)))
        if view is None:
            return None
        return CurrentExerciseSessionType(
            session=map_exercise_session(view.session),
            elapsed_minutes=view.elapsed_minutes,
        )

    @strawberry.field(description="Workout history, newest first")
    async def sessions(
        self,
        info: strawberry.types.Info,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
        status: StatusFilterEnum = StatusFilterEnum.ALL,
        user_id: Optional[str] = None,
    ) -> ExerciseSessionPage:
        handler = ListSessionsQueryHandler(repository=get_repository(info, KIND))
        result = await handler.handle(
            ListSessionsQuery(
                user_id=resolve_user_id(info, user_id),
                page=page,
                limit=limit,
                status_filter=StatusFilter(status.value),
            )
        )
        return ExerciseSessionPage(
            sessions=[map_exercise_session(s) for s in result.sessions],
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
            has_next=result.has_next,
            has_previous=result.has_previous,
        )

    @strawberry.field(description="Single workout by ID")
    async def session(
        self, info: strawberry.types.Info, session_id: str, user_id: Optional[str] = None
    ) -> Optional[ExerciseSessionType]:
        handler = GetSessionQueryHandler(repository=get_repository(info, KIND))
        session = await handler.handle(
            GetSessionQuery(user_id=resolve_user_id(info, user_id), session_id=session_id)
        )
        return map_exercise_session(session) if session else None

    @strawberry.field(description="Duration of one workout")
    async def session_analytics(
        self, info: strawberry.types.Info, session_id: str, user_id: Optional[str] = None
    ) -> Optional[ExerciseSessionAnalyticsType]:
        handler = GetSessionAnalyticsQueryHandler(
            repository=get_repository(info, KIND), clock=get_clock(info)
        )
        analytics = await handler.handle(
            GetSessionAnalyticsQuery(user_id=resolve_user_id(info, user_id), session_id=session_id)
        )
        if analytics is None:
            return None
        return ExerciseSessionAnalyticsType(
            session=map_exercise_session(analytics.session),
            duration_minutes=analytics.duration_minutes,
            duration_hours=minutes_to_hours(analytics.duration_minutes),
            is_live=analytics.is_live,
        )

    @strawberry.field(description="Aggregated exercise statistics and per-type breakdown")
    async def analytics_summary(
        self, info: strawberry.types.Info, user_id: Optional[str] = None
    ) -> ExerciseAnalyticsSummaryType:
        handler = GetAnalyticsSummaryQueryHandler(
            repository=get_repository(info, KIND),
            clock=get_clock(info),
            analytics_service=get_analytics_service(info),
        )
        summary = await handler.handle(
            GetAnalyticsSummaryQuery(user_id=resolve_user_id(info, user_id))
        )
        return map_exercise_summary(summary)
