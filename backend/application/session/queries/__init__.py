"""CQRS Queries for session domain."""

from .get_current_session import (
    CurrentSessionView,
    GetCurrentSessionQuery,
    GetCurrentSessionQueryHandler,
)
from .get_session import GetSessionQuery, GetSessionQueryHandler
from .list_sessions import (
    ListSessionsQuery,
    ListSessionsQueryHandler,
    SessionPage,
)
from .get_session_analytics import (
    GetSessionAnalyticsQuery,
    GetSessionAnalyticsQueryHandler,
    SessionAnalytics,
)
from .get_analytics_summary import (
    GetAnalyticsSummaryQuery,
    GetAnalyticsSummaryQueryHandler,
)

__all__ = [
    "CurrentSessionView",
    "GetCurrentSessionQuery",
    "GetCurrentSessionQueryHandler",
    "GetSessionQuery",
    "GetSessionQueryHandler",
    "ListSessionsQuery",
    "ListSessionsQueryHandler",
    "SessionPage",
    "GetSessionAnalyticsQuery",
    "GetSessionAnalyticsQueryHandler",
    "SessionAnalytics",
    "GetAnalyticsSummaryQuery",
    "GetAnalyticsSummaryQueryHandler",
]
