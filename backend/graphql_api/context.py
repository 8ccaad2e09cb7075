"""GraphQL context factory for dependency injection.

Provides the dependencies session resolvers need:
- Session repositories (one per kind)
- Analytics service
- Clock
- Caller identity (auth claims from AuthMiddleware)
"""

from datetime import datetime
from typing import Any, Callable, Dict, Optional

from fastapi import Request
from strawberry.fastapi import BaseContext
from strawberry.types import Info

from domain.session.calculation.analytics_service import AnalyticsService
from domain.session.calculation.time_arithmetic import utc_now
from domain.session.core.ports.repository import ISessionRepository

USER_ID_HEADER = "X-User-Id"


class UnauthenticatedError(Exception):
    """Raised when a resolver cannot determine the calling user."""

    code = "UNAUTHENTICATED"


class GraphQLContext(BaseContext):
    """GraphQL context with all dependencies.

    Resolvers access dependencies using `info.context.get("name")`.

    Attributes:
        fasting_repository: Repository for fasting sessions
        exercise_repository: Repository for exercise sessions
        analytics_service: Multi-session analytics aggregator
        clock: Callable returning the current UTC time
        auth_required: Whether the caller must come from a verified token
        request: FastAPI request object (for auth_claims and headers)
        auth_claims: JWT claims set by AuthMiddleware (None if anonymous)
    """

    def __init__(
        self,
        fasting_repository: ISessionRepository,
        exercise_repository: ISessionRepository,
        analytics_service: Optional[AnalyticsService] = None,
        clock: Callable[[], datetime] = utc_now,
        auth_required: bool = True,
        request: Optional[Request] = None,
    ) -> None:
        super().__init__()
        self.fasting_repository = fasting_repository
        self.exercise_repository = exercise_repository
        self.analytics_service = analytics_service or AnalyticsService()
        self.clock = clock
        self.auth_required = auth_required
        self.request = request
        self.auth_claims: Optional[Dict[str, Any]] = (
            getattr(request.state, "auth_claims", None) if request else None
        )

    def get(self, key: str) -> Any:
        """Get dependency by name (for resolver compatibility).

        Example:
            >>> repository = info.context.get("fasting_repository")
        """
        return getattr(self, key, None)


def create_context(
    fasting_repository: ISessionRepository,
    exercise_repository: ISessionRepository,
    analytics_service: Optional[AnalyticsService] = None,
    clock: Callable[[], datetime] = utc_now,
    auth_required: bool = True,
    request: Optional[Request] = None,
) -> GraphQLContext:
    """Create GraphQL context with dependencies."""
    return GraphQLContext(
        fasting_repository=fasting_repository,
        exercise_repository=exercise_repository,
        analytics_service=analytics_service,
        clock=clock,
        auth_required=auth_required,
        request=request,
    )


def resolve_user_id(info: Info, explicit_user_id: Optional[str] = None) -> str:
    """Determine the calling user.

    The verified token subject always wins. Without one, and only when
    authentication is disabled, an explicit ``userId`` argument or the
    X-User-Id header is accepted.

    Raises:
        UnauthenticatedError: If no user can be determined
    """
    context = info.context
    claims = context.get("auth_claims")
    if claims and claims.get("sub"):
        return str(claims["sub"])

    if not context.get("auth_required"):
        if explicit_user_id and explicit_user_id.strip():
            return explicit_user_id.strip()
        request = context.get("request")
        header_value = request.headers.get(USER_ID_HEADER) if request is not None else None
        if header_value and header_value.strip():
            return header_value.strip()

    raise UnauthenticatedError("Authentication required")
