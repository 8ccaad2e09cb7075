"""FastLog backend: fasting and exercise session tracking over GraphQL."""

from __future__ import annotations

import logging as _logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Final

import strawberry
from fastapi import FastAPI, Request
from strawberry.fastapi import GraphQLRouter

from domain.session.calculation.analytics_service import AnalyticsService
from domain.session.core.value_objects.session_kind import SessionKind
from graphql_api.context import GraphQLContext, create_context
from graphql_api.resolvers.exercise import ExerciseMutations, ExerciseQueries
from graphql_api.resolvers.fasting import FastingMutations, FastingQueries
from infrastructure.auth.auth_middleware import AuthMiddleware
from infrastructure.config import get_session_recent_limit, is_auth_required
from infrastructure.persistence.session_repository_factory import (
    get_all_session_repositories,
    get_session_repository,
)

# --- Basic logging configuration (minimal) ---
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_logging.basicConfig(
    level=getattr(_logging, _LOG_LEVEL, _logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

_lg = _logging.getLogger("startup")
if _lg.level == 0:  # not set explicitly
    _lg.setLevel(getattr(_logging, _LOG_LEVEL, _logging.INFO))

# Version from env (Docker build ARG -> ENV APP_VERSION)
APP_VERSION = os.getenv("APP_VERSION", "0.0.0-dev")


@strawberry.type
class Query:
    @strawberry.field
    def health(self) -> str:
        return "ok"

    # ============================================
    # Session Resolvers
    # ============================================

    @strawberry.field(description="Fasting session queries")  # type: ignore[misc]
    def fasting(self) -> FastingQueries:
        """Fasting sessions, phases, plan progress and analytics.

        Example:
            query {
              fasting {
                currentSession { elapsedMinutes currentPhase }
                analyticsSummary { totalSessions currentStreakDays }
              }
            }
        """
        return FastingQueries()

    @strawberry.field(description="Exercise session queries")  # type: ignore[misc]
    def exercise(self) -> ExerciseQueries:
        """Exercise sessions and per-type analytics.

        Example:
            query {
              exercise {
                sessions(page: 1, limit: 10) { totalPages sessions { id exerciseType } }
              }
            }
        """
        return ExerciseQueries()


@strawberry.type
class Mutation:
    @strawberry.field(description="Fasting session mutations")  # type: ignore[misc]
    def fasting(self) -> FastingMutations:
        """Start, stop and annotate fasts.

        Example:
            mutation {
              fasting {
                startSession(input: { targetSpec: "16:8" }) {
                  ... on FastingSessionSuccess { session { id } }
                  ... on SessionError { code message }
                }
              }
            }
        """
        return FastingMutations()

    @strawberry.field(description="Exercise session mutations")  # type: ignore[misc]
    def exercise(self) -> ExerciseMutations:
        """Start, stop and annotate workouts."""
        return ExerciseMutations()


# Use create_schema() to ensure all resolvers are included
from graphql_api.schema import create_schema  # noqa: E402

schema = create_schema()

_analytics_service = AnalyticsService(recent_limit=get_session_recent_limit())


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Application lifecycle: storage bootstrap on startup, close on shutdown.

    With the MongoDB backend the session indexes (including the partial
    unique index that enforces one active session per user) are ensured
    before serving.
    """
    logger = _logging.getLogger("startup")
    repositories = get_all_session_repositories()

    logger.info(
        "startup.config",
        extra={
            "version": APP_VERSION,
            "auth_required": is_auth_required(),
            "repositories": {k.value: type(r).__name__ for k, r in repositories.items()},
        },
    )

    for repository in repositories.values():
        ensure_indexes = getattr(repository, "ensure_indexes", None)
        if ensure_indexes is not None:
            await ensure_indexes()

    logger.info("lifespan.ready", extra={"status": "serving"})
    yield

    logger.info("lifespan.shutdown", extra={"status": "cleanup"})
    for repository in repositories.values():
        close = getattr(repository, "close", None)
        if close is not None:
            await close()


app = FastAPI(
    title="FastLog Backend",
    version=APP_VERSION,
    lifespan=lifespan,
)
app.add_middleware(AuthMiddleware)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
async def version() -> dict[str, str]:
    return {"version": APP_VERSION}


# ============================================
# GraphQL Context Setup
# ============================================


async def get_graphql_context(request: Request) -> GraphQLContext:
    """Create GraphQL context with all dependencies.

    Repositories are environment-selected singletons (REPOSITORY_BACKEND).
    """
    return create_context(
        fasting_repository=get_session_repository(SessionKind.FASTING),
        exercise_repository=get_session_repository(SessionKind.EXERCISE),
        analytics_service=_analytics_service,
        auth_required=is_auth_required(),
        request=request,
    )


graphql_app: Final[GraphQLRouter[Any, Any]] = GraphQLRouter(
    schema, context_getter=get_graphql_context
)
app.include_router(graphql_app, prefix="/graphql")
