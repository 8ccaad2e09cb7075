"""Dependency lookup shared by session resolvers."""

from datetime import datetime
from typing import Callable

from strawberry.types import Info

from domain.session.calculation.analytics_service import AnalyticsService
from domain.session.calculation.time_arithmetic import utc_now
from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects.session_kind import SessionKind


def get_repository(info: Info, kind: SessionKind) -> ISessionRepository:
    """Repository for ``kind`` from the context.

    Raises:
        RuntimeError: If the repository is missing from the context
    """
    repository = info.context.get(f"{kind.value}_repository")
    if repository is None:
        raise RuntimeError(f"{kind.value}_repository not found in context")
    return repository


def get_clock(info: Info) -> Callable[[], datetime]:
    return info.context.get("clock") or utc_now


def get_analytics_service(info: Info) -> AnalyticsService:
    return info.context.get("analytics_service") or AnalyticsService()
