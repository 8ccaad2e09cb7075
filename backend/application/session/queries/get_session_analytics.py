"""GetSessionAnalyticsQuery - phases and plan progress of one session."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from domain.session.calculation.metabolic_phase_service import (
    MetabolicPhaseService,
    MetabolicProfile,
)
from domain.session.calculation.plan_progress_service import (
    PlanProgress,
    PlanProgressService,
)
from domain.session.calculation.time_arithmetic import utc_now
from domain.session.core.entities.session import Session
from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects.session_id import SessionId
from domain.session.core.value_objects.session_kind import SessionKind


@dataclass(frozen=True)
class SessionAnalytics:
    """Single-session analytics.

    Attributes:
        session: Analysed session
        duration_minutes: Stored duration, or live elapsed time if active
        is_live: True when computed from an active session
        metabolic_profile: Phase breakdown (fasting only)
        plan_progress: Progress toward the plan (fasting only)
    """

    session: Session
    duration_minutes: int
    is_live: bool
    metabolic_profile: Optional[MetabolicProfile] = None
    plan_progress: Optional[PlanProgress] = None


@dataclass(frozen=True)
class GetSessionAnalyticsQuery:
    """Query for analytics of one session."""

    user_id: str
    session_id: str


class GetSessionAnalyticsQueryHandler:
    """Handler for GetSessionAnalyticsQuery."""

    def __init__(
        self,
        repository: ISessionRepository,
        clock: Callable[[], datetime] = utc_now,
        phase_service: Optional[MetabolicPhaseService] = None,
        progress_service: Optional[PlanProgressService] = None,
    ):
        self._repository = repository
        self._clock = clock
        self._phase_service = phase_service or MetabolicPhaseService()
        self._progress_service = progress_service or PlanProgressService()

    async def handle(self, query: GetSessionAnalyticsQuery) -> Optional[SessionAnalytics]:
        """
        Handle session analytics query.

        Returns:
            Optional[SessionAnalytics]: Analytics if the session is found,
                                        None otherwise
        """
        try:
            session_id = SessionId.from_string(query.session_id)
        except ValueError:
            return None

        session = await self._repository.find_by_id(session_id, query.user_id)
        if session is None:
            return None
        return self.analyze(session)

    def analyze(self, session: Session) -> SessionAnalytics:
        """Analytics of an already loaded session."""
        duration = session.elapsed_minutes(self._clock())
        analytics = SessionAnalytics(
            session=session,
            duration_minutes=duration,
            is_live=session.is_active,
        )
        if session.kind is not SessionKind.FASTING or session.target_spec is None:
            return analytics

        return SessionAnalytics(
            session=session,
            duration_minutes=duration,
            is_live=session.is_active,
            metabolic_profile=self._phase_service.calculate(duration),
            plan_progress=self._progress_service.calculate(duration, session.target_spec),
        )
