"""GetCurrentSessionQuery - active session with live duration."""

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
from domain.session.core.value_objects.session_kind import SessionKind


@dataclass(frozen=True)
class CurrentSessionView:
    """Active session plus values derived at read time.

    Attributes:
        session: The active session (duration_minutes stays None)
        elapsed_minutes: Live duration, now - start_time
        metabolic_profile: Live phase breakdown (fasting only)
        plan_progress: Live plan progress (fasting only)
    """

    session: Session
    elapsed_minutes: int
    metabolic_profile: Optional[MetabolicProfile] = None
    plan_progress: Optional[PlanProgress] = None


@dataclass(frozen=True)
class GetCurrentSessionQuery:
    """Query for the caller's active session."""

    user_id: str


class GetCurrentSessionQueryHandler:
    """Handler for GetCurrentSessionQuery.

    The live duration is computed on every read and never persisted.
    """

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

    async def handle(self, query: GetCurrentSessionQuery) -> Optional[CurrentSessionView]:
        """
        Handle current session query.

        Returns:
            Optional[CurrentSessionView]: View if a session is active, None otherwise
        """
        session = await self._repository.find_active(query.user_id)
        if session is None:
            return None

        elapsed = session.elapsed_minutes(self._clock())
        if session.kind is not SessionKind.FASTING or session.target_spec is None:
            return CurrentSessionView(session=session, elapsed_minutes=elapsed)

        return CurrentSessionView(
            session=session,
            elapsed_minutes=elapsed,
            metabolic_profile=self._phase_service.calculate(elapsed),
            plan_progress=self._progress_service.calculate(elapsed, session.target_spec),
        )
