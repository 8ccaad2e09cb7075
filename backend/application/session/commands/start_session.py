"""StartSessionCommand - begin a fasting or exercise session."""

from dataclasses import dataclass
from datetime import datetime
import logging
from typing import Callable, Optional

from domain.session.calculation.time_arithmetic import ensure_utc, utc_now
from domain.session.core.entities.session import Session
from domain.session.core.exceptions.domain_errors import (
    ActiveSessionExistsError,
    InvalidOffsetError,
)
from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects.exercise_type import ExerciseType
from domain.session.core.value_objects.fasting_plan import FastingPlan
from domain.session.core.value_objects.session_kind import SessionKind
from domain.session.core.value_objects.start_mode import CustomOffset, StartMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartSessionCommand:
    """Command to start a new session.

    Attributes:
        user_id: User identifier (from authentication)
        start_mode: Immediate start or backdated custom start
        custom_start_hours: Hours before now (custom mode)
        custom_start_minutes: Minutes before now, 0-59 (custom mode)
        target_spec: Fasting plan such as "16:8" (fasting only)
        exercise_type: Workout category (exercise only)
        start_time: Explicit start instant, exclusive with the custom offset
        notes: Optional free-form notes
    """

    user_id: str
    start_mode: StartMode = StartMode.IMMEDIATE
    custom_start_hours: Optional[int] = None
    custom_start_minutes: Optional[int] = None
    target_spec: Optional[str] = None
    exercise_type: Optional[str] = None
    start_time: Optional[datetime] = None
    notes: Optional[str] = None


class StartSessionCommandHandler:
    """Handler for StartSessionCommand.

    Validates input, enforces the single active session rule and persists a
    new ACTIVE session. The repository bound to the handler decides the
    session kind.
    """

    def __init__(
        self,
        repository: ISessionRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repository = repository
        self._clock = clock

    async def handle(self, command: StartSessionCommand) -> Session:
        """
        Handle start command.

        Args:
            command: StartSessionCommand

        Returns:
            Session: Newly created active session

        Raises:
            InvalidOffsetError: If a custom start offset is missing or invalid,
                or an explicit start time is in the future
            InvalidTargetSpecError: If plan or exercise type is invalid
            ActiveSessionExistsError: If the user already has an active session
        """
        kind = self._repository.kind
        now = self._clock()

        # Validate everything before touching storage
        custom_offset = None
        if command.start_time is not None:
            if command.custom_start_hours is not None or command.custom_start_minutes is not None:
                raise InvalidOffsetError("Give either a start time or a custom offset, not both")
            if ensure_utc(command.start_time) > now:
                raise InvalidOffsetError(
                    f"Start time {command.start_time.isoformat()} is in the future"
                )
        elif command.start_mode is StartMode.CUSTOM:
            custom_offset = CustomOffset.from_input(
                command.custom_start_hours, command.custom_start_minutes
            )

        target_spec = None
        exercise_type = None
        if kind is SessionKind.FASTING:
            target_spec = FastingPlan.parse(command.target_spec)
        else:
            exercise_type = ExerciseType.parse(command.exercise_type)

        existing = await self._repository.find_active(command.user_id)
        if existing is not None:
            raise ActiveSessionExistsError(command.user_id, kind.value)

        session = Session.start(
            user_id=command.user_id,
            kind=kind,
            start_mode=command.start_mode,
            now=now,
            custom_offset=custom_offset,
            target_spec=target_spec,
            exercise_type=exercise_type,
            start_time=command.start_time,
        )
        if command.notes:
            session.update_notes(command.notes, now)

        # Storage constraint is authoritative under concurrent starts
        await self._repository.create(session)

        logger.info(
            "Session started",
            extra={
                "session_id": str(session.session_id),
                "user_id": session.user_id,
                "kind": kind.value,
                "start_mode": session.start_mode.value,
                "start_time": session.start_time.isoformat(),
            },
        )
        return session
