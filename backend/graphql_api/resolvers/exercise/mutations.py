"""Mutation resolvers for exercise sessions.

- startSession: Start a workout
- stopSession: Complete the active workout
- updateSessionNotes: Edit notes of any workout
"""

import strawberry

from application.session.commands.start_session import (
    StartSessionCommand,
    StartSessionCommandHandler,
)
from application.session.commands.stop_session import (
    StopSessionCommand,
    StopSessionCommandHandler,
)
from application.session.commands.update_notes import (
    UpdateSessionNotesCommand,
    UpdateSessionNotesCommandHandler,
)
from domain.session.core.value_objects.session_kind import SessionKind
from domain.session.core.value_objects.start_mode import StartMode
from graphql_api.context import resolve_user_id
from graphql_api.mappers import map_error, map_exercise_session
from graphql_api.resolvers.common import get_clock, get_repository
from graphql_api.types_session import (
    ExerciseSessionResult,
    ExerciseSessionSuccess,
    StartExerciseSessionInput,
    StopSessionInput,
    UpdateSessionNotesInput,
)

KIND = SessionKind.EXERCISE


@strawberry.type
class ExerciseMutations:
    """Write operations for exercise sessions."""

    @strawberry.mutation
    async def start_session(
        self, info: strawberry.types.Info, input: StartExerciseSessionInput
    ) -> ExerciseSessionResult:
        """Start a workout.

        Example:
            mutation {
              exercise {
                startSession(input: { exerciseType: "running" }) {
                  ... on ExerciseSessionSuccess { session { id } }
                  ... on SessionError { code }
                }
              }
            }
        """
        try:
            handler = StartSessionCommandHandler(
                repository=get_repository(info, KIND), clock=get_clock(info)
            )
            session = await handler.handle(
                StartSessionCommand(
                    user_id=resolve_user_id(info, input.user_id),
                    start_mode=StartMode(input.start_mode.value),
                    custom_start_hours=input.custom_start_hours,
                    custom_start_minutes=input.custom_start_minutes,
                    exercise_type=input.exercise_type,
                    start_time=input.start_time,
                    notes=input.notes,
                )
            )
            return ExerciseSessionSuccess(session=map_exercise_session(session))
        except Exception as e:
            return map_error(e)

    @strawberry.mutation
    async def stop_session(
        self, info: strawberry.types.Info, input: StopSessionInput
    ) -> ExerciseSessionResult:
        """Stop the active workout."""
        try:
            handler = StopSessionCommandHandler(
                repository=get_repository(info, KIND), clock=get_clock(info)
            )
            session = await handler.handle(
                StopSessionCommand(
                    user_id=resolve_user_id(info, input.user_id),
                    session_id=input.session_id,
                    end_time=input.end_time,
                    end_reason=input.end_reason,
                )
            )
            return ExerciseSessionSuccess(session=map_exercise_session(session))
        except Exception as e:
            return map_error(e)

    @strawberry.mutation
    async def update_session_notes(
        self, info: strawberry.types.Info, input: UpdateSessionNotesInput
    ) -> ExerciseSessionResult:
        try:
            handler = UpdateSessionNotesCommandHandler(
                repository=get_repository(info, KIND), clock=get_clock(info)
            )
            session = await handler.handle(
                UpdateSessionNotesCommand(
                    user_id=resolve_user_id(info, input.user_id),
                    session_id=input.session_id,
                    notes=input.notes,
                )
            )
            return ExerciseSessionSuccess(session=map_exercise_session(session))
        except Exception as e:
            return map_error(e)
