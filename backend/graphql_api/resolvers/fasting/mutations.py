"""Mutation resolvers for fasting sessions.

These resolvers execute CQRS commands using Command Handlers:
- startSession: Start a fast (immediate or backdated)
- stopSession: Complete the active fast
- updateSessionNotes: Edit notes of any fast
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
from application.session.queries.get_session_analytics import GetSessionAnalyticsQueryHandler
from domain.session.core.value_objects.session_kind import SessionKind
from domain.session.core.value_objects.start_mode import StartMode
from graphql_api.context import resolve_user_id
from graphql_api.mappers import map_error, map_fasting_analytics, map_fasting_session
from graphql_api.resolvers.common import get_clock, get_repository
from graphql_api.types_session import (
    FastingSessionResult,
    FastingSessionSuccess,
    StartFastingSessionInput,
    StopSessionInput,
    UpdateSessionNotesInput,
)

KIND = SessionKind.FASTING


@strawberry.type
class FastingMutations:
    """Write operations for fasting sessions."""

    @strawberry.mutation
    async def start_session(
        self, info: strawberry.types.Info, input: StartFastingSessionInput
    ) -> FastingSessionResult:
        """Start a fast.

        Example:
            mutation {
              fasting {
                startSession(input: { targetSpec: "16:8", startMode: CUSTOM,
                                      customStartHours: 2 }) {
                  ... on FastingSessionSuccess { session { id startTime } }
                  ... on SessionError { code message }
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
                    target_spec=input.target_spec,
                    notes=input.notes,
                )
            )
            return FastingSessionSuccess(session=map_fasting_session(session))
        except Exception as e:
            return map_error(e)

    @strawberry.mutation
    async def stop_session(
        self, info: strawberry.types.Info, input: StopSessionInput
    ) -> FastingSessionResult:
        """Stop the active fast and return its phases and plan progress.

        The end reason defaults to "completed".
        """
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
            analytics = GetSessionAnalyticsQueryHandler(
                repository=get_repository(info, KIND), clock=get_clock(info)
            ).analyze(session)
            return FastingSessionSuccess(
                session=map_fasting_session(session),
                analytics=map_fasting_analytics(analytics),
            )
        except Exception as e:
            return map_error(e)

    @strawberry.mutation
    async def update_session_notes(
        self, info: strawberry.types.Info, input: UpdateSessionNotesInput
    ) -> FastingSessionResult:
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
            return FastingSessionSuccess(session=map_fasting_session(session))
        except Exception as e:
            return map_error(e)
