"""Mapping between session domain objects and GraphQL types."""

import logging
from typing import List

from application.session.queries.get_session_analytics import SessionAnalytics
from domain.session.calculation.analytics_service import (
    AnalyticsSummary,
    RecentSessionSummary,
)
from domain.session.calculation.metabolic_phase_service import MetabolicProfile
from domain.session.calculation.plan_progress_service import PlanProgress
from domain.session.core.entities.session import Session
from domain.session.core.exceptions.domain_errors import SessionDomainError
from graphql_api.context import UnauthenticatedError
from graphql_api.types_session import (
    CategoryBreakdownType,
    ExerciseAnalyticsSummaryType,
    ExerciseSessionType,
    FastingAnalyticsSummaryType,
    FastingSessionAnalyticsType,
    FastingSessionType,
    MetabolicPhaseType,
    PhaseHoursType,
    PlanProgressType,
    PlanUsageType,
    RecentSessionType,
    SessionError,
    SessionStatusEnum,
    StartModeEnum,
)

logger = logging.getLogger(__name__)


# ============================================
# SESSIONS
# ============================================


def map_fasting_session(session: Session) -> FastingSessionType:
    """Map domain Session (fasting) to GraphQL FastingSessionType."""
    offset = session.custom_offset
    return FastingSessionType(
        id=str(session.session_id),
        user_id=session.user_id,
        status=SessionStatusEnum(session.status.value),
        start_mode=StartModeEnum(session.start_mode.value),
        start_time=session.start_time,
        end_time=session.end_time,
        duration_minutes=session.duration_minutes,
        target_spec=session.target_spec.value if session.target_spec else "",
        custom_start_hours=offset.hours if offset else None,
        custom_start_minutes=offset.minutes if offset else None,
        end_reason=session.end_reason.value if session.end_reason else None,
        notes=session.notes,
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


def map_exercise_session(session: Session) -> ExerciseSessionType:
    """Map domain Session (exercise) to GraphQL ExerciseSessionType."""
    offset = session.custom_offset
    return ExerciseSessionType(
        id=str(session.session_id),
        user_id=session.user_id,
        status=SessionStatusEnum(session.status.value),
        start_mode=StartModeEnum(session.start_mode.value),
        start_time=session.start_time,
        end_time=session.end_time,
        duration_minutes=session.duration_minutes,
        exercise_type=session.exercise_type.value if session.exercise_type else "",
        custom_start_hours=offset.hours if offset else None,
        custom_start_minutes=offset.minutes if offset else None,
        end_reason=session.end_reason.value if session.end_reason else None,
        notes=session.notes,
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


# ============================================
# CALCULATIONS
# ============================================


def map_phases(profile: MetabolicProfile) -> List[MetabolicPhaseType]:
    return [
        MetabolicPhaseType(
            phase=p.phase.value,
            label=p.label,
            minutes=p.minutes,
            hours=p.hours,
            percentage=p.percentage,
        )
        for p in profile.phases
    ]


def map_plan_progress(progress: PlanProgress) -> PlanProgressType:
    return PlanProgressType(
        target_spec=progress.plan.value,
        target_hours=progress.target_hours,
        completed_hours=progress.completed_hours,
        completion_percentage=progress.completion_percentage,
        remaining_hours=progress.remaining_hours,
        is_goal_reached=progress.is_goal_reached,
    )


def map_fasting_analytics(analytics: SessionAnalytics) -> FastingSessionAnalyticsType:
    return FastingSessionAnalyticsType(
        session=map_fasting_session(analytics.session),
        duration_minutes=analytics.duration_minutes,
        is_live=analytics.is_live,
        current_phase=analytics.metabolic_profile.current_phase.value,
        phases=map_phases(analytics.metabolic_profile),
        plan_progress=map_plan_progress(analytics.plan_progress),
    )


def map_recent_session(recent: RecentSessionSummary) -> RecentSessionType:
    return RecentSessionType(
        session_id=recent.session_id,
        date=recent.date,
        ended_at=recent.ended_at,
        duration_minutes=recent.duration_minutes,
        duration_hours=recent.duration_hours,
        target_spec=recent.target_spec,
        exercise_type=recent.exercise_type,
        phase_hours=[
            PhaseHoursType(phase=phase, hours=hours)
            for phase, hours in recent.phase_hours.items()
        ],
    )


def map_fasting_summary(summary: AnalyticsSummary) -> FastingAnalyticsSummaryType:
    return FastingAnalyticsSummaryType(
        total_sessions=summary.total_sessions,
        total_fasting_hours=summary.total_duration_hours,
        average_session_hours=summary.average_session_hours,
        longest_session_hours=summary.longest_session_hours,
        current_streak_days=summary.current_streak_days,
        phase_hours=[
            PhaseHoursType(phase=phase, hours=hours)
            for phase, hours in summary.phase_hours.items()
        ],
        plan_usage=[
            PlanUsageType(target_spec=spec, count=count)
            for spec, count in sorted(summary.target_usage.items())
        ],
        recent_sessions=[map_recent_session(r) for r in summary.recent_sessions],
    )


def map_exercise_summary(summary: AnalyticsSummary) -> ExerciseAnalyticsSummaryType:
    return ExerciseAnalyticsSummaryType(
        total_sessions=summary.total_sessions,
        total_hours=summary.total_duration_hours,
        average_session_hours=summary.average_session_hours,
        longest_session_hours=summary.longest_session_hours,
        current_streak_days=summary.current_streak_days,
        category_breakdown=[
            CategoryBreakdownType(
                exercise_type=exercise_type,
                sessions=stats.sessions,
                total_hours=stats.total_hours,
                average_hours=stats.average_hours,
            )
            for exercise_type, stats in sorted(summary.category_breakdown.items())
        ],
        recent_sessions=[map_recent_session(r) for r in summary.recent_sessions],
    )


# ============================================
# ERRORS
# ============================================


def map_error(error: Exception) -> SessionError:
    """Map an exception raised by a command to a SessionError.

    Must be called from an ``except`` block: unexpected errors are logged
    with their traceback and reported as INTERNAL_ERROR.
    """
    if isinstance(error, (SessionDomainError, UnauthenticatedError)):
        return SessionError(message=str(error), code=error.code)
    if isinstance(error, ValueError):
        return SessionError(message=str(error), code="VALIDATION_ERROR")

    logger.exception("Unexpected error in session mutation")
    return SessionError(message="Internal error", code="INTERNAL_ERROR")
