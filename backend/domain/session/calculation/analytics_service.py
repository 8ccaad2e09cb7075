"""AnalyticsService - multi-session summaries and streaks."""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from ..core.value_objects.session_kind import SessionKind
from .metabolic_phase_service import MetabolicPhase, MetabolicPhaseService
from .time_arithmetic import minutes_to_hours

if TYPE_CHECKING:
    from ..core.entities.session import Session

DEFAULT_RECENT_LIMIT = 5


@dataclass(frozen=True)
class CategoryStats:
    """Aggregate of completed exercise sessions of one type."""

    sessions: int
    total_hours: float
    average_hours: float


@dataclass(frozen=True)
class RecentSessionSummary:
    """Compact view of a recently completed session."""

    session_id: str
    date: date
    ended_at: datetime
    duration_minutes: int
    duration_hours: float
    target_spec: Optional[str] = None
    exercise_type: Optional[str] = None
    phase_hours: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class AnalyticsSummary:
    """Aggregated statistics over the completed sessions of a user.

    Fasting summaries fill ``phase_hours`` and ``target_usage``; exercise
    summaries fill ``category_breakdown``. Hours are rounded to 2 decimals.
    """

    kind: SessionKind
    total_sessions: int = 0
    total_duration_hours: float = 0.0
    average_session_hours: float = 0.0
    longest_session_hours: float = 0.0
    current_streak_days: int = 0
    phase_hours: Dict[str, float] = field(default_factory=dict)
    target_usage: Dict[str, int] = field(default_factory=dict)
    category_breakdown: Dict[str, CategoryStats] = field(default_factory=dict)
    recent_sessions: List[RecentSessionSummary] = field(default_factory=list)


class AnalyticsService:
    """Aggregate completed sessions into trend and streak statistics.

    Stateless: summaries are recomputed from the sessions passed in.
    """

    def __init__(
        self,
        phase_service: Optional[MetabolicPhaseService] = None,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ):
        self._phases = phase_service or MetabolicPhaseService()
        self._recent_limit = recent_limit

    def summarize(
        self, kind: SessionKind, sessions: Iterable["Session"], today: date
    ) -> AnalyticsSummary:
        """Build a summary for one session kind.

        Args:
            kind: Session kind being summarized
            sessions: Sessions of a single user (active ones are ignored)
            today: Current UTC date, anchor of the streak

        Returns:
            AnalyticsSummary: All-zero summary when nothing is completed
        """
        completed = [
            s for s in sessions if s.duration_minutes is not None and s.end_time is not None
        ]
        if not completed:
            return AnalyticsSummary(kind=kind)

        durations = [s.duration_minutes for s in completed]
        total_minutes = sum(durations)

        summary_phase_hours: Dict[str, float] = {}
        target_usage: Dict[str, int] = {}
        category_breakdown: Dict[str, CategoryStats] = {}

        if kind is SessionKind.FASTING:
            summary_phase_hours = self._phase_totals(durations)
            target_usage = self._target_usage(completed)
        else:
            category_breakdown = self._category_breakdown(completed)

        return AnalyticsSummary(
            kind=kind,
            total_sessions=len(completed),
            total_duration_hours=minutes_to_hours(total_minutes),
            average_session_hours=minutes_to_hours(total_minutes / len(completed)),
            longest_session_hours=minutes_to_hours(max(durations)),
            current_streak_days=self.current_streak(
                (s.end_time.date() for s in completed), today
            ),
            phase_hours=summary_phase_hours,
            target_usage=target_usage,
            category_breakdown=category_breakdown,
            recent_sessions=self._recent(kind, completed),
        )

    @staticmethod
    def current_streak(end_dates: Iterable[date], today: date) -> int:
        """Count consecutive days with a completed session.

        The streak is anchored at ``today`` if a session ended today, else at
        yesterday if one ended yesterday; otherwise it is broken (0).

        Example:
            >>> today = date(2024, 3, 10)
            >>> AnalyticsService.current_streak(
            ...     [date(2024, 3, 9), date(2024, 3, 8), date(2024, 3, 6)], today
            ... )
            2
        """
        days = set(end_dates)
        yesterday = today - timedelta(days=1)
        if today in days:
            cursor = today
        elif yesterday in days:
            cursor = yesterday
        else:
            return 0

        streak = 0
        while cursor in days:
            streak += 1
            cursor -= timedelta(days=1)
        return streak

    def _phase_totals(self, durations: List[int]) -> Dict[str, float]:
        totals: Dict[MetabolicPhase, int] = OrderedDict((p, 0) for p in MetabolicPhase)
        for duration in durations:
            for phase, minutes in self._phases.calculate(duration).minutes_by_phase().items():
                totals[phase] += minutes
        return {phase.value: minutes_to_hours(minutes) for phase, minutes in totals.items()}

    @staticmethod
    def _target_usage(sessions: List["Session"]) -> Dict[str, int]:
        usage: Dict[str, int] = {}
        for session in sessions:
            if session.target_spec is None:
                continue
            key = session.target_spec.value
            usage[key] = usage.get(key, 0) + 1
        return usage

    @staticmethod
    def _category_breakdown(sessions: List["Session"]) -> Dict[str, CategoryStats]:
        minutes_by_type: Dict[str, List[int]] = {}
        for session in sessions:
            if session.exercise_type is None:
                continue
            minutes_by_type.setdefault(session.exercise_type.value, []).append(
                session.duration_minutes
            )

        return {
            exercise_type: CategoryStats(
                sessions=len(minutes),
                total_hours=minutes_to_hours(sum(minutes)),
                average_hours=minutes_to_hours(sum(minutes) / len(minutes)),
            )
            for exercise_type, minutes in minutes_by_type.items()
        }

    def _recent(self, kind: SessionKind, sessions: List["Session"]) -> List[RecentSessionSummary]:
        ordered = sorted(sessions, key=lambda s: s.end_time, reverse=True)
        recent = []
        for session in ordered[: self._recent_limit]:
            phase_hours: Dict[str, float] = {}
            if kind is SessionKind.FASTING:
                profile = self._phases.calculate(session.duration_minutes)
                phase_hours = {p.phase.value: p.hours for p in profile.phases}
            recent.append(
                RecentSessionSummary(
                    session_id=str(session.session_id),
                    date=session.end_time.date(),
                    ended_at=session.end_time,
                    duration_minutes=session.duration_minutes,
                    duration_hours=minutes_to_hours(session.duration_minutes),
                    target_spec=session.target_spec.value if session.target_spec else None,
                    exercise_type=(
                        session.exercise_type.value if session.exercise_type else None
                    ),
                    phase_hours=phase_hours,
                )
            )
        return recent
