"""Unit tests for session query handlers."""

from datetime import datetime, timezone
import math

import pytest

from application.session.commands import (
    StartSessionCommand,
    StartSessionCommandHandler,
    StopSessionCommand,
    StopSessionCommandHandler,
)
from application.session.queries import (
    GetAnalyticsSummaryQuery,
    GetAnalyticsSummaryQueryHandler,
    GetCurrentSessionQuery,
    GetCurrentSessionQueryHandler,
    GetSessionAnalyticsQuery,
    GetSessionAnalyticsQueryHandler,
    GetSessionQuery,
    GetSessionQueryHandler,
    ListSessionsQuery,
    ListSessionsQueryHandler,
)
from domain.session.calculation.metabolic_phase_service import MetabolicPhase
from domain.session.core.exceptions.domain_errors import InvalidPaginationError
from domain.session.core.value_objects import StatusFilter


async def _complete(repository, clock, minutes: int, user_id: str = "user123", **start):
    start.setdefault("target_spec", "16:8")
    session = await StartSessionCommandHandler(repository, clock).handle(
        StartSessionCommand(user_id=user_id, **start)
    )
    clock.advance(minutes=minutes)
    return await StopSessionCommandHandler(repository, clock).handle(
        StopSessionCommand(user_id=user_id, session_id=str(session.session_id))
    )


class TestGetCurrentSession:
    @pytest.mark.asyncio
    async def test_no_active_session(self, fasting_repository, clock) -> None:
        handler = GetCurrentSessionQueryHandler(fasting_repository, clock)
        assert await handler.handle(GetCurrentSessionQuery(user_id="user123")) is None

    @pytest.mark.asyncio
    async def test_live_duration_and_progress(self, fasting_repository, clock) -> None:
        await StartSessionCommandHandler(fasting_repository, clock).handle(
            StartSessionCommand(user_id="user123", target_spec="16:8")
        )
        clock.advance(minutes=65)

        view = await GetCurrentSessionQueryHandler(fasting_repository, clock).handle(
            GetCurrentSessionQuery(user_id="user123")
        )

        assert view.elapsed_minutes == 65
        assert view.session.duration_minutes is None
        assert view.metabolic_profile.current_phase is MetabolicPhase.FED
        assert view.plan_progress.completion_percentage == 6.77
        assert view.plan_progress.remaining_hours == 14.92
        assert view.plan_progress.is_goal_reached is False

    @pytest.mark.asyncio
    async def test_live_duration_is_not_persisted(self, fasting_repository, clock) -> None:
        session = await StartSessionCommandHandler(fasting_repository, clock).handle(
            StartSessionCommand(user_id="user123", target_spec="16:8")
        )
        handler = GetCurrentSessionQueryHandler(fasting_repository, clock)
        clock.advance(hours=1)
        await handler.handle(GetCurrentSessionQuery(user_id="user123"))

        stored = await fasting_repository.find_by_id(session.session_id, "user123")
        assert stored.duration_minutes is None

    @pytest.mark.asyncio
    async def test_exercise_has_no_phases(self, exercise_repository, clock) -> None:
        await StartSessionCommandHandler(exercise_repository, clock).handle(
            StartSessionCommand(user_id="user123", exercise_type="yoga")
        )
        clock.advance(minutes=30)

        view = await GetCurrentSessionQueryHandler(exercise_repository, clock).handle(
            GetCurrentSessionQuery(user_id="user123")
        )

        assert view.elapsed_minutes == 30
        assert view.metabolic_profile is None
        assert view.plan_progress is None


class TestGetSession:
    @pytest.mark.asyncio
    async def test_owner_gets_session(self, fasting_repository, clock) -> None:
        stopped = await _complete(fasting_repository, clock, 90)
        handler = GetSessionQueryHandler(fasting_repository)

        found = await handler.handle(
            GetSessionQuery(user_id="user123", session_id=str(stopped.session_id))
        )
        assert found.duration_minutes == 90

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id,session_id", [("user456", None), ("user123", "bogus")])
    async def test_hidden_or_malformed(self, fasting_repository, clock, user_id, session_id):
        stopped = await _complete(fasting_repository, clock, 90)
        handler = GetSessionQueryHandler(fasting_repository)

        found = await handler.handle(
            GetSessionQuery(user_id=user_id, session_id=session_id or str(stopped.session_id))
        )
        assert found is None


class TestListSessions:
    @pytest.mark.asyncio
    async def test_pagination(self, fasting_repository, clock) -> None:
        for _ in range(5):
            await _complete(fasting_repository, clock, 60)
            clock.advance(minutes=1)
        handler = ListSessionsQueryHandler(fasting_repository)

        first = await handler.handle(ListSessionsQuery(user_id="user123", page=1, limit=2))
        last = await handler.handle(ListSessionsQuery(user_id="user123", page=3, limit=2))

        assert first.total == 5
        assert first.total_pages == math.ceil(5 / 2) == 3
        assert len(first.sessions) == 2
        assert first.has_next and not first.has_previous
        assert len(last.sessions) == 1
        assert not last.has_next and last.has_previous

    @pytest.mark.asyncio
    async def test_newest_first(self, fasting_repository, clock) -> None:
        for _ in range(3):
            await _complete(fasting_repository, clock, 60)
        page = await ListSessionsQueryHandler(fasting_repository).handle(
            ListSessionsQuery(user_id="user123")
        )
        starts = [s.start_time for s in page.sessions]
        assert starts == sorted(starts, reverse=True)

    @pytest.mark.asyncio
    async def test_status_filter(self, fasting_repository, clock) -> None:
        await _complete(fasting_repository, clock, 60)
        await StartSessionCommandHandler(fasting_repository, clock).handle(
            StartSessionCommand(user_id="user123", target_spec="18:6")
        )
        handler = ListSessionsQueryHandler(fasting_repository)

        active = await handler.handle(
            ListSessionsQuery(user_id="user123", status_filter=StatusFilter.ACTIVE)
        )
        completed = await handler.handle(
            ListSessionsQuery(user_id="user123", status_filter=StatusFilter.COMPLETED)
        )

        assert active.total == 1
        assert active.sessions[0].is_active
        assert completed.total == 1

    @pytest.mark.asyncio
    async def test_empty_history(self, fasting_repository) -> None:
        page = await ListSessionsQueryHandler(fasting_repository).handle(
            ListSessionsQuery(user_id="user123")
        )
        assert page.total == 0
        assert page.total_pages == 0
        assert page.sessions == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page,limit", [(0, 20), (1, 0), (1, 101)])
    async def test_invalid_pagination(self, fasting_repository, page, limit) -> None:
        with pytest.raises(InvalidPaginationError):
            await ListSessionsQueryHandler(fasting_repository).handle(
                ListSessionsQuery(user_id="user123", page=page, limit=limit)
            )


class TestSessionAnalytics:
    @pytest.mark.asyncio
    async def test_completed_fast(self, fasting_repository, clock) -> None:
        stopped = await _complete(fasting_repository, clock, 1000)

        analytics = await GetSessionAnalyticsQueryHandler(fasting_repository, clock).handle(
            GetSessionAnalyticsQuery(user_id="user123", session_id=str(stopped.session_id))
        )

        assert analytics.is_live is False
        assert analytics.duration_minutes == 1000
        assert analytics.metabolic_profile.get(MetabolicPhase.KETOSIS).minutes == 40
        assert analytics.plan_progress.is_goal_reached is True

    @pytest.mark.asyncio
    async def test_active_fast_is_live(self, fasting_repository, clock) -> None:
        session = await StartSessionCommandHandler(fasting_repository, clock).handle(
            StartSessionCommand(user_id="user123", target_spec="16:8")
        )
        clock.advance(minutes=600)

        analytics = await GetSessionAnalyticsQueryHandler(fasting_repository, clock).handle(
            GetSessionAnalyticsQuery(user_id="user123", session_id=str(session.session_id))
        )

        assert analytics.is_live is True
        assert analytics.duration_minutes == 600
        assert analytics.metabolic_profile.current_phase is MetabolicPhase.TRANSITION

    @pytest.mark.asyncio
    async def test_unknown_session(self, fasting_repository, clock) -> None:
        handler = GetSessionAnalyticsQueryHandler(fasting_repository, clock)
        assert (
            await handler.handle(GetSessionAnalyticsQuery(user_id="user123", session_id="nope"))
            is None
        )


class TestAnalyticsSummary:
    @pytest.mark.asyncio
    async def test_summary_over_two_days(self, fasting_repository, clock) -> None:
        clock.now = datetime(2024, 3, 9, 6, 0, tzinfo=timezone.utc)
        await _complete(fasting_repository, clock, 16 * 60)
        clock.advance(hours=8)
        await _complete(fasting_repository, clock, 2 * 60, target_spec="18:6")

        summary = await GetAnalyticsSummaryQueryHandler(fasting_repository, clock).handle(
            GetAnalyticsSummaryQuery(user_id="user123")
        )

        assert summary.total_sessions == 2
        assert summary.total_duration_hours == 18.0
        assert summary.average_session_hours == 9.0
        assert summary.longest_session_hours == 16.0
        assert summary.current_streak_days == 2
        assert summary.target_usage == {"16:8": 1, "18:6": 1}
        assert [r.duration_minutes for r in summary.recent_sessions] == [120, 960]

    @pytest.mark.asyncio
    async def test_active_sessions_are_ignored(self, fasting_repository, clock) -> None:
        await StartSessionCommandHandler(fasting_repository, clock).handle(
            StartSessionCommand(user_id="user123", target_spec="16:8")
        )
        summary = await GetAnalyticsSummaryQueryHandler(fasting_repository, clock).handle(
            GetAnalyticsSummaryQuery(user_id="user123")
        )
        assert summary.total_sessions == 0
        assert summary.current_streak_days == 0
        assert summary.recent_sessions == []

    @pytest.mark.asyncio
    async def test_exercise_breakdown(self, exercise_repository, clock) -> None:
        await _complete(exercise_repository, clock, 30, exercise_type="running", target_spec=None)
        await _complete(exercise_repository, clock, 90, exercise_type="running", target_spec=None)
        await _complete(exercise_repository, clock, 60, exercise_type="yoga", target_spec=None)

        summary = await GetAnalyticsSummaryQueryHandler(exercise_repository, clock).handle(
            GetAnalyticsSummaryQuery(user_id="user123")
        )

        running = summary.category_breakdown["running"]
        assert running.sessions == 2
        assert running.total_hours == 2.0
        assert running.average_hours == 1.0
        assert summary.category_breakdown["yoga"].sessions == 1
        assert summary.phase_hours == {}
