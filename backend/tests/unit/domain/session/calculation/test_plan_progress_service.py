"""Unit tests for PlanProgressService."""

import pytest

from domain.session.calculation.plan_progress_service import PlanProgressService
from domain.session.core.value_objects.fasting_plan import FastingPlan


@pytest.fixture
def service() -> PlanProgressService:
    return PlanProgressService()


def test_early_progress(service) -> None:
    """GIVEN a 16:8 fast stopped after 65 minutes THEN ~6.77% done, 14.92h left."""
    progress = service.calculate(65, FastingPlan.PLAN_16_8)

    assert progress.target_hours == 16
    assert progress.completed_hours == 1.08
    assert progress.completion_percentage == 6.77
    assert progress.remaining_hours == 14.92
    assert progress.is_goal_reached is False


def test_goal_reached_exactly(service) -> None:
    progress = service.calculate(16 * 60, FastingPlan.PLAN_16_8)
    assert progress.completion_percentage == 100.0
    assert progress.remaining_hours == 0.0
    assert progress.is_goal_reached is True


def test_overshoot_is_capped(service) -> None:
    progress = service.calculate(20 * 60, FastingPlan.PLAN_12_12)
    assert progress.completion_percentage == 100.0
    assert progress.remaining_hours == 0.0
    assert progress.completed_hours == 20.0


def test_zero_duration(service) -> None:
    progress = service.calculate(0, FastingPlan.PLAN_20_4)
    assert progress.completion_percentage == 0.0
    assert progress.remaining_hours == 20.0


def test_negative_duration(service) -> None:
    with pytest.raises(ValueError):
        service.calculate(-5, FastingPlan.PLAN_16_8)
