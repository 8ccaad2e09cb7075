"""PlanProgressService - progress of a fast against its plan target."""

from dataclasses import dataclass

from ..core.value_objects.fasting_plan import FastingPlan
from .time_arithmetic import percentage


@dataclass(frozen=True)
class PlanProgress:
    """Progress against a fasting plan.

    Attributes:
        plan: Fasting plan the session targets
        target_hours: Fasting target in hours
        completed_hours: Hours fasted so far
        completion_percentage: Share of target reached, capped at 100
        remaining_hours: Hours left to reach the target, never negative
        is_goal_reached: True once the target is met
    """

    plan: FastingPlan
    target_hours: int
    completed_hours: float
    completion_percentage: float
    remaining_hours: float
    is_goal_reached: bool


class PlanProgressService:
    """Compute plan progress for a fasting duration."""

    def calculate(self, duration_minutes: int, plan: FastingPlan) -> PlanProgress:
        """Compute progress toward ``plan``.

        Example:
            >>> progress = PlanProgressService().calculate(65, FastingPlan.PLAN_16_8)
            >>> progress.completion_percentage, progress.remaining_hours
            (6.77, 14.92)
        """
        if duration_minutes < 0:
            raise ValueError(f"Duration cannot be negative, got {duration_minutes}")

        target_hours = plan.target_hours
        completed_hours = duration_minutes / 60

        return PlanProgress(
            plan=plan,
            target_hours=target_hours,
            completed_hours=round(completed_hours, 2),
            completion_percentage=min(100.0, percentage(completed_hours, target_hours)),
            remaining_hours=round(max(0.0, target_hours - completed_hours), 2),
            is_goal_reached=completed_hours >= target_hours,
        )
