"""Pure calculation services for session analytics."""

from .analytics_service import (
    AnalyticsService,
    AnalyticsSummary,
    CategoryStats,
    RecentSessionSummary,
)
from .metabolic_phase_service import (
    MetabolicPhase,
    MetabolicPhaseService,
    MetabolicProfile,
    PhaseBreakdown,
)
from .plan_progress_service import PlanProgress, PlanProgressService

__all__ = [
    "AnalyticsService",
    "AnalyticsSummary",
    "CategoryStats",
    "RecentSessionSummary",
    "MetabolicPhase",
    "MetabolicPhaseService",
    "MetabolicProfile",
    "PhaseBreakdown",
    "PlanProgress",
    "PlanProgressService",
]
