"""MetabolicPhaseService - split a fast into metabolic phases."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .time_arithmetic import clamp, minutes_to_hours, percentage


class MetabolicPhase(str, Enum):
    """Approximate metabolic state reached during a fast."""

    FED = "fed"
    TRANSITION = "transition"
    FASTING = "fasting"
    KETOSIS = "ketosis"


@dataclass(frozen=True)
class PhaseDefinition:
    """Fixed boundaries of one phase, in minutes from the fast start.

    ``length_minutes`` is None for the open-ended last phase.
    """

    phase: MetabolicPhase
    start_minute: int
    length_minutes: Optional[int]
    label: str


PHASES: Tuple[PhaseDefinition, ...] = (
    PhaseDefinition(MetabolicPhase.FED, 0, 240, "Glucose (fed state)"),
    PhaseDefinition(MetabolicPhase.TRANSITION, 240, 480, "Glycogen + fat"),
    PhaseDefinition(MetabolicPhase.FASTING, 720, 240, "Fat + glycogen"),
    PhaseDefinition(MetabolicPhase.KETOSIS, 960, None, "Fat + ketones"),
)


@dataclass(frozen=True)
class PhaseBreakdown:
    """Time spent in one phase."""

    phase: MetabolicPhase
    label: str
    minutes: int
    hours: float
    percentage: float


@dataclass(frozen=True)
class MetabolicProfile:
    """Phase breakdown for a single fasting duration.

    Attributes:
        total_minutes: Duration the breakdown was computed for
        phases: One entry per phase, in physiological order
        current_phase: Phase the fast is in at ``total_minutes``
    """

    total_minutes: int
    phases: Tuple[PhaseBreakdown, ...]
    current_phase: MetabolicPhase

    def minutes_by_phase(self) -> Dict[MetabolicPhase, int]:
        return {p.phase: p.minutes for p in self.phases}

    def get(self, phase: MetabolicPhase) -> PhaseBreakdown:
        for breakdown in self.phases:
            if breakdown.phase is phase:
                return breakdown
        raise KeyError(phase)


class MetabolicPhaseService:
    """Partition a fasting duration into fed/transition/fasting/ketosis.

    Boundaries (minutes): fed [0, 240), transition [240, 720),
    fasting [720, 960), ketosis [960, ∞). Minutes per phase always sum to
    the input duration.
    """

    def calculate(self, duration_minutes: int) -> MetabolicProfile:
        """Compute the phase breakdown.

        Args:
            duration_minutes: Fasting duration in whole minutes

        Returns:
            MetabolicProfile: Per-phase minutes, hours and percentages

        Raises:
            ValueError: If duration is negative

        Example:
            >>> profile = MetabolicPhaseService().calculate(1000)
            >>> [p.minutes for p in profile.phases]
            [240, 480, 240, 40]
        """
        if duration_minutes < 0:
            raise ValueError(f"Duration cannot be negative, got {duration_minutes}")

        denominator = max(duration_minutes, 1)
        phases = []
        for definition in PHASES:
            elapsed_in_phase = duration_minutes - definition.start_minute
            if definition.length_minutes is None:
                minutes = max(0, elapsed_in_phase)
            else:
                minutes = int(clamp(elapsed_in_phase, 0, definition.length_minutes))
            phases.append(
                PhaseBreakdown(
                    phase=definition.phase,
                    label=definition.label,
                    minutes=minutes,
                    hours=minutes_to_hours(minutes),
                    percentage=percentage(minutes, denominator),
                )
            )

        return MetabolicProfile(
            total_minutes=duration_minutes,
            phases=tuple(phases),
            current_phase=self.phase_at(duration_minutes),
        )

    @staticmethod
    def phase_at(minute: int) -> MetabolicPhase:
        """Phase a fast is in after ``minute`` minutes."""
        current = PHASES[0].phase
        for definition in PHASES:
            if minute >= definition.start_minute:
                current = definition.phase
        return current
