"""FastingPlan value object - intermittent fasting protocol."""

from enum import Enum
from typing import Optional

from ..exceptions.domain_errors import InvalidTargetSpecError


class FastingPlan(str, Enum):
    """Supported fasting:eating window protocols.

    The first number is the fasting target in hours, the second the eating
    window. Plans always cover a 24 hour cycle.
    """

    PLAN_12_12 = "12:12"
    PLAN_14_10 = "14:10"
    PLAN_16_8 = "16:8"
    PLAN_18_6 = "18:6"
    PLAN_20_4 = "20:4"

    @property
    def target_hours(self) -> int:
        """Fasting target in hours.

        Example:
            >>> FastingPlan.PLAN_16_8.target_hours
            16
        """
        return int(self.value.split(":", 1)[0])

    @classmethod
    def parse(cls, raw: Optional[str]) -> "FastingPlan":
        """Parse a plan spec such as ``"16:8"``.

        Raises:
            InvalidTargetSpecError: If the spec is missing or unsupported
        """
        if raw is None or not str(raw).strip():
            raise InvalidTargetSpecError("Fasting plan is required")
        try:
            return cls(str(raw).strip())
        except ValueError as e:
            supported = ", ".join(p.value for p in cls)
            raise InvalidTargetSpecError(
                f"Unsupported fasting plan '{raw}'. Supported plans: {supported}"
            ) from e
