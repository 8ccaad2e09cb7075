"""SessionId value object - unique identifier for tracked sessions."""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class SessionId:
    """Unique identifier for a fasting or exercise session.

    Immutable value object wrapping a UUID.
    """

    value: UUID

    @staticmethod
    def generate() -> "SessionId":
        """Generate a new unique session ID."""
        return SessionId(value=uuid4())

    @staticmethod
    def from_string(id_str: str) -> "SessionId":
        """Create SessionId from its string representation.

        Args:
            id_str: String representation of UUID

        Returns:
            SessionId: Parsed session ID

        Raises:
            ValueError: If string is not a valid UUID
        """
        try:
            return SessionId(value=UUID(id_str))
        except (ValueError, AttributeError, TypeError) as e:
            raise ValueError(f"Invalid session ID format: {id_str}") from e

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"SessionId(value={self.value})"
