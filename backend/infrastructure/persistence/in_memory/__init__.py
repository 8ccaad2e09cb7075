"""In-memory persistence implementations."""

from infrastructure.persistence.in_memory.session_repository import (
    InMemorySessionRepository,
)

__all__ = [
    "InMemorySessionRepository",
]
