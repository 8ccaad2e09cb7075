"""Entities for session domain."""

from .session import Session

__all__ = [
    "Session",
]
