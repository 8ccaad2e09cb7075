"""Ports for session domain."""

from .repository import ISessionRepository

__all__ = [
    "ISessionRepository",
]
