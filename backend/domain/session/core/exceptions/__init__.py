"""Domain exceptions for session tracking."""

from .domain_errors import (
    ActiveSessionExistsError,
    InvalidEndReasonError,
    InvalidEndTimeError,
    InvalidOffsetError,
    InvalidPaginationError,
    InvalidTargetSpecError,
    SessionDomainError,
    SessionNotActiveError,
    SessionNotFoundError,
)

__all__ = [
    "SessionDomainError",
    "ActiveSessionExistsError",
    "SessionNotFoundError",
    "SessionNotActiveError",
    "InvalidOffsetError",
    "InvalidEndTimeError",
    "InvalidTargetSpecError",
    "InvalidEndReasonError",
    "InvalidPaginationError",
]
