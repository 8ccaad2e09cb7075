"""Authentication ports."""

from .auth_provider import IAuthProvider, InvalidTokenError

__all__ = ["IAuthProvider", "InvalidTokenError"]
