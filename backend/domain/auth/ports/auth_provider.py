"""Authentication provider port (interface)."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class IAuthProvider(ABC):
    """Authentication provider interface.

    Verifies bearer tokens issued by an external identity service. Allows
    mocking in tests and swapping the token format.

    Examples:
        >>> class StaticProvider(IAuthProvider):
        ...     async def verify_token(self, token: str) -> Dict[str, Any]:
        ...         return {"sub": "user-1"}
    """

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify a token and return its claims.

        Args:
            token: Access token from the Authorization header

        Returns:
            Token claims dictionary with at minimum:
            - sub: Subject (the user identifier)
            - exp: Expiration timestamp

        Raises:
            InvalidTokenError: Token is invalid, expired, or has wrong audience
        """
        pass


class InvalidTokenError(Exception):
    """Token verification failed."""

    def __init__(self, reason: str):
        """Initialize with failure reason.

        Args:
            reason: Human-readable reason for failure
        """
        self.reason = reason
        super().__init__(f"Invalid token: {reason}")
