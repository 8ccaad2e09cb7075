"""JWT authentication provider implementation."""

from typing import Any, Dict, Optional

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError as JWTError

from domain.auth.ports.auth_provider import IAuthProvider, InvalidTokenError
from infrastructure.config import get_jwt_algorithm, get_jwt_audience, get_jwt_secret


class JWTAuthProvider(IAuthProvider):
    """Verify signed JWTs with a shared secret.

    Environment Variables:
    - JWT_SECRET: Signing secret (required)
    - JWT_ALGORITHM: Signing algorithm (default: HS256)
    - JWT_AUDIENCE: Expected audience (optional, not checked when unset)

    Examples:
        >>> provider = JWTAuthProvider(secret="s3cret")
        >>> claims = await provider.verify_token(token)
        >>> claims["sub"]
        'user-123'
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        audience: Optional[str] = None,
    ):
        """Initialize provider.

        Raises:
            ValueError: If no secret is configured
        """
        self.secret = secret or get_jwt_secret()
        self.algorithm = algorithm or get_jwt_algorithm()
        self.audience = audience or get_jwt_audience()

        if not self.secret:
            raise ValueError("JWT_SECRET is required")

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Decode and validate ``token``.

        Raises:
            InvalidTokenError: If the token is expired, malformed, has a bad
                signature or lacks a subject
        """
        options = {"require": ["exp", "sub"], "verify_aud": self.audience is not None}
        try:
            payload: Dict[str, Any] = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options=options,
            )
        except ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        if not str(payload.get("sub", "")).strip():
            raise InvalidTokenError("Token subject is empty")
        return payload
