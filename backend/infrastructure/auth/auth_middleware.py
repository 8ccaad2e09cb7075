"""FastAPI authentication middleware."""

from typing import Any, FrozenSet, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from domain.auth.ports.auth_provider import IAuthProvider, InvalidTokenError
from infrastructure.config import is_auth_required

PUBLIC_PATHS: FrozenSet[str] = frozenset({"/health", "/version"})


class AuthMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware for JWT authentication.

    Verifies bearer tokens from the Authorization header and sets auth claims
    in request.state for downstream handlers.

    Environment Variables:
    - AUTH_REQUIRED: "true" to require auth on all non-public routes
      (default: "true")

    Examples:
        >>> app.add_middleware(AuthMiddleware, auth_provider=JWTAuthProvider())
        >>> # In a resolver:
        >>> user_id = request.state.auth_claims["sub"]
    """

    def __init__(
        self,
        app: Any,
        auth_provider: Optional[IAuthProvider] = None,
        auth_required: Optional[bool] = None,
    ) -> None:
        """Initialize middleware.

        Args:
            app: FastAPI application
            auth_provider: Token verifier (a JWTAuthProvider is created if None
                and authentication is required)
            auth_required: Overrides AUTH_REQUIRED when given
        """
        super().__init__(app)
        self.auth_required = is_auth_required() if auth_required is None else auth_required
        if auth_provider is None and self.auth_required:
            from infrastructure.auth.jwt_provider import JWTAuthProvider

            auth_provider = JWTAuthProvider()
        self.auth_provider = auth_provider

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        """Process request and verify the bearer token.

        Returns:
            Response from handler or 401 error
        """
        request.state.auth_claims = None

        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        token = self._extract_token(request.headers.get("Authorization"))

        if not token:
            if self.auth_required:
                return JSONResponse(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    content={"error": "unauthorized", "message": "Missing authorization token"},
                )
            return await call_next(request)

        if self.auth_provider is None:
            # Auth disabled and no verifier configured: token is ignored
            return await call_next(request)

        try:
            request.state.auth_claims = await self.auth_provider.verify_token(token)
        except InvalidTokenError as e:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "invalid_token", "message": str(e)},
            )

        return await call_next(request)

    def _extract_token(self, auth_header: Optional[str]) -> Optional[str]:
        """Extract Bearer token from Authorization header.

        Examples:
            >>> self._extract_token("Bearer eyJ...")
            'eyJ...'
            >>> self._extract_token("eyJ...")  # Missing Bearer
            None
        """
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2:
            return None

        scheme, token = parts
        if scheme.lower() != "bearer":
            return None

        return token
