"""Unit tests for JWTAuthProvider."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from domain.auth.ports.auth_provider import InvalidTokenError
from infrastructure.auth.jwt_provider import JWTAuthProvider

SECRET = "unit-test-secret-with-enough-length"


def make_token(secret: str = SECRET, **overrides) -> str:
    claims = {
        "sub": "user-123",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    claims.update(overrides)
    claims = {k: v for k, v in claims.items() if v is not None}
    return jwt.encode(claims, secret, algorithm="HS256")


class TestJWTAuthProvider:
    @pytest.fixture
    def provider(self) -> JWTAuthProvider:
        return JWTAuthProvider(secret=SECRET, algorithm="HS256")

    @pytest.mark.asyncio
    async def test_valid_token(self, provider) -> None:
        claims = await provider.verify_token(make_token())
        assert claims["sub"] == "user-123"

    @pytest.mark.asyncio
    async def test_expired_token(self, provider) -> None:
        token = make_token(exp=datetime.now(timezone.utc) - timedelta(minutes=5))

        with pytest.raises(InvalidTokenError) as exc_info:
            await provider.verify_token(token)
        assert exc_info.value.reason == "Token has expired"

    @pytest.mark.asyncio
    async def test_wrong_signature(self, provider) -> None:
        with pytest.raises(InvalidTokenError):
            await provider.verify_token(make_token(secret="another-secret-that-is-long-enough-too"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["sub", "exp"])
    async def test_required_claims(self, provider, missing: str) -> None:
        with pytest.raises(InvalidTokenError):
            await provider.verify_token(make_token(**{missing: None}))

    @pytest.mark.asyncio
    async def test_blank_subject(self, provider) -> None:
        with pytest.raises(InvalidTokenError, match="subject"):
            await provider.verify_token(make_token(sub="  "))

    @pytest.mark.asyncio
    async def test_garbage(self, provider) -> None:
        with pytest.raises(InvalidTokenError):
            await provider.verify_token("not.a.jwt")

    @pytest.mark.asyncio
    async def test_audience_checked_when_configured(self) -> None:
        provider = JWTAuthProvider(secret=SECRET, audience="fastlog-api")

        claims = await provider.verify_token(make_token(aud="fastlog-api"))
        assert claims["aud"] == "fastlog-api"

        with pytest.raises(InvalidTokenError):
            await provider.verify_token(make_token(aud="someone-else"))

    def test_secret_required(self, monkeypatch) -> None:
        monkeypatch.delenv("JWT_SECRET", raising=False)
        with pytest.raises(ValueError, match="JWT_SECRET"):
            JWTAuthProvider()

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("JWT_SECRET", "from-env")
        monkeypatch.setenv("JWT_ALGORITHM", "HS512")
        monkeypatch.delenv("JWT_AUDIENCE", raising=False)

        provider = JWTAuthProvider()

        assert provider.secret == "from-env"
        assert provider.algorithm == "HS512"
        assert provider.audience is None
