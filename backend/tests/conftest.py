"""Integration/E2E test fixtures.

This conftest loads the full app and is used for integration/e2e tests.
Unit tests in tests/unit/ have their own isolated conftest that doesn't load the app.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, AsyncIterator, Generator, cast

import pytest
import pytest_asyncio
from dotenv import load_dotenv

# Load .env first (default environment variables)
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Load .env.test overrides (e.g. a real MONGODB_URI for mongo integration runs)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)

# Test defaults: in-memory storage, development identity fallback
os.environ.setdefault("REPOSITORY_BACKEND", "inmemory")
os.environ.setdefault("AUTH_REQUIRED", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")

if TYPE_CHECKING:
    from fastapi import FastAPI
    from httpx import AsyncClient

# Check if running unit tests only
UNIT_TESTS_ONLY = os.getenv("PYTEST_UNIT_ONLY", "0") == "1"

app: FastAPI | None

if UNIT_TESTS_ONLY:
    APP_AVAILABLE = False
    app = None
else:
    from app import app

    APP_AVAILABLE = True


@pytest.fixture(autouse=True)
def _reset_session_repositories() -> Generator[None, None, None]:
    """Give every test fresh repository singletons."""
    from infrastructure.persistence.session_repository_factory import (
        reset_session_repositories,
    )

    reset_session_repositories()
    yield
    reset_session_repositories()


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client for GraphQL/REST tests.

    Uses httpx.AsyncClient with an explicit ASGITransport and a fake
    base_url so relative requests resolve.
    """
    if not APP_AVAILABLE or app is None:
        pytest.skip("App not loaded (PYTEST_UNIT_ONLY=1)")

    from httpx import ASGITransport, AsyncClient

    transport = ASGITransport(app=cast(Any, app))
    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as ac:
        yield ac
