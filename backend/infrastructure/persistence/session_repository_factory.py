"""Factory for creating session repositories.

One repository per session kind, selected by the global REPOSITORY_BACKEND
environment variable like the other persistence factories.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects.session_kind import SessionKind
from infrastructure.config import get_repository_backend

# Singletons per session kind
_repositories: Dict[SessionKind, ISessionRepository] = {}
_mongo_client: Optional[AsyncIOMotorClient[Dict[str, Any]]] = None


def create_session_repository(kind: SessionKind) -> ISessionRepository:
    """Create a session repository based on REPOSITORY_BACKEND.

    Environment Variables:
        REPOSITORY_BACKEND: Repository type (inmemory | mongodb)
            Default: inmemory
        MONGODB_URI: MongoDB connection URI (required if mongodb)

    Returns:
        ISessionRepository: New repository for ``kind``

    Raises:
        ValueError: If REPOSITORY_BACKEND has an unsupported value or
            MONGODB_URI is missing for mongodb
    """
    global _mongo_client

    mode = get_repository_backend()

    if mode == "inmemory":
        from infrastructure.persistence.in_memory.session_repository import (
            InMemorySessionRepository,
        )

        return InMemorySessionRepository(kind)

    if mode == "mongodb":
        from infrastructure.persistence.mongodb.base import create_mongo_client
        from infrastructure.persistence.mongodb.session_repository import (
            MongoSessionRepository,
        )

        # Kinds share one connection pool
        if _mongo_client is None:
            _mongo_client = create_mongo_client()
        return MongoSessionRepository(kind, client=_mongo_client)

    raise ValueError(
        f"Unknown REPOSITORY_BACKEND value: '{mode}'. Supported values: inmemory, mongodb"
    )


def get_session_repository(kind: SessionKind) -> ISessionRepository:
    """
    Get singleton session repository for ``kind``.

    Lazy initialization on first call.
    """
    if kind not in _repositories:
        _repositories[kind] = create_session_repository(kind)
    return _repositories[kind]


def get_all_session_repositories() -> Dict[SessionKind, ISessionRepository]:
    """Repositories for every session kind."""
    return {kind: get_session_repository(kind) for kind in SessionKind}


def reset_session_repositories() -> None:
    """
    Reset singleton instances.

    Useful for testing to ensure clean state.
    """
    global _mongo_client
    _repositories.clear()
    _mongo_client = None


__all__ = [
    "create_session_repository",
    "get_session_repository",
    "get_all_session_repositories",
    "reset_session_repositories",
]
