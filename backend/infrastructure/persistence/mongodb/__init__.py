"""MongoDB repository implementations."""

from .base import MongoBaseRepository, create_mongo_client
from .session_repository import MongoSessionRepository

__all__ = [
    "MongoBaseRepository",
    "MongoSessionRepository",
    "create_mongo_client",
]
