"""Shared MongoDB plumbing for session repositories.

Provides:
- Motor client creation from MONGODB_URI
- UTC datetime normalisation for BSON dates
- Logged CRUD helpers that re-raise driver errors
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
import logging
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError

from infrastructure.config import get_mongodb_database, get_mongodb_uri

TEntity = TypeVar("TEntity")

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


def create_mongo_client() -> AsyncIOMotorClient[Document]:
    """Create a timezone-aware motor client from MONGODB_URI.

    Raises:
        ValueError: If MONGODB_URI is not configured
    """
    uri = get_mongodb_uri()
    if not uri:
        raise ValueError(
            "MONGODB_URI not configured. "
            "Set MONGODB_URI (optionally with ${MONGODB_USER}/${MONGODB_PASSWORD})."
        )
    return AsyncIOMotorClient(uri, tz_aware=True)


class MongoBaseRepository(ABC, Generic[TEntity]):
    """
    Base class for repositories backed by one MongoDB collection.

    Concrete repositories provide ``collection_name`` and the two mapping
    hooks ``to_document`` / ``from_document``. Helpers log failures with the
    collection name and re-raise; DuplicateKeyError is re-raised without an
    error log because callers translate it into a domain error.
    """

    def __init__(self, client: Optional[AsyncIOMotorClient[Document]] = None):
        """
        Args:
            client: Shared motor client; a new one is created from config if None
        """
        self._client: AsyncIOMotorClient[Document] = client or create_mongo_client()
        self._db = self._client[get_mongodb_database()]
        self._collection = self._db[self.collection_name]

        logger.info(
            f"{self.__class__.__name__} bound to collection '{self.collection_name}'"
        )

    # ============================================================
    # Mapping hooks
    # ============================================================

    @property
    @abstractmethod
    def collection_name(self) -> str:
        pass

    @abstractmethod
    def to_document(self, entity: TEntity) -> Document:
        pass

    @abstractmethod
    def from_document(self, doc: Document) -> TEntity:
        """
        Raises:
            ValueError: If the stored document cannot be mapped
        """
        pass

    @property
    def collection(self) -> AsyncIOMotorCollection[Document]:
        return self._collection

    # ============================================================
    # Datetimes
    # ============================================================

    @staticmethod
    def to_bson_datetime(dt: Optional[datetime]) -> Optional[datetime]:
        """Normalize an aware datetime to UTC for storage.

        BSON dates have millisecond precision; sub-millisecond digits are
        dropped here so stored and in-memory values agree.
        """
        if dt is None:
            return None
        if dt.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware")
        dt = dt.astimezone(timezone.utc)
        return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)

    @staticmethod
    def from_bson_datetime(value: Optional[datetime]) -> Optional[datetime]:
        """Return a stored date as an aware UTC datetime."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    # ============================================================
    # CRUD helpers
    # ============================================================

    def _log_failure(
        self, operation: str, error: Exception, filter_dict: Optional[Document] = None
    ) -> None:
        logger.error(
            f"MongoDB {operation} failed: collection={self.collection_name}, "
            f"filter={filter_dict}, error={error}"
        )

    async def _find_one(self, filter_dict: Document) -> Optional[Document]:
        try:
            return await self._collection.find_one(filter_dict)
        except Exception as e:
            self._log_failure("find_one", e, filter_dict)
            raise

    async def _find_many(
        self,
        filter_dict: Document,
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
    ) -> List[Document]:
        """
        Args:
            filter_dict: MongoDB filter
            sort: [(field, direction), ...]
            limit: Max documents (None for all)
            skip: Documents to skip
        """
        try:
            cursor = self._collection.find(filter_dict)
            if sort:
                cursor = cursor.sort(sort)
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=limit)
        except Exception as e:
            self._log_failure("find", e, filter_dict)
            raise

    async def _insert_one(self, document: Document) -> None:
        """
        Raises:
            DuplicateKeyError: If a unique index rejects the document
        """
        try:
            await self._collection.insert_one(document)
        except DuplicateKeyError:
            logger.debug(f"Duplicate key on insert: collection={self.collection_name}")
            raise
        except Exception as e:
            self._log_failure("insert_one", e)
            raise

    async def _update_one(
        self, filter_dict: Document, update: Document, upsert: bool = False
    ) -> int:
        """Update one document; returns the matched count (0 or 1)."""
        try:
            result = await self._collection.update_one(filter_dict, update, upsert=upsert)
            return result.matched_count
        except DuplicateKeyError:
            logger.debug(f"Duplicate key on update: collection={self.collection_name}")
            raise
        except Exception as e:
            self._log_failure("update_one", e, filter_dict)
            raise

    async def _delete_many(self, filter_dict: Document) -> int:
        try:
            result = await self._collection.delete_many(filter_dict)
            return result.deleted_count
        except Exception as e:
            self._log_failure("delete_many", e, filter_dict)
            raise

    async def _count(self, filter_dict: Document) -> int:
        try:
            return await self._collection.count_documents(filter_dict)
        except Exception as e:
            self._log_failure("count_documents", e, filter_dict)
            raise

    async def close(self) -> None:
        """Close the underlying client (shared clients close for every user)."""
        self._client.close()
        logger.info(f"Closed MongoDB client for {self.__class__.__name__}")
