"""MongoDB implementation of ISessionRepository."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError

from domain.session.core.entities.session import Session
from domain.session.core.exceptions.domain_errors import (
    ActiveSessionExistsError,
    SessionNotActiveError,
)
from domain.session.core.ports.repository import ISessionRepository
from domain.session.core.value_objects.end_reason import EndReason
from domain.session.core.value_objects.exercise_type import ExerciseType
from domain.session.core.value_objects.fasting_plan import FastingPlan
from domain.session.core.value_objects.session_id import SessionId
from domain.session.core.value_objects.session_kind import SessionKind
from domain.session.core.value_objects.session_status import SessionStatus, StatusFilter
from domain.session.core.value_objects.start_mode import CustomOffset, StartMode

from .base import MongoBaseRepository

logger = logging.getLogger(__name__)

ACTIVE_SESSION_INDEX = "uniq_active_session_per_user"


class MongoSessionRepository(MongoBaseRepository[Session], ISessionRepository):
    """MongoDB repository for one session kind.

    Collection is ``{kind}_sessions``. A partial unique index on ``user_id``
    restricted to ``status == "active"`` makes the single active session
    rule atomic across concurrent requests.
    """

    def __init__(
        self,
        kind: SessionKind,
        client: Optional[AsyncIOMotorClient[Dict[str, Any]]] = None,
    ):
        self._kind = kind
        super().__init__(client)

    @property
    def kind(self) -> SessionKind:
        return self._kind

    @property
    def collection_name(self) -> str:
        return self._kind.collection_name

    def to_document(self, entity: Session) -> Dict[str, Any]:
        """Convert Session entity to MongoDB document."""
        session = entity
        offset = session.custom_offset
        return {
            "_id": str(session.session_id),
            "user_id": session.user_id,
            "kind": session.kind.value,
            "status": session.status.value,
            "start_mode": session.start_mode.value,
            "start_time": self.to_bson_datetime(session.start_time),
            "end_time": self.to_bson_datetime(session.end_time),
            "duration_minutes": session.duration_minutes,
            "custom_start_hours": offset.hours if offset else None,
            "custom_start_minutes": offset.minutes if offset else None,
            "target_spec": session.target_spec.value if session.target_spec else None,
            "exercise_type": session.exercise_type.value if session.exercise_type else None,
            "end_reason": session.end_reason.value if session.end_reason else None,
            "notes": session.notes,
            "created_at": self.to_bson_datetime(session.created_at),
            "updated_at": self.to_bson_datetime(session.updated_at),
        }

    def from_document(self, doc: Dict[str, Any]) -> Session:
        """Convert MongoDB document to Session entity."""
        custom_offset = None
        if doc.get("start_mode") == StartMode.CUSTOM.value:
            custom_offset = CustomOffset(
                hours=doc.get("custom_start_hours") or 0,
                minutes=doc.get("custom_start_minutes") or 0,
            )

        return Session(
            session_id=SessionId.from_string(doc["_id"]),
            user_id=doc["user_id"],
            kind=SessionKind(doc.get("kind", self._kind.value)),
            status=SessionStatus(doc["status"]),
            start_mode=StartMode(doc.get("start_mode", StartMode.IMMEDIATE.value)),
            start_time=self.from_bson_datetime(doc["start_time"]),
            end_time=self.from_bson_datetime(doc.get("end_time")),
            duration_minutes=doc.get("duration_minutes"),
            custom_offset=custom_offset,
            target_spec=FastingPlan(doc["target_spec"]) if doc.get("target_spec") else None,
            exercise_type=(
                ExerciseType(doc["exercise_type"]) if doc.get("exercise_type") else None
            ),
            end_reason=EndReason(doc["end_reason"]) if doc.get("end_reason") else None,
            notes=doc.get("notes"),
            created_at=self.from_bson_datetime(doc["created_at"]),
            updated_at=self.from_bson_datetime(doc["updated_at"]),
        )

    async def ensure_indexes(self) -> None:
        """Create the collection indexes (idempotent)."""
        await self.collection.create_index(
            [("user_id", ASCENDING)],
            name=ACTIVE_SESSION_INDEX,
            unique=True,
            partialFilterExpression={"status": SessionStatus.ACTIVE.value},
        )
        await self.collection.create_index(
            [("user_id", ASCENDING), ("start_time", DESCENDING)],
            name="user_start_time",
        )
        await self.collection.create_index(
            [("user_id", ASCENDING), ("status", ASCENDING), ("end_time", DESCENDING)],
            name="user_status_end_time",
        )
        logger.info(f"Ensured indexes on '{self.collection_name}'")

    async def create(self, session: Session) -> None:
        try:
            await self._insert_one(self.to_document(session))
        except DuplicateKeyError:
            raise ActiveSessionExistsError(session.user_id, self._kind.value)

    async def save(self, session: Session) -> None:
        document = self.to_document(session)
        session_id = document.pop("_id")
        try:
            await self._update_one(
                {"_id": session_id, "user_id": session.user_id}, {"$set": document}
            )
        except DuplicateKeyError:
            raise ActiveSessionExistsError(session.user_id, self._kind.value)

    async def complete(self, session: Session) -> None:
        """
        Raises:
            SessionNotActiveError: If no ACTIVE document matched the update
        """
        document = self.to_document(session)
        session_id = document.pop("_id")
        matched = await self._update_one(
            {
                "_id": session_id,
                "user_id": session.user_id,
                "status": SessionStatus.ACTIVE.value,
            },
            {"$set": document},
        )
        if matched == 0:
            raise SessionNotActiveError(str(session.session_id))

    async def find_active(self, user_id: str) -> Optional[Session]:
        doc = await self._find_one({"user_id": user_id, "status": SessionStatus.ACTIVE.value})
        return self.from_document(doc) if doc else None

    async def find_by_id(self, session_id: SessionId, user_id: str) -> Optional[Session]:
        doc = await self._find_one({"_id": str(session_id), "user_id": user_id})
        return self.from_document(doc) if doc else None

    async def list(
        self,
        user_id: str,
        status_filter: StatusFilter = StatusFilter.ALL,
        page: int = 1,
        limit: int = 20,
    ) -> List[Session]:
        docs = await self._find_many(
            self._user_filter(user_id, status_filter),
            sort=[("start_time", DESCENDING), ("_id", DESCENDING)],
            skip=(page - 1) * limit,
            limit=limit,
        )
        return [self.from_document(doc) for doc in docs]

    async def count(self, user_id: str, status_filter: StatusFilter = StatusFilter.ALL) -> int:
        return await self._count(self._user_filter(user_id, status_filter))

    async def list_completed(self, user_id: str) -> List[Session]:
        docs = await self._find_many(
            self._user_filter(user_id, StatusFilter.COMPLETED),
            sort=[("end_time", DESCENDING)],
        )
        return [self.from_document(doc) for doc in docs]

    async def delete_all_for_user(self, user_id: str) -> int:
        return await self._delete_many({"user_id": user_id})

    @staticmethod
    def _user_filter(user_id: str, status_filter: StatusFilter) -> Dict[str, Any]:
        filter_dict: Dict[str, Any] = {"user_id": user_id}
        if status_filter is not StatusFilter.ALL:
            filter_dict["status"] = status_filter.value
        return filter_dict
