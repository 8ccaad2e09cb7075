"""DeleteUserSessionsCommand - erase all sessions of a user."""

from dataclasses import dataclass
import logging

from domain.session.core.ports.repository import ISessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteUserSessionsCommand:
    """Command issued on account erasure.

    Attributes:
        user_id: User whose sessions are removed
    """

    user_id: str


class DeleteUserSessionsCommandHandler:
    """Handler for DeleteUserSessionsCommand."""

    def __init__(self, repository: ISessionRepository):
        self._repository = repository

    async def handle(self, command: DeleteUserSessionsCommand) -> int:
        """Delete every session of the user; returns how many were removed."""
        deleted = await self._repository.delete_all_for_user(command.user_id)

        logger.info(
            "User sessions deleted",
            extra={
                "user_id": command.user_id,
                "kind": self._repository.kind.value,
                "deleted": deleted,
            },
        )
        return deleted
