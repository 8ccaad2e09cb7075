"""CQRS Commands for session domain."""

from .start_session import (
    StartSessionCommand,
    StartSessionCommandHandler,
)
from .stop_session import (
    StopSessionCommand,
    StopSessionCommandHandler,
)
from .update_notes import (
    UpdateSessionNotesCommand,
    UpdateSessionNotesCommandHandler,
)
from .delete_user_sessions import (
    DeleteUserSessionsCommand,
    DeleteUserSessionsCommandHandler,
)

__all__ = [
    # Lifecycle commands
    "StartSessionCommand",
    "StartSessionCommandHandler",
    "StopSessionCommand",
    "StopSessionCommandHandler",
    # Metadata command
    "UpdateSessionNotesCommand",
    "UpdateSessionNotesCommandHandler",
    # Account erasure
    "DeleteUserSessionsCommand",
    "DeleteUserSessionsCommandHandler",
]
