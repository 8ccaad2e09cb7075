"""Domain exceptions for session tracking."""


class SessionDomainError(Exception):
    """Base exception for session domain errors."""

    code = "SESSION_ERROR"


class ActiveSessionExistsError(SessionDomainError):
    """Raised when starting a session while another one is active."""

    code = "ACTIVE_SESSION_EXISTS"

    def __init__(self, user_id: str, kind: str):
        super().__init__(f"User {user_id} already has an active {kind} session")
        self.user_id = user_id
        self.kind = kind


class SessionNotFoundError(SessionDomainError):
    """Raised when a session is missing or owned by another user."""

    code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class SessionNotActiveError(SessionDomainError):
    """Raised when stopping a session that is already completed."""

    code = "SESSION_NOT_ACTIVE"

    def __init__(self, session_id: str):
        super().__init__(f"Session is not active: {session_id}")
        self.session_id = session_id


class InvalidOffsetError(SessionDomainError):
    """Raised when a custom start offset is missing or out of range."""

    code = "INVALID_OFFSET"


class InvalidEndTimeError(SessionDomainError):
    """Raised when an explicit end time is before the start or in the future."""

    code = "INVALID_END_TIME"


class InvalidTargetSpecError(SessionDomainError):
    """Raised when a fasting plan or exercise type is not recognised."""

    code = "INVALID_TARGET_SPEC"


class InvalidEndReasonError(SessionDomainError):
    """Raised when an end reason is not allowed for the session kind."""

    code = "INVALID_END_REASON"


class InvalidPaginationError(SessionDomainError):
    """Raised when page or limit are out of range."""

    code = "VALIDATION_ERROR"
