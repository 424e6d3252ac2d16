"""Error types raised by the waiting room core.

Every error carries a stable ``code`` and a human-readable ``reason`` plus the
HTTP status the API layer should answer with.
"""


class WaitroomError(Exception):
    """Base class for waiting room errors."""

    code: str = "WR-0000"
    reason: str = "Waiting room error"
    status_code: int = 500

    def __init__(self, reason: str | None = None):
        self.reason = reason or self.reason
        super().__init__(f"{self.code}: {self.reason}")


class AlreadyRegisteredError(WaitroomError):
    """User is already waiting in the queue.

    Recoverable: the caller should look up the user's rank instead of
    treating them as rejected.
    """

    code = "UQ-0001"
    reason = "Already registered user in queue"
    status_code = 409

    def __init__(self, queue: str, user_id: str):
        self.queue = queue
        self.user_id = user_id
        super().__init__(f"Already registered user in queue: user={user_id}, queue={queue}")


class StoreUnavailableError(WaitroomError):
    """Communication with the backing store failed."""

    code = "ST-0001"
    reason = "Queue store is unavailable"
    status_code = 503


class ConfigurationFatalError(WaitroomError):
    """Process configuration cannot serve requests correctly."""

    code = "CF-0001"
    reason = "Fatal configuration error"
    status_code = 500
