"""Queue management: registration, ranking, batch admission and tokens."""

from waitroom.queue.keys import (
    PROCEED_KEY,
    WAIT_KEY,
    WAIT_KEY_SCAN_PATTERN,
    proceed_key,
    queue_from_wait_key,
    token_cookie_name,
    wait_key,
)
from waitroom.queue.manager import NOT_PRESENT, UserQueueManager
from waitroom.queue.tokens import TokenGenerator

__all__ = [
    "NOT_PRESENT",
    "PROCEED_KEY",
    "TokenGenerator",
    "UserQueueManager",
    "WAIT_KEY",
    "WAIT_KEY_SCAN_PATTERN",
    "proceed_key",
    "queue_from_wait_key",
    "token_cookie_name",
    "wait_key",
]
