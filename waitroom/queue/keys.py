"""Store key layout for queues.

External tooling and monitoring rely on these names; do not change them.
"""

WAIT_KEY = "users:queue:{queue}:wait"
PROCEED_KEY = "users:queue:{queue}:proceed"
WAIT_KEY_SCAN_PATTERN = "users:queue:*:wait"

TOKEN_COOKIE_NAME = "user-queue-{queue}-token"


def wait_key(queue: str) -> str:
    return WAIT_KEY.format(queue=queue)


def proceed_key(queue: str) -> str:
    return PROCEED_KEY.format(queue=queue)


def queue_from_wait_key(key: str) -> str:
    """Extract the queue name (third colon-delimited segment) from a wait key."""
    return key.split(":")[2]


def token_cookie_name(queue: str) -> str:
    return TOKEN_COOKIE_NAME.format(queue=queue)
