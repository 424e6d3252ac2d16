"""Queue manager for registering, ranking and admitting users."""

import hmac
import logging
import time
from collections.abc import Callable

from waitroom.core.errors import AlreadyRegisteredError
from waitroom.queue.keys import WAIT_KEY_SCAN_PATTERN, proceed_key, queue_from_wait_key, wait_key
from waitroom.queue.tokens import TokenGenerator
from waitroom.stores.base import OrderedStore

logger = logging.getLogger(__name__)

# Rank reported for users who are not waiting (never registered, or already admitted)
NOT_PRESENT = -1


class UserQueueManager:
    """Stateless facade over the wait and admitted structures of every queue.

    Each queue has two sorted sets in the store:
    - wait: user id scored by arrival time, ascending order is admission order
    - proceed: user id scored by admission time

    All ordering and atomicity come from the store, so the manager keeps no
    mutable state and needs no locks.
    """

    def __init__(
        self,
        store: OrderedStore,
        token_generator: TokenGenerator | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the queue manager.

        Args:
            store: Ordered store holding the queue structures.
            token_generator: Token derivation; defaults to SHA-256.
            clock: Returns the current time in seconds since the epoch.
        """
        self.store = store
        self.token_generator = token_generator or TokenGenerator()
        self._clock = clock

    async def register(self, queue: str, user_id: str | int) -> int:
        """Add a user to the wait structure.

        Returns:
            The user's 1-based rank right after registration.

        Raises:
            AlreadyRegisteredError: If the user is already waiting in this queue.
        """
        member = str(user_id)
        key = wait_key(queue)
        inserted = await self.store.insert_if_absent(key, member, self._clock())
        if not inserted:
            raise AlreadyRegisteredError(queue, member)

        rank = await self.store.rank_of(key, member)
        # Admitted between insert and rank lookup
        if rank is None:
            return NOT_PRESENT
        logger.debug(f"Registered user {member} in queue {queue} at rank {rank + 1}")
        return rank + 1

    async def admit_batch(self, queue: str, count: int) -> int:
        """Move up to ``count`` earliest arrivals from wait to admitted.

        Members popped together share the batch's admission time, written in one
        store call. A user admitted before takes the new admission time.

        The pop and the admitted-set write are separate store operations. If the
        write fails after the pop, the popped users are in neither structure and
        the StoreUnavailableError propagates; they have to register again.

        Returns:
            Number of users admitted (0 if nobody was waiting).
        """
        members = await self.store.pop_lowest(wait_key(queue), count)
        if not members:
            return 0

        admitted_at = self._clock()
        await self.store.upsert(proceed_key(queue), dict.fromkeys(members, admitted_at))
        logger.debug(f"Admitted {len(members)} users from queue {queue}")
        return len(members)

    async def is_admitted(self, queue: str, user_id: str | int) -> bool:
        rank = await self.store.rank_of(proceed_key(queue), str(user_id))
        return rank is not None

    async def rank(self, queue: str, user_id: str | int) -> int:
        """1-based position in the wait structure, or NOT_PRESENT."""
        rank = await self.store.rank_of(wait_key(queue), str(user_id))
        return NOT_PRESENT if rank is None else rank + 1

    def issue_token(self, queue: str, user_id: str | int) -> str:
        return self.token_generator.generate(queue, user_id)

    def verify_token(self, queue: str, user_id: str | int, token: str | None) -> bool:
        """Check a token against the one this system derives for (queue, user).

        Only proves the token was issued for this pair; admission state is not
        consulted.
        """
        if not token:
            return False
        expected = self.issue_token(queue, user_id)
        return hmac.compare_digest(expected.lower().encode(), token.lower().encode())

    async def queue_size(self, queue: str) -> int:
        """Number of users currently waiting."""
        return await self.store.size(wait_key(queue))

    async def list_queues(self, scan_count: int = 100) -> list[str]:
        """Names of all queues with at least one waiting user."""
        # SCAN may return a key more than once
        queues = set()
        async for key in self.store.scan_keys(WAIT_KEY_SCAN_PATTERN, count=scan_count):
            queues.add(queue_from_wait_key(key))
        return sorted(queues)
