"""Ordered store protocol.

Defines the sorted-set capability the queue manager is built on. Members are
strings ordered ascending by a float score; ties are ordered by member, the way
Redis orders sorted sets.
"""

from collections.abc import AsyncIterator, Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class OrderedStore(Protocol):
    """Protocol for score-ordered set storage backends.

    All methods are async. Implementations never retry internally: any
    communication failure is raised as StoreUnavailableError.
    """

    async def insert_if_absent(self, key: str, member: str, score: float) -> bool:
        """Add a member unless it already exists.

        Creates the structure if missing. An existing member keeps its score.

        Returns:
            True if inserted, False if the member was already present.
        """
        ...

    async def upsert(self, key: str, scores: Mapping[str, float]) -> int:
        """Set the score of each member in a single write, adding missing ones.

        Existing members take the new score.

        Returns:
            Number of members that were newly added.
        """
        ...

    async def rank_of(self, key: str, member: str) -> int | None:
        """Get the 0-based ascending rank of a member, or None if absent."""
        ...

    async def pop_lowest(self, key: str, count: int) -> list[str]:
        """Atomically remove and return up to ``count`` lowest-scored members.

        Members are returned in ascending order. Returns an empty list when the
        structure is empty or does not exist.
        """
        ...

    def scan_keys(self, pattern: str, count: int = 100) -> AsyncIterator[str]:
        """Iterate over keys matching a glob-style pattern.

        Each call starts a fresh, finite scan. No ordering guarantee.
        ``count`` is a batching hint for backends that scan incrementally.
        """
        ...

    async def size(self, key: str) -> int:
        """Number of members in a structure (0 if absent)."""
        ...

    async def ping(self) -> bool:
        """Check that the store is reachable."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        ...
