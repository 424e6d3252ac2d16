"""In-memory ordered store.

For testing and development only. All state is lost on process restart and it
cannot be shared between worker processes.
"""

import asyncio
from collections.abc import AsyncIterator, Mapping
from fnmatch import fnmatchcase


class MemoryOrderedStore:
    """In-memory OrderedStore.

    Guards its state with an asyncio.Lock so each operation is atomic, like a
    single Redis command. Empty structures are dropped, as Redis drops empty keys.
    """

    def __init__(self) -> None:
        self._sets: dict[str, dict[str, float]] = {}
        self._lock = asyncio.Lock()

    def _ordered(self, key: str) -> list[str]:
        members = self._sets.get(key, {})
        return sorted(members, key=lambda member: (members[member], member))

    async def insert_if_absent(self, key: str, member: str, score: float) -> bool:
        async with self._lock:
            members = self._sets.setdefault(key, {})
            if member in members:
                return False
            members[member] = score
            return True

    async def upsert(self, key: str, scores: Mapping[str, float]) -> int:
        if not scores:
            return 0
        async with self._lock:
            members = self._sets.setdefault(key, {})
            added = sum(1 for member in scores if member not in members)
            members.update(scores)
            return added

    async def rank_of(self, key: str, member: str) -> int | None:
        async with self._lock:
            if member not in self._sets.get(key, {}):
                return None
            return self._ordered(key).index(member)

    async def pop_lowest(self, key: str, count: int) -> list[str]:
        if count <= 0:
            return []
        async with self._lock:
            popped = self._ordered(key)[:count]
            members = self._sets.get(key, {})
            for member in popped:
                del members[member]
            if not members:
                self._sets.pop(key, None)
            return popped

    async def scan_keys(self, pattern: str, count: int = 100) -> AsyncIterator[str]:
        async with self._lock:
            keys = [key for key in self._sets if fnmatchcase(key, pattern)]
        for key in keys:
            yield key

    async def size(self, key: str) -> int:
        async with self._lock:
            return len(self._sets.get(key, {}))

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        async with self._lock:
            self._sets.clear()
