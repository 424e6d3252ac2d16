"""Redis ordered store.

Uses redis.asyncio sorted sets (ZADD, ZRANK, ZPOPMIN, SCAN) so that ordering
and pop atomicity are provided by Redis' own command execution.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from waitroom.core.config import StoreConfig
from waitroom.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(operation: str, key: str) -> Iterator[None]:
    """Re-raise transport failures as StoreUnavailableError."""
    try:
        yield
    except (RedisError, OSError) as e:
        logger.warning(f"Redis {operation} failed for {key}: {e}")
        raise StoreUnavailableError(f"Redis {operation} failed: {e}") from e


class RedisOrderedStore:
    """Redis implementation of OrderedStore.

    The client is created lazily on first use unless one is injected.
    """

    def __init__(self, config: StoreConfig | None = None, client: Any | None = None):
        """Initialize Redis store.

        Args:
            config: Store configuration with the Redis connection URL.
            client: Pre-built redis.asyncio client (skips lazy creation).
        """
        self._config = config or StoreConfig()
        self._client = client
        self._init_lock = asyncio.Lock()

    async def _get_client(self) -> Any:
        if self._client is not None:
            return self._client

        async with self._init_lock:
            if self._client is None:
                self._client = redis.from_url(
                    self._config.url,
                    max_connections=self._config.max_connections,
                    socket_timeout=self._config.socket_timeout,
                    socket_connect_timeout=self._config.socket_timeout,
                    decode_responses=True,
                )
                logger.info(f"Redis client created for {self._config.url}")
            return self._client

    async def insert_if_absent(self, key: str, member: str, score: float) -> bool:
        client = await self._get_client()
        with _translate_errors("ZADD", key):
            added = await client.zadd(key, {member: score}, nx=True)
        return bool(added)

    async def upsert(self, key: str, scores: Mapping[str, float]) -> int:
        if not scores:
            return 0
        client = await self._get_client()
        with _translate_errors("ZADD", key):
            return int(await client.zadd(key, dict(scores)))

    async def rank_of(self, key: str, member: str) -> int | None:
        client = await self._get_client()
        with _translate_errors("ZRANK", key):
            rank = await client.zrank(key, member)
        return None if rank is None else int(rank)

    async def pop_lowest(self, key: str, count: int) -> list[str]:
        if count <= 0:
            return []
        client = await self._get_client()
        with _translate_errors("ZPOPMIN", key):
            popped = await client.zpopmin(key, count)
        return [member for member, _score in popped]

    async def scan_keys(self, pattern: str, count: int = 100) -> AsyncIterator[str]:
        client = await self._get_client()
        with _translate_errors("SCAN", pattern):
            async for key in client.scan_iter(match=pattern, count=count):
                yield key

    async def size(self, key: str) -> int:
        client = await self._get_client()
        with _translate_errors("ZCARD", key):
            return int(await client.zcard(key))

    async def ping(self) -> bool:
        client = await self._get_client()
        with _translate_errors("PING", "-"):
            return bool(await client.ping())

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
