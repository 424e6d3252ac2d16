"""Ordered store backends.

    - redis (default): shared by every worker process, uses redis.asyncio
    - memory: single process, testing and development only
"""

from waitroom.core.config import StoreConfig
from waitroom.stores.base import OrderedStore
from waitroom.stores.memory import MemoryOrderedStore
from waitroom.stores.redis_store import RedisOrderedStore

__all__ = [
    "MemoryOrderedStore",
    "OrderedStore",
    "RedisOrderedStore",
    "create_store",
]


def create_store(config: StoreConfig | None = None) -> OrderedStore:
    """Create an ordered store based on configuration.

    Args:
        config: Store configuration. Defaults to Redis on localhost.

    Returns:
        OrderedStore implementation.

    Raises:
        ValueError: Unknown backend type.
    """
    config = config or StoreConfig()
    if config.backend == "redis":
        return RedisOrderedStore(config)
    if config.backend == "memory":
        return MemoryOrderedStore()
    raise ValueError(f"Unknown store backend: {config.backend}")
