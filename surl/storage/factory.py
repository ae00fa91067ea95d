"""
Factory for creating key-value store instances.
Simple, clean factory with singleton caching.
"""

import logging
from enum import Enum

from .strategies import KVStoreStrategy, SQLiteKVStore, RedisKVStore, InMemoryKVStore
from surl.config import settings

logger = logging.getLogger(__name__)


class StoreBackend(Enum):
    """Available store backends"""
    SQLITE = "sqlite"
    REDIS = "redis"
    MEMORY = "memory"


class StoreFactory:
    """
    Simple factory for creating store instances.

    Gets configuration from settings (not passed as parameters).
    """

    _instance: KVStoreStrategy = None  # Single cached instance

    @classmethod
    def create(cls, backend: StoreBackend) -> KVStoreStrategy:
        """
        Create or return cached store instance.

        Args:
            backend: Type of store backend (from enum)

        Returns:
            Singleton store instance
        """
        # Return cached instance if exists
        if cls._instance is not None:
            return cls._instance

        if backend == StoreBackend.SQLITE:
            cls._instance = SQLiteKVStore(
                store_path=settings.store_path,
                journal_mode=settings.sqlite_journal_mode,
                synchronous=settings.sqlite_synchronous
            )
            logger.info("SQLite store opened at %s", settings.store_path)

        elif backend == StoreBackend.REDIS:
            import redis

            redis_client = redis.from_url(settings.redis_url, decode_responses=False)
            # Fail at startup rather than on the first request
            redis_client.ping()
            cls._instance = RedisKVStore(redis_client)
            logger.info("Redis store connected at %s", settings.redis_url)

        elif backend == StoreBackend.MEMORY:
            cls._instance = InMemoryKVStore()
            logger.warning("In-memory store selected: mappings are lost on restart")

        else:
            raise ValueError(f"Unknown store backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
