"""
Key-value store strategies using Strategy Pattern.

Allows switching between different persistence backends:
- SQLite (via SQLAlchemy): durable, embedded, default
- Redis: shared across processes, durability per server config
- In-memory: tests and throwaway runs
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from surl.database.connection import Base, create_sqlite_engine
from surl.exceptions import StoreError
from surl.models.record import KVRecord

logger = logging.getLogger(__name__)


class KVStoreStrategy(ABC):
    """
    Abstract base class for key-value store strategies.

    The store holds two kinds of records: identifier -> URL bytes, and one
    reserved metadata key holding the allocation counter. It only needs
    exact-key get and put. It provides no isolation of its own: the
    Allocator's lock serializes every write.

    All methods are async for interface consistency; backends may block
    on disk or network I/O.
    """

    @abstractmethod
    async def get(self, key: bytes) -> Optional[bytes]:
        """
        Get the value stored under key.

        Args:
            key: Record key

        Returns:
            Stored bytes (possibly empty), or None if the key is absent

        Raises:
            StoreError: If the backend fails
        """
        pass

    @abstractmethod
    async def put(self, key: bytes, value: bytes) -> None:
        """
        Store value under key, replacing any previous value.

        Once this returns, the write survives a process crash (for durable
        backends).

        Raises:
            StoreError: If the backend fails
        """
        pass

    async def close(self) -> None:
        """Release backend resources"""
        pass


class SQLiteKVStore(KVStoreStrategy):
    """
    SQLite implementation using SQLAlchemy.

    Every put() is its own committed transaction. Reads take a pooled
    connection and never contend with the allocation lock.

    Calls are synchronous and run on the event loop (fsync included with
    synchronous=FULL), so a resolve() never actually overlaps a create()
    within one process; it only avoids queueing behind the lock.
    """

    def __init__(
        self,
        store_path: str = "surl_db",
        journal_mode: str = "WAL",
        synchronous: str = "FULL"
    ):
        """
        Initialize SQLite store.

        Args:
            store_path: Directory holding the database file
            journal_mode: SQLite journal mode pragma
            synchronous: SQLite synchronous pragma
        """
        self.store_path = store_path
        self.engine = create_sqlite_engine(store_path, journal_mode, synchronous)
        Base.metadata.create_all(bind=self.engine)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False)

    async def get(self, key: bytes) -> Optional[bytes]:
        try:
            with self.session_factory() as session:
                record = session.get(KVRecord, key)
                return record.value if record is not None else None
        except SQLAlchemyError as e:
            logger.error("SQLite get failed for %r: %s", key, e)
            raise StoreError(f"Failed to read key {key!r}") from e

    async def put(self, key: bytes, value: bytes) -> None:
        try:
            with self.session_factory() as session:
                session.merge(KVRecord(key=key, value=value))
                session.commit()
        except SQLAlchemyError as e:
            logger.error("SQLite put failed for %r: %s", key, e)
            raise StoreError(f"Failed to write key {key!r}") from e

    async def close(self) -> None:
        self.engine.dispose()


class RedisKVStore(KVStoreStrategy):
    """
    Redis implementation.

    Durability follows the server's persistence settings: run Redis with
    appendonly yes and appendfsync always for crash-safe counters.
    """

    def __init__(self, redis_client):
        """
        Initialize Redis store.

        Args:
            redis_client: Redis client instance (redis.Redis, decode_responses=False)
        """
        self.redis = redis_client

    async def get(self, key: bytes) -> Optional[bytes]:
        try:
            return self.redis.get(key)
        except RedisError as e:
            logger.error("Redis get failed for %r: %s", key, e)
            raise StoreError(f"Failed to read key {key!r}") from e

    async def put(self, key: bytes, value: bytes) -> None:
        try:
            self.redis.set(key, value)
        except RedisError as e:
            logger.error("Redis put failed for %r: %s", key, e)
            raise StoreError(f"Failed to write key {key!r}") from e

    async def close(self) -> None:
        self.redis.close()


class InMemoryKVStore(KVStoreStrategy):
    """
    In-memory store using a Python dict.

    Lost on restart. Used for tests and local experiments.
    """

    def __init__(self):
        self._data: Dict[bytes, bytes] = {}

    async def get(self, key: bytes) -> Optional[bytes]:
        return self._data.get(key)

    async def put(self, key: bytes, value: bytes) -> None:
        self._data[key] = value
