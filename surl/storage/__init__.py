"""
Persistent key-value store module.

This module implements the Strategy Pattern for pluggable persistence.
The core only needs exact-key get/put over raw bytes.
"""

from .strategies import KVStoreStrategy, SQLiteKVStore, RedisKVStore, InMemoryKVStore
from .factory import StoreFactory, StoreBackend

__all__ = [
    "KVStoreStrategy",
    "SQLiteKVStore",
    "RedisKVStore",
    "InMemoryKVStore",
    "StoreFactory",
    "StoreBackend",
]
