"""
Test configuration and fixtures for the SURL service.
This centralizes all test setup, making individual tests clean.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from main import create_app
from surl.exceptions import StoreError
from surl.storage.strategies import InMemoryKVStore, SQLiteKVStore

WEBSITE = "https://s.example"


class FlakyStore(InMemoryKVStore):
    """
    In-memory store that records writes and fails on demand.

    fail_reads: every get() raises StoreError
    fail_keys: put() raises StoreError for these keys
    fail_writes: every put() raises StoreError
    """

    def __init__(self):
        super().__init__()
        self.fail_reads = False
        self.fail_writes = False
        self.fail_keys = set()
        self.writes = []

    async def get(self, key):
        if self.fail_reads:
            raise StoreError("simulated read failure")
        return await super().get(key)

    async def put(self, key, value):
        if self.fail_writes or key in self.fail_keys:
            raise StoreError("simulated write failure")
        self.writes.append(key)
        await super().put(key, value)


@pytest.fixture
def memory_store():
    return InMemoryKVStore()


@pytest.fixture
def flaky_store():
    return FlakyStore()


@pytest.fixture
def sqlite_path(tmp_path):
    """Store directory inside pytest's tmp dir"""
    return str(tmp_path / "surl_db")


@pytest.fixture
def sqlite_store(sqlite_path):
    store = SQLiteKVStore(store_path=sqlite_path)
    try:
        yield store
    finally:
        asyncio.run(store.close())


@pytest.fixture
def client(memory_store):
    """
    Test client serving from an in-memory store.
    The context manager runs startup (counter recovery) and shutdown.
    """
    app = create_app(store=memory_store, website=WEBSITE)
    with TestClient(app) as test_client:
        yield test_client
