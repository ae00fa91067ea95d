"""
Identifier allocation.

The Allocator owns the process-wide counter and is the only writer to the
store. Each issuance runs entirely under one asyncio.Lock:

    1. n = counter, id = encode(n)
    2. put(id -> url)                 fails: counter untouched, nothing issued
    3. counter = n + 1
    4. put(COUNTER_KEY -> n + 1)      fails: counter stays advanced, nothing issued
    5. return id

The lock's critical section covers both writes and stands in for a
multi-key transaction. Lookups never take it.

If step 4 fails the mapping for id is on disk but the persisted counter
still says n. The caller gets a StoreError instead of id, so id never
escapes; after a restart it is issued again and its orphaned mapping is
overwritten. Identifiers that were returned to a caller are never reissued.
"""

import asyncio
import logging
from typing import Optional

from surl.exceptions import StoreError
from surl.services.encoder import MAX_COUNTER, encode, is_identifier
from surl.storage.strategies import KVStoreStrategy

logger = logging.getLogger(__name__)

# Reserved metadata key. "_" is outside the identifier alphabet and the key
# lacks the identifier prefix, so no generated id can equal it.
COUNTER_KEY = b"__count__"
COUNTER_WIDTH = 8


def pack_counter(value: int) -> bytes:
    return value.to_bytes(COUNTER_WIDTH, "little")


def unpack_counter(raw: Optional[bytes]) -> int:
    """Decode a persisted counter; anything but exactly 8 bytes reads as 0"""
    if raw is None or len(raw) != COUNTER_WIDTH:
        return 0
    return int.from_bytes(raw, "little")


class Allocator:
    """
    Issues identifiers and persists their mappings.

    Inject the store; use Allocator.recover() to resume from persisted state.
    """

    def __init__(
        self,
        store: KVStoreStrategy,
        counter: int = 0,
        counter_key: bytes = COUNTER_KEY
    ):
        """
        Args:
            store: Persistent store; this Allocator must be its only writer
            counter: Value the next issuance will encode
            counter_key: Metadata key for the persisted counter

        Raises:
            ValueError: If counter_key could collide with a generated identifier
        """
        if is_identifier(counter_key.decode("utf-8", errors="replace")):
            raise ValueError(f"Counter key {counter_key!r} collides with the identifier format")
        if counter < 0 or counter > MAX_COUNTER:
            raise ValueError(f"Counter {counter} is outside the unsigned 64-bit range")

        self.store = store
        self.counter_key = counter_key
        self._counter = counter
        self._lock = asyncio.Lock()

    @classmethod
    async def recover(cls, store: KVStoreStrategy, counter_key: bytes = COUNTER_KEY) -> "Allocator":
        """
        Build an Allocator resuming from the persisted counter.

        The metadata record is the only source of truth: mapping records
        are not scanned.
        """
        raw = await store.get(counter_key)
        counter = unpack_counter(raw)

        if raw is not None and len(raw) != COUNTER_WIDTH:
            logger.warning(
                "Ignoring malformed counter record (%d bytes), starting from 0", len(raw)
            )
        logger.info("Recovered allocation counter: %d", counter)

        return cls(store, counter=counter, counter_key=counter_key)

    @property
    def counter(self) -> int:
        """Number of identifiers issued so far (the next value to encode)"""
        return self._counter

    async def allocate_and_store(self, url: bytes) -> str:
        """
        Issue the next identifier and persist id -> url.

        Args:
            url: Raw URL bytes, stored as-is

        Returns:
            The issued identifier

        Raises:
            StoreError: If either store write fails (the identifier is not issued)
            OverflowError: If the 64-bit counter space is exhausted
        """
        async with self._lock:
            n = self._counter
            # n + 1 must still fit the 8-byte counter record
            if n >= MAX_COUNTER:
                raise OverflowError("Identifier space exhausted")

            identifier = encode(n)

            await self.store.put(identifier.encode("utf-8"), url)

            # Point of no return: the mapping is durable, so n is never reused
            # by this process even if the counter write below fails.
            self._counter = n + 1

            try:
                await self.store.put(self.counter_key, pack_counter(n + 1))
            except StoreError:
                logger.error(
                    "Counter write failed after storing %s; "
                    "persisted counter lags the in-memory value %d",
                    identifier, n + 1
                )
                raise

        logger.debug("Issued %s (counter=%d)", identifier, n + 1)
        return identifier
