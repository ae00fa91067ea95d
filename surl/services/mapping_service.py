import logging
from typing import Optional

from surl.exceptions import ValidationError
from surl.services.allocator import Allocator
from surl.services.encoder import is_identifier
from surl.storage.strategies import KVStoreStrategy

logger = logging.getLogger(__name__)


class MappingService:
    """
    Façade used by the HTTP layer: create a mapping, resolve an identifier.

    create() goes through the Allocator (serialized); resolve() reads the
    store directly and never waits on allocation.
    """

    def __init__(self, allocator: Allocator, store: KVStoreStrategy):
        """
        Args:
            allocator: Allocator writing to store
            store: Persistent store used for lookups
        """
        self.allocator = allocator
        self.store = store

    @classmethod
    async def open(cls, store: KVStoreStrategy) -> "MappingService":
        """Recover the counter from store and build the service"""
        allocator = await Allocator.recover(store)
        return cls(allocator=allocator, store=store)

    async def create(self, url: Optional[str]) -> str:
        """
        Create a mapping for url and return its identifier.

        The URL is stored exactly as submitted. Submitting the same URL
        twice yields two identifiers.

        Raises:
            ValidationError: If url is missing or empty (nothing is written)
            StoreError: If the store fails (nothing is issued)
        """
        if not url:
            raise ValidationError("url is required")

        identifier = await self.allocator.allocate_and_store(url.encode("utf-8"))
        logger.info("Created %s -> %s", identifier, url)
        return identifier

    async def resolve(self, identifier: str) -> Optional[str]:
        """
        Look up the URL for identifier.

        Returns:
            The stored URL, or None if identifier was never issued
            (or does not have the identifier shape)

        Raises:
            StoreError: If the store fails
        """
        # Keeps the counter record out of reach of lookups
        if not is_identifier(identifier):
            return None

        value = await self.store.get(identifier.encode("utf-8"))
        if value is None:
            return None
        return value.decode("utf-8")

    async def close(self) -> None:
        await self.store.close()
