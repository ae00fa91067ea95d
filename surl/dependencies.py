"""
FastAPI dependencies for dependency injection.

The MappingService is built once per application in the lifespan handler
(main.create_app) and read from app.state here, so tests can hand
create_app() any store they like.
"""

from functools import lru_cache

from fastapi import Request

from surl.config import settings
from surl.services.mapping_service import MappingService
from surl.storage.factory import StoreBackend, StoreFactory
from surl.storage.strategies import KVStoreStrategy


@lru_cache()
def get_store() -> KVStoreStrategy:
    """
    Get store instance (singleton).

    Factory gets config from settings internally.
    @lru_cache ensures this is called only once.
    """
    backend = StoreBackend(settings.store_backend)
    return StoreFactory.create(backend)


def get_mapping_service(request: Request) -> MappingService:
    """Get the MappingService recovered at startup"""
    return request.app.state.mapping_service
