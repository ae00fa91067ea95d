import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from surl.api.v1 import redirect, urls
from surl.config import settings
from surl.dependencies import get_store
from surl.exceptions import StoreError, ValidationError
from surl.logging_config import setup_logging
from surl.middleware import LoggingMiddleware
from surl.schemas.url import ServiceInfo
from surl.services.mapping_service import MappingService
from surl.storage.strategies import KVStoreStrategy

logger = logging.getLogger("surl.main")


def create_app(
    store: Optional[KVStoreStrategy] = None,
    website: Optional[str] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        store: Store to serve from. Defaults to the backend named in settings.
        website: Public base URL prepended to identifiers. Defaults to settings.website.
    """
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # Startup: recover the counter before serving any request
        app.state.mapping_service = await MappingService.open(store or get_store())
        logger.info("SURL ready (counter=%d)", app.state.mapping_service.allocator.counter)
        yield
        # Shutdown
        await app.state.mapping_service.close()
        logger.info("SURL stopped")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A counter-based URL shortener",
        debug=settings.debug,
        lifespan=lifespan,
        # Every path is a potential identifier
        docs_url=None,
        redoc_url=None,
        openapi_url=None
    )
    app.state.website = settings.website if website is None else website

    app.add_middleware(LoggingMiddleware)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return PlainTextResponse(str(exc), status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "storage error"}
        )

    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
        # Unsupported verbs on any path are a plain empty 404
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return await http_exception_handler(request, exc)

    @app.get("/", response_model=ServiceInfo)
    def read_root():
        """Root endpoint with service information"""
        return ServiceInfo(name=settings.app_name, version=settings.app_version)

    ######## Include routers
    app.include_router(urls.router)
    app.include_router(redirect.router)

    return app


app = create_app()


if __name__ == "__main__":
    # uvicorn handles Ctrl-C / SIGTERM and runs the lifespan shutdown
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
