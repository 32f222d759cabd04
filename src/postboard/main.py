# src/postboard/main.py
"""Main entry point for the Postboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from postboard.api.v1 import (
    auth_router,
    feed_router,
    posts_router,
    search_router,
    system_router,
    users_router,
)
from postboard.clients.store import StoreClient, load_store_config
from postboard.core.errors import ErrorKind, PostboardError, user_message
from postboard.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.API: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Social posting API backed by a remote REST object store",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(feed_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(search_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.exception_handler(PostboardError)
async def handle_postboard_error(request: Request, exc: PostboardError) -> JSONResponse:
    """Translate domain errors that escaped a service into HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    detail = user_message(exc, "Internal server error")
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.on_event("startup")
async def on_startup() -> None:
    app.state.store = StoreClient(load_store_config(settings))
    logger.info("Using store at %s", app.state.store.config.base_url)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    store: StoreClient | None = getattr(app.state, "store", None)
    if store:
        await store.close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Social posting API backed by a remote REST object store",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("postboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
