"""Entry point for the to-do API."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import api_router, health_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.middleware import RequestContextMiddleware
from .db import DocumentStore
from .errors import register_exception_handlers


def _normalise_prefix(raw_prefix: str) -> str:
    router_prefix = raw_prefix.strip()
    if router_prefix and not router_prefix.startswith("/"):
        router_prefix = f"/{router_prefix}"
    router_prefix = router_prefix.rstrip("/")
    if router_prefix == "/":
        router_prefix = ""
    return router_prefix


def create_app(
    settings: Settings | None = None,
    *,
    store: DocumentStore | None = None,
) -> FastAPI:
    """Instantiate and configure the FastAPI application.

    ``settings`` is resolved once here and shared with every request through
    ``app.state``; the document store is connected during startup, which
    fails when ``MONGO_URI`` is not configured.
    """

    settings = settings or get_settings()
    configure_logging(settings)
    document_store = store or DocumentStore(settings)

    @asynccontextmanager
    async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
        await document_store.connect()
        try:
            yield
        finally:
            await document_store.close()

    router_prefix = _normalise_prefix(settings.api_prefix)
    openapi_url = "/openapi.json" if not router_prefix else f"{router_prefix}/openapi.json"

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Multi-user to-do list API.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url=openapi_url,
        lifespan=_lifespan,
    )

    application.state.settings = settings
    application.state.store = document_store

    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    if router_prefix:
        application.include_router(api_router, prefix=router_prefix)
    else:
        application.include_router(api_router)

    application.include_router(health_router)

    register_exception_handlers(application)

    return application


app = create_app()


def run() -> None:
    """Console entry point for ``todo-app``."""

    settings: Settings = get_settings()
    uvicorn.run(
        "todo_app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )
