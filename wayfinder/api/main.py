"""FastAPI application entrypoint for Wayfinder."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from wayfinder.api.dependencies import ProfileServices, build_services
from wayfinder.api.middleware.logging import LoggingMiddleware
from wayfinder.api.routes import admin, people, pods, proxy
from wayfinder.core.config import settings
from wayfinder.core.exceptions import ApplicationError
from wayfinder.core.observability import setup_tracing


def create_app(services: Optional[ProfileServices] = None) -> FastAPI:
    if services is None:
        services = build_services()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        """Release the shared HTTP client on shutdown."""

        try:
            yield
        finally:
            await services.aclose()

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.services = services

    setup_tracing(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # Routers
    app.include_router(people.router, prefix="/api")
    app.include_router(pods.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")
    app.include_router(proxy.router)
    app.mount("/metrics", make_asgi_app())

    @app.exception_handler(ApplicationError)
    async def handle_application_error(_: Request, exc: ApplicationError):
        """Return standardized responses for application layer exceptions."""

        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})

    return app


app = create_app()
