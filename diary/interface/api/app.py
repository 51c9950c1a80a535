"""FastAPI application."""

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from diary.config import Settings
from diary.interface.api.errors import setup_exception_handlers
from diary.interface.api.routes import (
    auth,
    entries,
    health,
    journals,
    oauth,
    purchase,
    support,
)
from diary.util.di.container import create_container
from diary.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py does.

    Args:
        container: DI container to use (defaults to the production container)
    """
    settings = Settings()

    # Logfire must be configured before instrumentation
    instrument_httpx()

    app_instance = FastAPI(
        title="DiaryFi API",
        description="Backend API for DiaryFi - a private diary with journals, media and multi-provider sign-in",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.client_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_dishka(container or create_container(settings), app_instance)
    setup_exception_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(oauth.router)
    app_instance.include_router(journals.router)
    app_instance.include_router(entries.router)
    app_instance.include_router(purchase.router)
    app_instance.include_router(support.router)

    # Uploaded media written by the local storage adapter
    app_instance.mount(
        "/media",
        StaticFiles(directory=settings.storage.media_root, check_dir=False),
        name="media",
    )

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
