"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quill.config import Settings
from quill.interface.api.routes import admin, comments, health, stats
from quill.util.di.container import create_container, setup_di
from quill.util.observability import instrument_fastapi


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Quill Comments API",
        description="Threaded comments for blog posts, stored in Elasticsearch",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Accept", "Origin", "User-Agent"],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,
    )

    container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(stats.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(admin.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
