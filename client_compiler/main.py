"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from client_compiler.config import Settings, get_settings
from client_compiler.infrastructure.dependencies import init_app_state
from client_compiler.infrastructure.logging.log_config import setup_logging
from client_compiler.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging and prepare working directories."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    Path(settings.templates_dir).mkdir(parents=True, exist_ok=True)
    logger.info(
        "%s %s started (env=%s, upload_dir=%s)",
        settings.app_title,
        settings.app_version,
        settings.app_env,
        settings.upload_dir,
    )

    yield

    logger.info("Shutting down with %d clients in memory", app.state.client_repository.count())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    init_app_state(app.state, settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "client_compiler.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
