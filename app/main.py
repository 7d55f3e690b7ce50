"""FastAPI application factory and configuration."""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.menus import router as menus_router
from app.api.scrape import router as scrape_router
from app.config import settings
from app.services.cooldown import CooldownGate

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Handles startup and shutdown events.
    """
    logger.info("Starting application (menus in %s)...", settings.data_dir)
    yield
    logger.info("Shutting down application...")


def create_app() -> FastAPI:
    """Build the app with its own cooldown gate."""
    application = FastAPI(
        title="Prague Lunch Menus",
        description="Daily lunch menus scraped from Prague restaurant websites",
        version="1.0.0",
        lifespan=lifespan,
    )
    application.state.cooldown_gate = CooldownGate(
        cooldown=timedelta(minutes=settings.scrape_cooldown_minutes)
    )

    # Configure CORS
    if settings.cors_origins:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Include routers
    application.include_router(menus_router)
    application.include_router(scrape_router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        """
        Health check endpoint.

        Returns:
            Status information
        """
        return {"status": "healthy", "environment": settings.app_env}

    return application


app = create_app()
