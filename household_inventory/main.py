"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from household_inventory.api.errors import register_exception_handlers
from household_inventory.api.responses import Tags
from household_inventory.api.routes.v1.auth import router as auth_router
from household_inventory.api.routes.v1.categories import router as categories_router
from household_inventory.api.routes.v1.endpoints.health import router as health_router
from household_inventory.api.routes.v1.items import router as items_router
from household_inventory.api.routes.v1.notifications import router as notifications_router
from household_inventory.core.config import settings
from household_inventory.core.events import shutdown_event_handlers, startup_event_handlers
from household_inventory.core.logging import configure_logging
from household_inventory.core.metrics import setup_metrics
from household_inventory.core.tracing import setup_tracing
from household_inventory.web.routes import LoginRequired, redirect_to_login
from household_inventory.web.routes import router as web_router

STATIC_DIR = Path(__file__).parent / "web" / "static"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan event handler for startup and shutdown events.
    """
    if settings.SENTRY_DSN:
        sentry_logging = LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[
                FastApiIntegration(),
                sentry_logging,
            ],
            environment=settings.ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            release=f"{settings.PROJECT_NAME}@{settings.VERSION}",
        )
        logger.info("Sentry initialized")

    for startup_handler in startup_event_handlers:
        await startup_handler()

    yield

    for shutdown_handler in shutdown_event_handlers:
        await shutdown_handler()


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    configure_logging()

    application = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        docs_url="/api/docs" if not settings.ENVIRONMENT == "production" else None,
        redoc_url="/api/redoc" if not settings.ENVIRONMENT == "production" else None,
        openapi_url="/api/openapi.json" if not settings.ENVIRONMENT == "production" else None,
        lifespan=lifespan,
        openapi_tags=[
            {"name": Tags.HEALTH, "description": "Health check and readiness endpoints"},
            {"name": Tags.AUTH, "description": "Signup and session endpoints"},
            {"name": Tags.ITEMS, "description": "Item management, use and purchase endpoints"},
            {"name": Tags.CATEGORIES, "description": "Category management endpoints"},
            {"name": Tags.NOTIFICATIONS, "description": "Restock notifications"},
            {"name": Tags.WEB, "description": "Server-rendered pages"},
        ],
    )

    register_exception_handlers(application)

    @application.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired) -> RedirectResponse:
        return redirect_to_login()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.CORS_ORIGINS_STR == "*" else settings.CORS_ORIGINS_STR.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.ENABLE_METRICS:
        setup_metrics(application)
        logger.info("Prometheus metrics enabled")

    if settings.ENABLE_TRACING:
        setup_tracing(application)
        logger.info("OpenTelemetry tracing enabled")

    application.include_router(health_router, prefix="/api/health", tags=[Tags.HEALTH])
    application.include_router(auth_router, prefix=f"{settings.API_V1_STR}/auth", tags=[Tags.AUTH])
    application.include_router(items_router, prefix=f"{settings.API_V1_STR}/items", tags=[Tags.ITEMS])
    application.include_router(categories_router, prefix=f"{settings.API_V1_STR}/categories", tags=[Tags.CATEGORIES])
    application.include_router(
        notifications_router, prefix=f"{settings.API_V1_STR}/notifications", tags=[Tags.NOTIFICATIONS]
    )
    application.include_router(web_router, tags=[Tags.WEB])
    application.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return application


app = create_application()
