"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from stayvista.api.routes.router import api_router
from stayvista.config import Settings, get_settings
from stayvista.core.access import AccessControlGate
from stayvista.core.exceptions import AppException
from stayvista.core.middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from stayvista.core.security import TokenService
from stayvista.database import Database
from stayvista.gateways import PaymentGateway, build_gateway
from stayvista.services.booking_service import BookingOrchestrator
from stayvista.services.notification_service import NotificationService
from stayvista.services.payment_service import PaymentIntentIssuer
from stayvista.services.stats_service import StatisticsAggregator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    settings: Settings = app.state.settings

    # Startup
    if settings.create_tables_on_startup:
        await app.state.database.create_all()
    logger.info(f"{settings.app_name} {settings.app_version} started ({settings.environment})")

    yield

    # Shutdown
    await app.state.notifications.close()
    await app.state.payment_issuer.gateway.close()
    await app.state.database.close()


def create_application(
    settings: Settings | None = None,
    gateway: PaymentGateway | None = None,
    notifications: NotificationService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Collaborators are built here once and kept on ``app.state``; pass
    ``gateway`` or ``notifications`` to replace the configured ones.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="StayVista - Room Rental Marketplace API",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    notifications = notifications or NotificationService(settings)
    app.state.settings = settings
    app.state.database = Database.from_settings(settings)
    app.state.access_gate = AccessControlGate(TokenService.from_settings(settings))
    app.state.payment_issuer = PaymentIntentIssuer(
        gateway or build_gateway(settings),
        default_currency=settings.payment_currency,
    )
    app.state.notifications = notifications
    app.state.bookings = BookingOrchestrator(
        post_commit_hooks=[notifications.notify_booking_created]
    )
    app.state.statistics = StatisticsAggregator()

    # Exception handlers
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=exc.headers,
        )

    # Middleware (order matters - first added = last executed)
    # 1. Security headers (outermost)
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)

    # 2. Rate limiting (outside development)
    if settings.rate_limiting_active:
        app.add_middleware(
            RateLimitMiddleware,
            redis_url=settings.redis_url,
            requests_per_minute=settings.rate_limit_per_minute,
            trusted_proxies=settings.trusted_proxies,
        )

    # 3. Request logging
    app.add_middleware(RequestLoggingMiddleware)

    # 4. CORS (credentials on, the session travels in a cookie)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 5. Gzip compression (innermost)
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Include API routes
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @app.get("/")
    async def root() -> dict:
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "message": "StayVista server is running",
        }

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "stayvista.main:create_application",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
    )
