"""
Shared FastAPI App Factory

Common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.ledger.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.ledger.driving_adapter.http_controller.maintenance_controller import (
    router as maintenance_router,
)
from src.service.ledger.driving_adapter.http_controller.payment_controller import (
    router as payment_router,
)
from src.service.ledger.driving_adapter.http_controller.trip_controller import (
    router as trip_router,
)


API_PREFIX = '/api/ledger'


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Bus seat, ticket and payment ledger',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Before the routers are mounted
    TracingConfig.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.include_router(booking_router, prefix=f'{API_PREFIX}/bookings', tags=['booking'])
    app.include_router(payment_router, prefix=f'{API_PREFIX}/bookings', tags=['payment'])
    app.include_router(trip_router, prefix=f'{API_PREFIX}/trips', tags=['trip'])
    app.include_router(
        maintenance_router, prefix=f'{API_PREFIX}/maintenance', tags=['maintenance']
    )

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    @app.get('/health')
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}
