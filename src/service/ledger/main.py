"""
Seat Ledger Service - Main Application
Trips and seat maps, bookings and their tickets, the payment ledger and the
reconciliation jobs.

Run with: granian --interface asgi src.service.ledger.main:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, engine_manager
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Seat Ledger] Starting up...')

    tracing = TracingConfig(service_name=settings.SERVICE_NAME)
    tracing.setup()
    tracing.instrument_sqlalchemy(engine=engine_manager.get_engine())

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Seat Ledger] Dependency injection wired')

    await create_db_and_tables()

    yield

    Logger.base.info('🛑 [Seat Ledger] Shutting down...')
    await container.database().dispose()
    container.unwire()
    cleanup()
    tracing.shutdown()
    Logger.base.info('👋 [Seat Ledger] Shutdown complete')


app = create_app(lifespan=lifespan)
