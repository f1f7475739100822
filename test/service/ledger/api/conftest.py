"""
API test app: the real routers, every use case bound to the in-memory Unit of Work.
"""

from collections.abc import AsyncIterator, Generator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.app_factory import create_app
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.ledger.app.command.delete_booking_use_case import DeleteBookingUseCase
from src.service.ledger.app.command.patch_ticket_use_case import PatchTicketUseCase
from src.service.ledger.app.command.record_payment_adjustment_use_case import (
    RecordPaymentAdjustmentUseCase,
)
from src.service.ledger.app.command.register_trip_use_case import RegisterTripUseCase
from src.service.ledger.app.command.rename_seat_use_case import RenameSeatUseCase
from src.service.ledger.app.command.run_payment_cleanup_use_case import RunPaymentCleanupUseCase
from src.service.ledger.app.command.run_seat_reconciliation_use_case import (
    RunSeatReconciliationUseCase,
)
from src.service.ledger.app.command.swap_seats_use_case import SwapSeatsUseCase
from src.service.ledger.app.command.transfer_seats_use_case import TransferSeatsUseCase
from src.service.ledger.app.command.update_booking_use_case import UpdateBookingUseCase
from src.service.ledger.app.query.get_booking_history_use_case import GetBookingHistoryUseCase
from src.service.ledger.app.query.get_booking_use_case import GetBookingUseCase
from src.service.ledger.app.query.get_trip_use_case import GetTripUseCase
from src.service.ledger.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.ledger.app.query.list_payments_use_case import ListPaymentsUseCase
from test.service.ledger.fake_unit_of_work import FakeUnitOfWork


USE_CASES = [
    CreateBookingUseCase,
    DeleteBookingUseCase,
    GetBookingHistoryUseCase,
    GetBookingUseCase,
    GetTripUseCase,
    ListBookingsUseCase,
    ListPaymentsUseCase,
    PatchTicketUseCase,
    RecordPaymentAdjustmentUseCase,
    RegisterTripUseCase,
    RenameSeatUseCase,
    RunPaymentCleanupUseCase,
    RunSeatReconciliationUseCase,
    SwapSeatsUseCase,
    TransferSeatsUseCase,
    UpdateBookingUseCase,
]


@asynccontextmanager
async def lifespan_for_tests(app: FastAPI) -> AsyncIterator[None]:
    """No database, no tracing exporter: the routers talk to the in-memory ledger."""
    Logger.base.info('🧪 [Test App] Starting up...')
    yield
    Logger.base.info('🧪 [Test App] Shut down')


def _bind(use_case_cls: type, uow: FakeUnitOfWork):
    # Parameterless, FastAPI reads override parameters as query params
    def _use_case():
        return use_case_cls(uow=uow)

    return _use_case


@pytest.fixture
def client(uow: FakeUnitOfWork) -> Generator[TestClient, None, None]:
    app = create_app(lifespan=lifespan_for_tests, title_suffix=' (Test)')
    for use_case_cls in USE_CASES:
        app.dependency_overrides[use_case_cls.depends] = _bind(use_case_cls, uow)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()
