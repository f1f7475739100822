from fastapi import APIRouter, Depends
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.run_payment_cleanup_use_case import RunPaymentCleanupUseCase
from src.service.ledger.app.command.run_seat_reconciliation_use_case import (
    RunSeatReconciliationUseCase,
)
from src.service.ledger.driving_adapter.http_controller.schema.maintenance_schema import (
    PaymentCleanupResponse,
    SeatReconciliationResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/seat-reconciliation')
@Logger.io
async def run_seat_reconciliation(
    use_case: RunSeatReconciliationUseCase = Depends(RunSeatReconciliationUseCase.depends),
) -> SeatReconciliationResponse:
    with tracer.start_as_current_span('controller.run_seat_reconciliation') as span:
        report = await use_case.execute()
        span.set_attribute('conflict_count', report.conflict_count)
        return SeatReconciliationResponse.from_report(report)


@router.post('/payment-cleanup')
@Logger.io
async def run_payment_cleanup(
    use_case: RunPaymentCleanupUseCase = Depends(RunPaymentCleanupUseCase.depends),
) -> PaymentCleanupResponse:
    with tracer.start_as_current_span('controller.run_payment_cleanup') as span:
        report = await use_case.execute()
        span.set_attribute('mismatch_count', report.mismatch_count)
        return PaymentCleanupResponse.from_report(report)
