from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.ledger.app.command.record_payment_adjustment_use_case import (
    RecordPaymentAdjustmentUseCase,
)
from src.service.ledger.app.query.list_payments_use_case import ListPaymentsUseCase
from src.service.ledger.driving_adapter.http_controller.schema.payment_schema import (
    PaymentAdjustmentRequest,
    PaymentResponse,
)


router = APIRouter()


@router.get('/{booking_id}/payments')
@Logger.io
async def list_payments(
    booking_id: UtilsUUID7,
    use_case: ListPaymentsUseCase = Depends(ListPaymentsUseCase.depends),
) -> List[PaymentResponse]:
    payments = await use_case.execute(booking_id=booking_id)
    return [PaymentResponse.from_entity(payment) for payment in payments]


@router.post('/{booking_id}/payments', status_code=status.HTTP_201_CREATED)
@Logger.io
async def record_payment_adjustment(
    booking_id: UtilsUUID7,
    request: PaymentAdjustmentRequest,
    use_case: RecordPaymentAdjustmentUseCase = Depends(RecordPaymentAdjustmentUseCase.depends),
) -> PaymentResponse:
    payment = await use_case.execute(
        booking_id=booking_id, amount=request.to_amount(), note=request.note
    )
    return PaymentResponse.from_entity(payment)
