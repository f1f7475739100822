from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.ledger_write_support import get_booking_or_raise
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.entity.payment_entity import Payment, PaymentDetails
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.enum.payment_kind import TransactionType
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount


DEFAULT_ADJUSTMENT_NOTE = 'Điều chỉnh thanh toán'


class RecordPaymentAdjustmentUseCase:
    """
    Operator-approved correcting entry for a payment mismatch.

    The ledger is never edited: a wrong total is fixed by appending an entry
    that offsets the difference.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self, *, booking_id: UUID, amount: PaymentAmount, note: Optional[str] = None
    ) -> Payment:
        if amount.total == 0:
            raise ValidationError('Adjustment amount cannot be zero')

        with self.tracer.start_as_current_span(
            'use_case.record_payment_adjustment',
            attributes={'booking.id': str(booking_id), 'payment.amount': amount.total},
        ):
            async with self.uow:
                booking = await get_booking_or_raise(self.uow, booking_id, for_update=True)
                first_item = booking.items[0] if booking.items else None
                payment = Payment.create(
                    booking_id=booking.id,
                    amount=amount,
                    transaction_type=TransactionType.INCREMENTAL,
                    note=note or DEFAULT_ADJUSTMENT_NOTE,
                    details=PaymentDetails(
                        seats=[ticket.seat_id for ticket in booking.all_tickets()],
                        trip_date=first_item.trip_date if first_item else None,
                        route=first_item.route if first_item else None,
                        license_plate=first_item.license_plate if first_item else None,
                    ),
                )
                await self.uow.payment_repo.add(payment=payment)
                await self.uow.history_repo.add(
                    entry=BookingHistory.create(
                        booking_id=booking.id,
                        action=HistoryAction.PAYMENT_ADJUST,
                        description=f'Payment adjustment {payment.total_amount:+d}',
                        details={
                            'cash': amount.cash,
                            'transfer': amount.transfer,
                            'note': payment.note,
                        },
                    )
                )
                await self.uow.commit()

        Logger.base.info(
            f'💰 [PAYMENT_ADJUST] Booking {booking_id}: {payment.type} {payment.total_amount}'
        )
        return payment
