from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.ledger_write_support import (
    apply_item_seats,
    ensure_seat_free,
    item_for_trip,
    lock_trips,
)
from src.service.ledger.app.dto.booking_command_dto import BookingItemInput
from src.service.ledger.app.dto.booking_view import BookingView
from src.service.ledger.app.dto.operation_result import BookingMutationResult
from src.service.ledger.domain.entity.booking_entity import Booking, BookingItem
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.enum.ticket_status import TicketStatus
from src.service.ledger.domain.payment_ledger import build_snapshot_delta
from src.service.ledger.domain.ticket_ledger_domain import build_item_tickets
from src.service.ledger.domain.value_object.passenger import Passenger
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount


def resolve_target_status(
    status: Optional[TicketStatus], requested: PaymentAmount
) -> TicketStatus:
    if status is not None:
        return TicketStatus(status)
    return TicketStatus.PAYMENT if requested.total > 0 else TicketStatus.BOOKING


class CreateBookingUseCase:
    """
    Create a booking across one or more trips.

    Seats, tickets and the optional opening payment are written in one
    transaction: the trips are locked first, every requested seat must be free.
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
        self,
        *,
        items: List[BookingItemInput],
        passenger: Passenger,
        payment: Optional[PaymentAmount] = None,
        status: Optional[TicketStatus] = None,
    ) -> BookingMutationResult:
        if not items:
            raise ValidationError('A booking needs at least one item')
        trip_keys = [str(item.trip_id) for item in items]
        if len(set(trip_keys)) != len(trip_keys):
            raise ValidationError('A trip appears twice in the same booking')

        requested = payment or PaymentAmount()
        target_status = resolve_target_status(status, requested)

        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'booking.items': len(items), 'ticket.status': str(target_status)},
        ):
            async with self.uow:
                trips = await lock_trips(self.uow, [item.trip_id for item in items])

                booking_items: List[BookingItem] = []
                for item_input in items:
                    trip = trips[str(item_input.trip_id)]
                    for seat_id in item_input.requested_seat_ids:
                        ensure_seat_free(trip, seat_id)
                    tickets = build_item_tickets(
                        seat_ids=item_input.seat_ids,
                        drafts=item_input.tickets,
                        status=target_status,
                        passenger=passenger,
                    )
                    booking_items.append(item_for_trip(trip, tickets))

                booking = Booking.create(passenger=passenger, items=booking_items)
                for item in booking.items:
                    apply_item_seats(trips[str(item.trip_id)], item)

                payment_entry = None
                if target_status != TicketStatus.HOLD:
                    payment_entry = build_snapshot_delta(
                        booking=booking,
                        current=PaymentAmount(),
                        requested=requested,
                        trips=list(trips.values()),
                    )
                elif not requested.is_zero:
                    Logger.base.warning('⚠️ [CREATE] Hold booking ignores the supplied payment')

                for trip in trips.values():
                    await self.uow.trip_repo.save(trip=trip)
                await self.uow.booking_repo.add(booking=booking)
                if payment_entry is not None:
                    await self.uow.payment_repo.add(payment=payment_entry)
                await self.uow.history_repo.add(
                    entry=BookingHistory.create(
                        booking_id=booking.id,
                        action=HistoryAction.CREATE,
                        description=f'Created booking with {booking.total_tickets} seat(s)',
                        details={
                            'items': [
                                {
                                    'tripId': str(item.trip_id),
                                    'route': item.route,
                                    'tripDate': item.trip_date,
                                    'seats': trips[str(item.trip_id)].labels_of(item.seat_ids),
                                }
                                for item in booking.items
                            ],
                            'totalPrice': booking.total_price,
                            'paid': requested.total if payment_entry else 0,
                        },
                    )
                )
                await self.uow.commit()

        Logger.base.info(
            f'🎫 [CREATE] Booking {booking.id}: {booking.total_tickets} seat(s), '
            f'total {booking.total_price}, status {target_status}'
        )
        return BookingMutationResult(
            booking=BookingView.build(
                booking=booking, payments=[payment_entry] if payment_entry else []
            ),
            updated_trips=list(trips.values()),
            payment=payment_entry,
        )
