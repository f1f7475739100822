"""
Patch Ticket Use Case

Single-seat edit: contact fields, pay the seat, or refund it. Money moved by a
single-seat action is written as an incremental payment entry.
"""

from typing import Any, Dict, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.ledger_write_support import (
    build_view,
    get_booking_or_raise,
    lock_trips,
)
from src.service.ledger.app.dto.booking_command_dto import TicketPatch
from src.service.ledger.app.dto.operation_result import BookingMutationResult
from src.service.ledger.domain.booking_status_deriver import is_hold_booking
from src.service.ledger.domain.entity.booking_entity import Booking, BookingItem
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.entity.payment_entity import Payment
from src.service.ledger.domain.entity.ticket_entity import Ticket
from src.service.ledger.domain.entity.trip_entity import Trip
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.enum.ticket_action import TicketAction
from src.service.ledger.domain.enum.ticket_status import TicketStatus
from src.service.ledger.domain.ledger_exceptions import TicketNotFoundError
from src.service.ledger.domain.payment_ledger import build_incremental_entry
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount


# Ticket field -> passenger field mirrored on single-seat bookings
_PASSENGER_MIRROR = {
    'name': 'name',
    'phone': 'phone',
    'pickup': 'pickup_point',
    'dropoff': 'dropoff_point',
}


class PatchTicketUseCase:
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
        booking_id: UUID,
        seat_id: str,
        patch: Optional[TicketPatch] = None,
        action: Optional[TicketAction] = None,
        payment: Optional[PaymentAmount] = None,
        trip_id: Optional[UUID] = None,
    ) -> BookingMutationResult:
        changes = patch.changes() if patch else {}
        if not changes and action is None:
            raise ValidationError('Nothing to update')

        with self.tracer.start_as_current_span(
            'use_case.patch_ticket',
            attributes={'booking.id': str(booking_id), 'seat.id': seat_id},
        ):
            async with self.uow:
                preview = await get_booking_or_raise(self.uow, booking_id)
                located = preview.locate_ticket(seat_id, trip_id=trip_id)
                if located is None:
                    raise TicketNotFoundError(seat_id=seat_id)
                ticket_trip_id = located[0].trip_id

                trip = (await lock_trips(self.uow, [ticket_trip_id]))[str(ticket_trip_id)]
                booking = await get_booking_or_raise(self.uow, booking_id, for_update=True)
                located = booking.locate_ticket(seat_id, trip_id=ticket_trip_id)
                if located is None:
                    raise TicketNotFoundError(seat_id=seat_id)
                item, ticket = located
                label = trip.label_of(seat_id)

                if changes:
                    self._apply_changes(booking, ticket, changes)

                payment_entry: Optional[Payment] = None
                if action == TicketAction.PAY:
                    payment_entry = self._pay(booking, ticket, trip, payment)
                    history_action = HistoryAction.PAY_SEAT
                    description = f'Paid seat {label} ({ticket.price})'
                elif action == TicketAction.REFUND:
                    payment_entry = self._refund(booking, item, ticket, trip, payment)
                    history_action = (
                        HistoryAction.REFUND_SEAT if payment_entry else HistoryAction.CANCEL
                    )
                    description = (
                        f'Refunded seat {label} ({-payment_entry.total_amount})'
                        if payment_entry
                        else f'Removed seat {label}'
                    )
                else:
                    history_action = HistoryAction.PASSENGER_UPDATE
                    description = f'Updated seat {label}: {", ".join(sorted(changes))}'

                booking.touch()
                await self.uow.trip_repo.save(trip=trip)
                await self.uow.booking_repo.save(booking=booking)
                if payment_entry is not None:
                    await self.uow.payment_repo.add(payment=payment_entry)
                await self.uow.history_repo.add(
                    entry=BookingHistory.create(
                        booking_id=booking.id,
                        action=history_action,
                        description=description,
                        details={
                            'tripId': str(trip.id),
                            'seat': label,
                            'changes': changes,
                            'amount': payment_entry.total_amount if payment_entry else 0,
                        },
                    )
                )
                view = await build_view(self.uow, booking)
                await self.uow.commit()

        Logger.base.info(f'🪑 [PATCH] Booking {booking.id} seat {label}: {history_action}')
        return BookingMutationResult(booking=view, updated_trips=[trip], payment=payment_entry)

    @staticmethod
    def _apply_changes(booking: Booking, ticket: Ticket, changes: Dict[str, Any]) -> None:
        for field, value in changes.items():
            setattr(ticket, field, value)
        if booking.total_tickets == 1:
            mirrored = {
                _PASSENGER_MIRROR[field]: value
                for field, value in changes.items()
                if field in _PASSENGER_MIRROR
            }
            if mirrored:
                booking.update_passenger(**mirrored)

    @staticmethod
    def _pay(
        booking: Booking,
        ticket: Ticket,
        trip: Trip,
        payment: Optional[PaymentAmount],
    ) -> Payment:
        amount = payment or PaymentAmount()
        if amount.total <= 0:
            raise ValidationError('Paying a seat needs a positive amount')

        ticket.price = amount.total
        ticket.status = TicketStatus.PAYMENT
        trip.apply_ticket_state(seat_id=ticket.seat_id, ticket=ticket)
        booking.recompute_totals()
        return build_incremental_entry(
            booking_id=booking.id, amount=amount, trip=trip, seat_id=ticket.seat_id
        )

    @staticmethod
    def _refund(
        booking: Booking,
        item: BookingItem,
        ticket: Ticket,
        trip: Trip,
        payment: Optional[PaymentAmount],
    ) -> Optional[Payment]:
        # Decided before the ticket leaves the booking
        refundable = ticket.is_paid and ticket.price > 0 and not is_hold_booking(booking)
        amount = payment if payment is not None else PaymentAmount(cash=ticket.price)
        if refundable and amount.total != ticket.price:
            raise ValidationError(
                f'Refund split {amount.total} does not match the seat price {ticket.price}'
            )

        item.remove_ticket(ticket.seat_id)
        trip.release_seat(ticket.seat_id)
        booking.prune_empty_items()

        if not refundable:
            return None
        return build_incremental_entry(
            booking_id=booking.id, amount=-amount, trip=trip, seat_id=ticket.seat_id
        )
