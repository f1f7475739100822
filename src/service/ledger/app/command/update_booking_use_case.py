"""
Update Booking Use Case

Full replacement of a booking's items. Every previously held seat is released
first, the new ticket set is built like a fresh booking, and the paid-in total
moves to the requested one through a single snapshot delta.
"""

from typing import Any, Dict, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.create_booking_use_case import resolve_target_status
from src.service.ledger.app.command.ledger_write_support import (
    apply_item_seats,
    ensure_seat_free,
    get_booking_or_raise,
    item_for_trip,
    lock_trips,
    release_item_seats,
)
from src.service.ledger.app.dto.booking_command_dto import BookingItemInput
from src.service.ledger.app.dto.booking_view import BookingView
from src.service.ledger.app.dto.operation_result import BookingMutationResult
from src.service.ledger.domain.entity.booking_entity import Booking, BookingItem
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.entity.trip_entity import Trip
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.enum.ticket_status import TicketStatus
from src.service.ledger.domain.payment_ledger import build_snapshot_delta, summarize_payments
from src.service.ledger.domain.ticket_ledger_domain import build_item_tickets, diff_seat_ids
from src.service.ledger.domain.value_object.passenger import Passenger
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount


class UpdateBookingUseCase:
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
        items: List[BookingItemInput],
        passenger: Passenger,
        payment: Optional[PaymentAmount] = None,
        status: Optional[TicketStatus] = None,
    ) -> BookingMutationResult:
        trip_keys = [str(item.trip_id) for item in items]
        if len(set(trip_keys)) != len(trip_keys):
            raise ValidationError('A trip appears twice in the same booking')

        with self.tracer.start_as_current_span(
            'use_case.update_booking',
            attributes={'booking.id': str(booking_id), 'booking.items': len(items)},
        ):
            async with self.uow:
                # Read unlocked to learn which trips to lock, then re-read under lock
                preview = await get_booking_or_raise(self.uow, booking_id)
                trips = await lock_trips(
                    self.uow, [*preview.trip_ids, *(item.trip_id for item in items)]
                )
                booking = await get_booking_or_raise(self.uow, booking_id, for_update=True)
                payments = await self.uow.payment_repo.list_by_booking(booking_id=booking_id)

                current = summarize_payments(payments)
                requested = payment if payment is not None else current
                target_status = resolve_target_status(status, requested)

                old_seat_ids = {str(item.trip_id): item.seat_ids for item in booking.items}
                for item in booking.items:
                    release_item_seats(trips[str(item.trip_id)], item)

                new_items: List[BookingItem] = []
                for item_input in items:
                    trip = trips[str(item_input.trip_id)]
                    for seat_id in item_input.requested_seat_ids:
                        ensure_seat_free(trip, seat_id)
                    tickets = build_item_tickets(
                        seat_ids=item_input.seat_ids,
                        drafts=item_input.tickets,
                        status=target_status,
                        passenger=passenger,
                        previous=booking.item_for_trip(item_input.trip_id),
                    )
                    new_items.append(item_for_trip(trip, tickets))

                changes = self._seat_changes(old_seat_ids, new_items, trips)

                booking.passenger = passenger
                booking.replace_items(new_items)
                booking.touch()
                for item in booking.items:
                    apply_item_seats(trips[str(item.trip_id)], item)

                payment_entry = None
                if target_status != TicketStatus.HOLD:
                    payment_entry = build_snapshot_delta(
                        booking=booking,
                        current=current,
                        requested=requested,
                        trips=list(trips.values()),
                    )

                for trip in trips.values():
                    await self.uow.trip_repo.save(trip=trip)
                await self.uow.booking_repo.save(booking=booking)
                if payment_entry is not None:
                    await self.uow.payment_repo.add(payment=payment_entry)
                    payments.append(payment_entry)

                cancelled = booking.total_tickets == 0
                await self.uow.history_repo.add(
                    entry=BookingHistory.create(
                        booking_id=booking.id,
                        action=HistoryAction.CANCEL if cancelled else HistoryAction.UPDATE,
                        description=self._describe(booking, changes, cancelled=cancelled),
                        details={
                            'changes': changes,
                            'paymentDelta': payment_entry.total_amount if payment_entry else 0,
                        },
                    )
                )
                await self.uow.commit()

        Logger.base.info(
            f'✏️ [UPDATE] Booking {booking.id}: {len(changes)} trip(s) changed, '
            f'{booking.total_tickets} seat(s) now'
        )
        return BookingMutationResult(
            booking=BookingView.build(booking=booking, payments=payments),
            updated_trips=list(trips.values()),
            payment=payment_entry,
        )

    @staticmethod
    def _seat_changes(
        old_seat_ids: Dict[str, List[str]],
        new_items: List[BookingItem],
        trips: Dict[str, Trip],
    ) -> List[Dict[str, Any]]:
        new_seat_ids = {str(item.trip_id): item.seat_ids for item in new_items}
        changes: List[Dict[str, Any]] = []
        for trip_key in dict.fromkeys([*old_seat_ids, *new_seat_ids]):
            diff = diff_seat_ids(old_seat_ids.get(trip_key, []), new_seat_ids.get(trip_key, []))
            if diff.is_empty:
                continue
            trip = trips[trip_key]
            changes.append(
                {
                    'tripId': trip_key,
                    'route': trip.route,
                    'tripDate': trip.trip_date,
                    'removed': trip.labels_of(diff.removed),
                    'added': trip.labels_of(diff.added),
                    'kept': trip.labels_of(diff.kept),
                }
            )
        return changes

    @staticmethod
    def _describe(booking: Booking, changes: List[Dict[str, Any]], *, cancelled: bool) -> str:
        if cancelled:
            return 'Cancelled booking, all seats released'
        if not changes:
            return 'Updated booking details'
        parts = []
        for change in changes:
            if change['added']:
                parts.append(f'+{",".join(change["added"])}')
            if change['removed']:
                parts.append(f'-{",".join(change["removed"])}')
        return f'Updated seats {" ".join(parts)} ({booking.total_tickets} seat(s))'
