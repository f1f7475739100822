"""
Transfer Seats Use Case

Moves tickets of one booking from a seat of trip A to a seat of trip B, pairing
source and destination seats in the order the caller gives them. Every pair is
validated before anything is mutated.
"""

from typing import List, Self

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
    ensure_seat_free,
    get_booking_or_raise,
    item_for_trip,
    lock_trips,
)
from src.service.ledger.app.dto.booking_command_dto import SeatTransferPair
from src.service.ledger.app.dto.operation_result import SeatTransferResult
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.entity.ticket_entity import Ticket
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.ledger_exceptions import TicketNotFoundError


class TransferSeatsUseCase:
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
        from_trip_id: UUID,
        to_trip_id: UUID,
        seat_pairs: List[SeatTransferPair],
    ) -> SeatTransferResult:
        if not seat_pairs:
            raise ValidationError('Nothing to transfer')
        source_ids = [pair.source_seat_id for pair in seat_pairs]
        target_ids = [pair.target_seat_id for pair in seat_pairs]
        if len(set(source_ids)) != len(source_ids) or len(set(target_ids)) != len(target_ids):
            raise ValidationError('A seat appears twice in the transfer')

        same_trip = str(from_trip_id) == str(to_trip_id)

        with self.tracer.start_as_current_span(
            'use_case.transfer_seats',
            attributes={
                'booking.id': str(booking_id),
                'trip.from': str(from_trip_id),
                'trip.to': str(to_trip_id),
                'seats.count': len(seat_pairs),
            },
        ):
            async with self.uow:
                trips = await lock_trips(self.uow, [from_trip_id, to_trip_id])
                source_trip = trips[str(from_trip_id)]
                target_trip = trips[str(to_trip_id)]
                booking = await get_booking_or_raise(self.uow, booking_id, for_update=True)
                source_item = booking.item_for_trip(from_trip_id)
                if source_item is None:
                    raise TicketNotFoundError(seat_id=seat_pairs[0].source_seat_id)

                moving: List[Ticket] = []
                for pair in seat_pairs:
                    source_trip.seat(pair.source_seat_id)
                    ticket = source_item.find_ticket(pair.source_seat_id)
                    if ticket is None:
                        raise TicketNotFoundError(seat_id=pair.source_seat_id)
                    target_trip.seat(pair.target_seat_id)
                    if not (same_trip and pair.target_seat_id in source_ids):
                        ensure_seat_free(target_trip, pair.target_seat_id)
                    moving.append(ticket)

                seat_log = [
                    {
                        'from': source_trip.label_of(pair.source_seat_id),
                        'to': target_trip.label_of(pair.target_seat_id),
                    }
                    for pair in seat_pairs
                ]

                for pair in seat_pairs:
                    source_item.remove_ticket(pair.source_seat_id)
                    source_trip.release_seat(pair.source_seat_id)

                target_item = booking.item_for_trip(to_trip_id)
                if target_item is None:
                    target_item = item_for_trip(target_trip, [])
                    booking.items.append(target_item)
                for ticket, pair in zip(moving, seat_pairs):
                    ticket.seat_id = pair.target_seat_id
                    target_item.add_ticket(ticket)
                    target_trip.apply_ticket_state(seat_id=ticket.seat_id, ticket=ticket)

                booking.prune_empty_items()
                booking.touch()

                for trip in trips.values():
                    await self.uow.trip_repo.save(trip=trip)
                await self.uow.booking_repo.save(booking=booking)
                await self.uow.history_repo.add(
                    entry=BookingHistory.create(
                        booking_id=booking.id,
                        action=HistoryAction.TRANSFER,
                        description=(
                            f'Transferred {len(seat_pairs)} seat(s) from {source_trip.route} '
                            f'{source_trip.trip_date} to {target_trip.route} {target_trip.trip_date}'
                        ),
                        details={
                            'fromTripId': str(source_trip.id),
                            'toTripId': str(target_trip.id),
                            'seats': seat_log,
                        },
                    )
                )
                view = await build_view(self.uow, booking)
                await self.uow.commit()

        Logger.base.info(
            f'🚌 [TRANSFER] Booking {booking.id}: {len(seat_pairs)} seat(s) '
            f'{from_trip_id} -> {to_trip_id}'
        )
        return SeatTransferResult(ok=True, booking=view, trips=list(trips.values()))
