from typing import Dict, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import InvalidOperationError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.ledger_write_support import (
    build_views,
    find_occupant,
    lock_trips,
)
from src.service.ledger.app.dto.operation_result import SeatSwapResult
from src.service.ledger.domain.entity.booking_entity import Booking
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.ledger_exceptions import CrossTripSwapNotAllowedError


class SwapSeatsUseCase:
    """
    Exchange the occupants of two seats of one trip.

    Tickets keep their price and status, only their seat id moves. Seat colors
    are then recomputed from the tickets now sitting on each seat.
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
        trip_id: UUID,
        seat_id_a: str,
        seat_id_b: str,
        target_trip_id: Optional[UUID] = None,
    ) -> SeatSwapResult:
        if target_trip_id is not None and str(target_trip_id) != str(trip_id):
            raise CrossTripSwapNotAllowedError()
        if seat_id_a == seat_id_b:
            raise ValidationError('Cannot swap a seat with itself')

        with self.tracer.start_as_current_span(
            'use_case.swap_seats',
            attributes={'trip.id': str(trip_id), 'seat.a': seat_id_a, 'seat.b': seat_id_b},
        ):
            async with self.uow:
                trip = (await lock_trips(self.uow, [trip_id]))[str(trip_id)]
                label_a = trip.seat(seat_id_a).label
                label_b = trip.seat(seat_id_b).label

                bookings = await self.uow.booking_repo.list_by_trip(trip_id=trip_id, for_update=True)
                occupant_a = find_occupant(bookings, trip_id=trip_id, seat_id=seat_id_a)
                occupant_b = find_occupant(bookings, trip_id=trip_id, seat_id=seat_id_b)
                if occupant_a is None and occupant_b is None:
                    raise InvalidOperationError(f'Seats {label_a} and {label_b} are both empty')

                # Both ids are read before either ticket moves
                if occupant_a is not None:
                    occupant_a[2].seat_id = seat_id_b
                if occupant_b is not None:
                    occupant_b[2].seat_id = seat_id_a

                trip.apply_ticket_state(
                    seat_id=seat_id_a, ticket=occupant_b[2] if occupant_b else None
                )
                trip.apply_ticket_state(
                    seat_id=seat_id_b, ticket=occupant_a[2] if occupant_a else None
                )

                changed: Dict[str, Booking] = {}
                for occupant in (occupant_a, occupant_b):
                    if occupant is not None:
                        booking = occupant[0]
                        booking.recompute_totals()
                        booking.touch()
                        changed[str(booking.id)] = booking

                await self.uow.trip_repo.save(trip=trip)
                for booking in changed.values():
                    await self.uow.booking_repo.save(booking=booking)
                    await self.uow.history_repo.add(
                        entry=BookingHistory.create(
                            booking_id=booking.id,
                            action=HistoryAction.SWAP,
                            description=f'Swapped seat {label_a} with {label_b} on {trip.route}',
                            details={'from': label_a, 'to': label_b, 'tripId': str(trip.id)},
                        )
                    )
                views = await build_views(self.uow, changed.values())
                await self.uow.commit()

        Logger.base.info(
            f'🔁 [SWAP] Trip {trip.id}: {label_a} <-> {label_b}, {len(changed)} booking(s)'
        )
        return SeatSwapResult(bookings=views, trips=[trip])
