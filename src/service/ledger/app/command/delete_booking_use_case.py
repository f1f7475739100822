from typing import Dict, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.ledger_write_support import (
    build_views,
    get_booking_or_raise,
    lock_trips,
    release_item_seats,
)
from src.service.ledger.app.dto.operation_result import BookingDeletionResult
from src.service.ledger.domain.entity.booking_entity import Booking
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.enum.history_action import HistoryAction


class DeleteBookingUseCase:
    """
    Cancel a whole booking: release its seats, drop its payment entries and
    the booking itself. The audit history is kept.
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
    async def execute(self, *, booking_id: UUID) -> BookingDeletionResult:
        with self.tracer.start_as_current_span(
            'use_case.delete_booking', attributes={'booking.id': str(booking_id)}
        ):
            async with self.uow:
                preview = await get_booking_or_raise(self.uow, booking_id)
                trips = await lock_trips(self.uow, preview.trip_ids)
                booking = await get_booking_or_raise(self.uow, booking_id, for_update=True)

                released = 0
                for item in booking.items:
                    trip = trips.get(str(item.trip_id))
                    if trip is not None:
                        release_item_seats(trip, item)
                        released += len(item.tickets)

                deleted_payments = await self.uow.payment_repo.delete_by_booking(booking_id=booking_id)
                await self.uow.booking_repo.delete(booking_id=booking_id)
                for trip in trips.values():
                    await self.uow.trip_repo.save(trip=trip)
                await self.uow.history_repo.add(
                    entry=BookingHistory.create(
                        booking_id=booking.id,
                        action=HistoryAction.DELETE,
                        description=f'Deleted booking, released {released} seat(s)',
                        details={
                            'seats': [
                                {
                                    'tripId': str(item.trip_id),
                                    'labels': trips[str(item.trip_id)].labels_of(item.seat_ids),
                                }
                                for item in booking.items
                            ],
                            'deletedPayments': deleted_payments,
                        },
                    )
                )

                remaining: Dict[str, Booking] = {}
                for trip in trips.values():
                    for other in await self.uow.booking_repo.list_by_trip(trip_id=trip.id):
                        remaining.setdefault(str(other.id), other)
                views = await build_views(self.uow, remaining.values())
                await self.uow.commit()

        Logger.base.info(
            f'🗑️ [DELETE] Booking {booking_id}: released {released} seat(s), '
            f'deleted {deleted_payments} payment(s)'
        )
        return BookingDeletionResult(
            trips=list(trips.values()),
            bookings=views,
            deleted_payment_count=deleted_payments,
        )
