"""
Shared steps of the ledger write operations.

Lock order is always trips (ascending id) before bookings, so two operations
touching the same trip and booking serialize instead of deadlocking.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from uuid_utils import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.service.ledger.app.dto.booking_view import BookingView
from src.service.ledger.domain.entity.booking_entity import Booking, BookingItem
from src.service.ledger.domain.entity.ticket_entity import Ticket
from src.service.ledger.domain.entity.trip_entity import Trip
from src.service.ledger.domain.enum.seat_status import SeatStatus
from src.service.ledger.domain.ledger_exceptions import SeatUnavailableError


async def lock_trips(uow: AbstractUnitOfWork, trip_ids: Iterable[UUID]) -> Dict[str, Trip]:
    """Lock every trip, keyed by str(id). Raises NotFoundError for an unknown id."""
    unique_ids = list({str(trip_id): trip_id for trip_id in trip_ids}.values())
    trips = await uow.trip_repo.get_many(trip_ids=unique_ids, for_update=True)
    trips_by_id = {str(trip.id): trip for trip in trips}
    for trip_id in unique_ids:
        if str(trip_id) not in trips_by_id:
            raise NotFoundError(f'Trip {trip_id} not found')
    return trips_by_id


async def get_booking_or_raise(
    uow: AbstractUnitOfWork, booking_id: UUID, *, for_update: bool = False
) -> Booking:
    booking = await uow.booking_repo.get_by_id(booking_id=booking_id, for_update=for_update)
    if booking is None:
        raise NotFoundError(f'Booking {booking_id} not found')
    return booking


def ensure_seat_free(trip: Trip, seat_id: str) -> None:
    seat = trip.seat(seat_id)
    if seat.status != SeatStatus.AVAILABLE:
        raise SeatUnavailableError(seat_id=seat_id, label=seat.label)


def apply_item_seats(trip: Trip, item: BookingItem) -> None:
    for ticket in item.tickets:
        trip.apply_ticket_state(seat_id=ticket.seat_id, ticket=ticket)


def release_item_seats(trip: Trip, item: BookingItem) -> None:
    for seat_id in item.seat_ids:
        if trip.find_seat(seat_id) is not None:
            trip.release_seat(seat_id)


def find_occupant(
    bookings: Sequence[Booking], *, trip_id: UUID, seat_id: str
) -> Optional[Tuple[Booking, BookingItem, Ticket]]:
    for booking in bookings:
        located = booking.locate_ticket(seat_id, trip_id=trip_id)
        if located is not None:
            item, ticket = located
            return booking, item, ticket
    return None


def item_for_trip(trip: Trip, tickets: List[Ticket]) -> BookingItem:
    item = BookingItem(
        trip_id=trip.id,
        trip_date=trip.trip_date,
        route=trip.route,
        license_plate=trip.license_plate,
        bus_type=trip.bus_type,
        tickets=list(tickets),
    )
    item.recompute_price()
    return item


async def build_view(uow: AbstractUnitOfWork, booking: Booking) -> BookingView:
    payments = await uow.payment_repo.list_by_booking(booking_id=booking.id)
    return BookingView.build(booking=booking, payments=payments)


async def build_views(uow: AbstractUnitOfWork, bookings: Iterable[Booking]) -> List[BookingView]:
    return [await build_view(uow, booking) for booking in bookings]
