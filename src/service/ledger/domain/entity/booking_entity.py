from datetime import datetime, timezone
from typing import Iterator, List, Optional, Tuple

import attrs
import uuid_utils
from uuid_utils import UUID

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.ledger.domain.enum.bus_type import BusType
from src.service.ledger.domain.entity.ticket_entity import Ticket
from src.service.ledger.domain.value_object.passenger import Passenger


@attrs.define
class BookingItem:
    """The part of a booking that belongs to one trip"""

    trip_id: UUID
    trip_date: str
    route: str
    license_plate: str
    bus_type: Optional[BusType] = None
    tickets: List[Ticket] = attrs.field(factory=list)
    price: int = 0  # cache of sum(ticket.price)

    @property
    def seat_ids(self) -> List[str]:
        return [ticket.seat_id for ticket in self.tickets]

    def find_ticket(self, seat_id: str) -> Optional[Ticket]:
        return next((ticket for ticket in self.tickets if ticket.seat_id == seat_id), None)

    def remove_ticket(self, seat_id: str) -> Ticket:
        ticket = self.find_ticket(seat_id)
        if ticket is None:
            raise DomainError(f'Seat {seat_id} is not part of this item')
        self.tickets.remove(ticket)
        self.recompute_price()
        return ticket

    def add_ticket(self, ticket: Ticket) -> None:
        if self.find_ticket(ticket.seat_id) is not None:
            raise DomainError(f'Seat {ticket.seat_id} is already part of this item')
        self.tickets.append(ticket)
        self.recompute_price()

    def recompute_price(self) -> int:
        self.price = sum(ticket.price for ticket in self.tickets)
        return self.price


@attrs.define
class Booking:
    id: UUID
    passenger: Passenger
    items: List[BookingItem] = attrs.field(factory=list)
    total_price: int = 0  # cache of sum(item.price)
    total_tickets: int = 0  # cache of the ticket count
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(cls, *, passenger: Passenger, items: List[BookingItem]) -> 'Booking':
        if not any(item.tickets for item in items):
            raise DomainError('A booking needs at least one ticket')

        now = datetime.now(timezone.utc)
        booking = cls(
            id=uuid_utils.uuid7(),
            passenger=passenger,
            items=list(items),
            created_at=now,
            updated_at=now,
        )
        booking.prune_empty_items()
        return booking

    @property
    def trip_ids(self) -> List[UUID]:
        return [item.trip_id for item in self.items]

    def iter_tickets(self) -> Iterator[Tuple[BookingItem, Ticket]]:
        for item in self.items:
            for ticket in item.tickets:
                yield item, ticket

    def all_tickets(self) -> List[Ticket]:
        return [ticket for _, ticket in self.iter_tickets()]

    def item_for_trip(self, trip_id: UUID) -> Optional[BookingItem]:
        return next((item for item in self.items if str(item.trip_id) == str(trip_id)), None)

    def locate_ticket(
        self, seat_id: str, *, trip_id: Optional[UUID] = None
    ) -> Optional[Tuple[BookingItem, Ticket]]:
        for item, ticket in self.iter_tickets():
            if ticket.seat_id != seat_id:
                continue
            if trip_id is None or str(item.trip_id) == str(trip_id):
                return item, ticket
        return None

    def replace_items(self, items: List[BookingItem]) -> None:
        self.items = list(items)
        self.prune_empty_items()

    def prune_empty_items(self) -> None:
        """Drop zero-ticket items and refresh every price/count cache."""
        self.items = [item for item in self.items if item.tickets]
        self.recompute_totals()

    def recompute_totals(self) -> None:
        for item in self.items:
            item.recompute_price()
        self.total_price = sum(item.price for item in self.items)
        self.total_tickets = sum(len(item.tickets) for item in self.items)

    def update_passenger(self, **changes: Optional[str]) -> None:
        self.passenger = attrs.evolve(self.passenger, **changes)

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
