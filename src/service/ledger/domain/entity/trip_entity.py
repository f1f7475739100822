from datetime import datetime, timezone
from typing import List, Optional

import attrs
from uuid_utils import UUID

from src.service.ledger.domain.enum.bus_type import BusType
from src.service.ledger.domain.enum.seat_status import SeatStatus
from src.service.ledger.domain.entity.seat_entity import Seat
from src.service.ledger.domain.entity.ticket_entity import Ticket
from src.service.ledger.domain.ledger_exceptions import SeatNotFoundError
from src.service.ledger.domain.seat_state import derive_seat_status


TRIP_DATE_FORMAT = '%Y-%m-%d %H:%M'


@attrs.define
class Trip:
    """One scheduled run of a bus, owner of the seat map"""

    id: UUID
    route: str
    departure_time: datetime
    license_plate: str
    bus_type: BusType
    seats: List[Seat] = attrs.field(factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def trip_date(self) -> str:
        return self.departure_time.strftime(TRIP_DATE_FORMAT)

    def find_seat(self, seat_id: str) -> Optional[Seat]:
        return next((seat for seat in self.seats if seat.id == seat_id), None)

    def seat(self, seat_id: str) -> Seat:
        seat = self.find_seat(seat_id)
        if seat is None:
            raise SeatNotFoundError(trip_id=self.id, seat_id=seat_id)
        return seat

    def label_of(self, seat_id: str) -> str:
        seat = self.find_seat(seat_id)
        return seat.label if seat else seat_id

    def labels_of(self, seat_ids: List[str]) -> List[str]:
        return [self.label_of(seat_id) for seat_id in seat_ids]

    def apply_ticket_state(self, *, seat_id: str, ticket: Optional[Ticket]) -> SeatStatus:
        """Set the seat to the status implied by its occupying ticket (or lack of one)."""
        seat = self.seat(seat_id)
        seat.status = derive_seat_status(ticket.status if ticket else None)
        self.touch()
        return seat.status

    def release_seat(self, seat_id: str) -> SeatStatus:
        return self.apply_ticket_state(seat_id=seat_id, ticket=None)

    def rename_seat(self, *, seat_id: str, label: str) -> Seat:
        seat = self.seat(seat_id)
        seat.label = label
        self.touch()
        return seat

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
