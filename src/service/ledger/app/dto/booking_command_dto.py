"""Inputs of the booking mutating operations."""

from typing import List, Optional

import attrs
from uuid_utils import UUID

from src.service.ledger.domain.value_object.ticket_draft import TicketDraft


@attrs.define(frozen=True)
class BookingItemInput:
    """Requested seats on one trip, optionally itemized per ticket"""

    trip_id: UUID
    seat_ids: List[str] = attrs.field(factory=list)
    tickets: Optional[List[TicketDraft]] = None

    @property
    def requested_seat_ids(self) -> List[str]:
        if self.tickets:
            return [ticket.seat_id for ticket in self.tickets]
        return list(self.seat_ids)


@attrs.define(frozen=True)
class SeatTransferPair:
    source_seat_id: str
    target_seat_id: str


@attrs.define(frozen=True)
class TicketPatch:
    """Field-level edit of one ticket. None leaves the field untouched."""

    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    note: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    exact_bed: Optional[bool] = None

    def changes(self) -> dict:
        return {key: value for key, value in attrs.asdict(self).items() if value is not None}
