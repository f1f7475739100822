from typing import Optional

import attrs

from src.service.ledger.domain.enum.ticket_status import TicketStatus


# Per-seat contact/annotation fields, editable by a ticket patch
TICKET_DETAIL_FIELDS = ('pickup', 'dropoff', 'note', 'name', 'phone', 'exact_bed')


@attrs.define
class Ticket:
    """One seat's reservation record inside a booking item"""

    seat_id: str
    price: int = 0
    status: TicketStatus = attrs.field(default=TicketStatus.BOOKING, converter=TicketStatus)
    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    note: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    exact_bed: bool = False  # annotation only, no status implication

    @property
    def is_paid(self) -> bool:
        return self.status == TicketStatus.PAYMENT
