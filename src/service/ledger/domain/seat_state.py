from typing import Optional

from src.service.ledger.domain.enum.seat_status import SeatStatus
from src.service.ledger.domain.enum.ticket_status import TicketStatus


_SEAT_STATUS_BY_TICKET_STATUS = {
    TicketStatus.PAYMENT: SeatStatus.SOLD,
    TicketStatus.HOLD: SeatStatus.HELD,
    TicketStatus.BOOKING: SeatStatus.BOOKED,
}


def derive_seat_status(ticket_status: Optional[TicketStatus]) -> SeatStatus:
    """
    Map the occupying ticket's status to the seat status.

    Only the ticket status decides the seat color: a booked seat stays booked at
    any price. A seat without a ticket is available.
    """
    if ticket_status is None:
        return SeatStatus.AVAILABLE
    return _SEAT_STATUS_BY_TICKET_STATUS[TicketStatus(ticket_status)]
