from typing import Optional

import attrs

from src.service.ledger.domain.enum.ticket_status import TicketStatus


@attrs.define(frozen=True)
class TicketDraft:
    """
    Caller-supplied ticket detail for one seat.

    None means "not specified": the builder falls back to the ticket already on
    that seat, then to the passenger record.
    """

    seat_id: str
    price: Optional[int] = None
    status: Optional[TicketStatus] = None
    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    note: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    exact_bed: Optional[bool] = None
