"""
Ticket Ledger Domain

Pure rules for turning a requested seat set into the tickets of a booking item:
no repositories, no I/O. Shared by booking create and full booking update.
"""

from typing import Dict, List, Optional, Sequence

import attrs

from src.platform.exception.exceptions import ValidationError
from src.service.ledger.domain.entity.booking_entity import BookingItem
from src.service.ledger.domain.entity.ticket_entity import TICKET_DETAIL_FIELDS, Ticket
from src.service.ledger.domain.enum.ticket_status import TicketStatus
from src.service.ledger.domain.ledger_exceptions import MissingTicketDetailError
from src.service.ledger.domain.value_object.passenger import Passenger
from src.service.ledger.domain.value_object.ticket_draft import TicketDraft


@attrs.define(frozen=True)
class SeatDiff:
    """Seat ids of one trip before vs after an update, in request order"""

    removed: List[str]
    added: List[str]
    kept: List[str]

    @property
    def is_empty(self) -> bool:
        return not (self.removed or self.added)


def diff_seat_ids(old_seat_ids: Sequence[str], new_seat_ids: Sequence[str]) -> SeatDiff:
    old_set, new_set = set(old_seat_ids), set(new_seat_ids)
    return SeatDiff(
        removed=[seat_id for seat_id in old_seat_ids if seat_id not in new_set],
        added=[seat_id for seat_id in new_seat_ids if seat_id not in old_set],
        kept=[seat_id for seat_id in new_seat_ids if seat_id in old_set],
    )


def _passenger_defaults(passenger: Passenger) -> Dict[str, object]:
    return {
        'pickup': passenger.pickup_point or '',
        'dropoff': passenger.dropoff_point or '',
        'note': '',
        'name': passenger.name or '',
        'phone': passenger.phone or '',
        'exact_bed': False,
    }


def _resolve_details(
    draft: Optional[TicketDraft], kept: Optional[Ticket], defaults: Dict[str, object]
) -> Dict[str, object]:
    details: Dict[str, object] = {}
    for field in TICKET_DETAIL_FIELDS:
        value = getattr(draft, field) if draft else None
        if value is None and kept is not None:
            value = getattr(kept, field)
        details[field] = defaults[field] if value is None else value
    return details


def build_item_tickets(
    *,
    seat_ids: Sequence[str],
    drafts: Optional[Sequence[TicketDraft]],
    status: TicketStatus,
    passenger: Passenger,
    previous: Optional[BookingItem] = None,
) -> List[Ticket]:
    """
    Build the tickets of one item.

    With drafts, every seat is itemized: price and status come from the draft
    (status defaults to the booking's target status). Without drafts every seat
    gets a price-0 ticket in the target status, which is refused for paid
    bookings. Contact fields fall back to the ticket previously on the seat,
    then to the passenger record.
    """
    if drafts:
        draft_seat_ids = [draft.seat_id for draft in drafts]
        if seat_ids and set(seat_ids) != set(draft_seat_ids):
            raise ValidationError('Seat list and ticket details refer to different seats')
        seat_order: Sequence[str] = draft_seat_ids
    else:
        if status == TicketStatus.PAYMENT:
            raise MissingTicketDetailError()
        seat_order = seat_ids

    if len(set(seat_order)) != len(seat_order):
        raise ValidationError('A seat appears twice in the same trip')

    drafts_by_seat = {draft.seat_id: draft for draft in drafts or []}
    defaults = _passenger_defaults(passenger)
    tickets: List[Ticket] = []
    for seat_id in seat_order:
        draft = drafts_by_seat.get(seat_id)
        kept = previous.find_ticket(seat_id) if previous else None

        if draft is not None and draft.price is None and status == TicketStatus.PAYMENT:
            raise MissingTicketDetailError(f'Seat {seat_id} needs a price to be paid')
        if draft is not None and draft.price is not None and draft.price < 0:
            raise ValidationError(f'Seat {seat_id} price cannot be negative')

        tickets.append(
            Ticket(
                seat_id=seat_id,
                price=draft.price if draft and draft.price is not None else 0,
                status=draft.status if draft and draft.status else status,
                **_resolve_details(draft, kept, defaults),  # type: ignore[arg-type]
            )
        )
    return tickets
