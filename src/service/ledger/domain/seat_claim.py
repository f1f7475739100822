"""
Duplicate seat occupancy resolution.

When several tickets claim the same (trip, seat), the claim with the highest
ticket price wins, ties go to the booking updated most recently.
"""

from datetime import datetime, timezone
from typing import List, Sequence, Tuple

import attrs

from src.service.ledger.domain.entity.booking_entity import Booking, BookingItem
from src.service.ledger.domain.entity.ticket_entity import Ticket


_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@attrs.define(frozen=True)
class SeatClaim:
    """A booking's ticket pointing at a seat"""

    booking: Booking
    item: BookingItem
    ticket: Ticket


def seat_claim_priority(claim: SeatClaim) -> Tuple[int, datetime]:
    """Sort key, larger wins: (ticket price, booking updated_at)."""
    updated_at = claim.booking.updated_at or _EPOCH
    if updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=timezone.utc)
    return claim.ticket.price, updated_at


def rank_seat_claims(claims: Sequence[SeatClaim]) -> List[SeatClaim]:
    """Claims ordered winner first."""
    return sorted(claims, key=seat_claim_priority, reverse=True)
