from typing import List

import attrs

from src.service.ledger.app.dto.booking_view import BookingView
from src.service.ledger.domain.entity.payment_entity import Payment
from src.service.ledger.domain.entity.trip_entity import Trip


@attrs.define(frozen=True)
class BookingMutationResult:
    booking: BookingView
    updated_trips: List[Trip] = attrs.field(factory=list)
    payment: Payment | None = None


@attrs.define(frozen=True)
class SeatSwapResult:
    bookings: List[BookingView]
    trips: List[Trip]


@attrs.define(frozen=True)
class SeatTransferResult:
    ok: bool
    booking: BookingView
    trips: List[Trip] = attrs.field(factory=list)


@attrs.define(frozen=True)
class BookingDeletionResult:
    trips: List[Trip]
    bookings: List[BookingView]
    deleted_payment_count: int = 0
