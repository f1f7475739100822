from typing import Iterable

import attrs

from src.service.ledger.domain.booking_status_deriver import derive_booking_status
from src.service.ledger.domain.entity.booking_entity import Booking
from src.service.ledger.domain.entity.payment_entity import Payment
from src.service.ledger.domain.enum.booking_status import BookingStatus
from src.service.ledger.domain.payment_ledger import summarize_payments
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount


@attrs.define(frozen=True)
class BookingView:
    """A booking as returned to callers: status is derived here, on read."""

    booking: Booking
    status: BookingStatus
    paid: PaymentAmount

    @classmethod
    def build(cls, *, booking: Booking, payments: Iterable[Payment]) -> 'BookingView':
        paid = summarize_payments(payments)
        return cls(
            booking=booking,
            status=derive_booking_status(booking, total_paid=paid.total),
            paid=paid,
        )

    @property
    def total_paid(self) -> int:
        return self.paid.total
