"""
Payment ledger arithmetic.

The ledger is a list of signed deltas per booking. Nothing here mutates an entry,
every function either sums existing entries or builds the next one to append.
"""

from typing import Iterable, List, Optional

from uuid_utils import UUID

from src.service.ledger.domain.entity.booking_entity import Booking
from src.service.ledger.domain.entity.payment_entity import Payment, PaymentDetails
from src.service.ledger.domain.entity.trip_entity import Trip
from src.service.ledger.domain.enum.payment_kind import TransactionType
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount


def summarize_payments(payments: Iterable[Payment]) -> PaymentAmount:
    """Paid-in totals: sum of cash and sum of transfer over all entries."""
    total = PaymentAmount()
    for payment in payments:
        total = total + payment.amount
    return total


def total_paid(payments: Iterable[Payment]) -> int:
    return summarize_payments(payments).total


def _ticket_count(count: int) -> str:
    return f'{count:02d} vé'


def build_snapshot_delta(
    *,
    booking: Booking,
    current: PaymentAmount,
    requested: PaymentAmount,
    trips: Optional[List[Trip]] = None,
) -> Optional[Payment]:
    """
    Entry that moves the ledger from `current` to `requested` paid-in totals.

    Returns None when nothing changed, so an unchanged total never writes a row.
    """
    delta = requested - current
    if delta.is_zero:
        return None

    labels = _labels_for_booking(booking, trips or [])
    verb = 'Thanh toán' if delta.total >= 0 else 'Hoàn tiền'
    note = f'{verb} ({_ticket_count(booking.total_tickets)}) {" ".join(labels)}'.strip()
    return Payment.create(
        booking_id=booking.id,
        amount=delta,
        transaction_type=TransactionType.SNAPSHOT,
        note=note,
        details=_details_for_booking(booking, labels),
    )


def build_incremental_entry(
    *,
    booking_id: UUID,
    amount: PaymentAmount,
    trip: Trip,
    seat_id: str,
) -> Payment:
    """Entry for one seat-level pay (positive) or refund (negative) action."""
    label = trip.label_of(seat_id)
    verb = 'Thanh toán' if amount.total >= 0 else 'Hoàn tiền'
    return Payment.create(
        booking_id=booking_id,
        amount=amount,
        transaction_type=TransactionType.INCREMENTAL,
        note=f'{verb} ghế {label}',
        details=PaymentDetails(
            seats=[seat_id],
            labels=[label],
            trip_date=trip.trip_date,
            route=trip.route,
            license_plate=trip.license_plate,
        ),
    )


def _labels_for_booking(booking: Booking, trips: List[Trip]) -> List[str]:
    trips_by_id = {str(trip.id): trip for trip in trips}
    labels: List[str] = []
    for item in booking.items:
        trip = trips_by_id.get(str(item.trip_id))
        labels.extend(trip.labels_of(item.seat_ids) if trip else item.seat_ids)
    return labels


def _details_for_booking(booking: Booking, labels: List[str]) -> PaymentDetails:
    first_item = booking.items[0] if booking.items else None
    return PaymentDetails(
        seats=[ticket.seat_id for ticket in booking.all_tickets()],
        labels=labels,
        trip_date=first_item.trip_date if first_item else None,
        route=first_item.route if first_item else None,
        license_plate=first_item.license_plate if first_item else None,
    )
