from enum import StrEnum


class BookingStatus(StrEnum):
    """Display status of a booking. Never stored, see derive_booking_status."""

    BOOKING = 'booking'
    HOLD = 'hold'
    PAYMENT = 'payment'
    CANCELLED = 'cancelled'
