from src.service.ledger.domain.entity.booking_entity import Booking
from src.service.ledger.domain.enum.booking_status import BookingStatus
from src.service.ledger.domain.enum.ticket_status import TicketStatus


def derive_booking_status(booking: Booking, *, total_paid: int) -> BookingStatus:
    """Display status, recomputed on every read and never persisted."""
    if booking.total_tickets == 0:
        return BookingStatus.CANCELLED
    if total_paid > 0:
        return BookingStatus.PAYMENT
    if any(ticket.status == TicketStatus.HOLD for ticket in booking.all_tickets()):
        return BookingStatus.HOLD
    return BookingStatus.BOOKING


def is_hold_booking(booking: Booking) -> bool:
    """
    True when the tickets alone make this a hold booking.

    Ignores the payment ledger so a hold that wrongly received money is still
    recognised, and never matches a booking holding a paid ticket.
    """
    tickets = booking.all_tickets()
    return (
        derive_booking_status(booking, total_paid=0) == BookingStatus.HOLD
        and not any(ticket.status == TicketStatus.PAYMENT for ticket in tickets)
    )
