"""Ledger Domain Entities"""

from src.service.ledger.domain.entity.booking_entity import Booking, BookingItem
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.entity.payment_entity import Payment, PaymentDetails
from src.service.ledger.domain.entity.seat_entity import Seat
from src.service.ledger.domain.entity.ticket_entity import Ticket
from src.service.ledger.domain.entity.trip_entity import Trip

__all__ = [
    'Booking',
    'BookingHistory',
    'BookingItem',
    'Payment',
    'PaymentDetails',
    'Seat',
    'Ticket',
    'Trip',
]
