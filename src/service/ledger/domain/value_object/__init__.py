"""Ledger Domain Value Objects"""

from src.service.ledger.domain.value_object.passenger import Passenger
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount
from src.service.ledger.domain.value_object.seat_key import SeatKey, SeatKind
from src.service.ledger.domain.value_object.ticket_draft import TicketDraft

__all__ = ['Passenger', 'PaymentAmount', 'SeatKey', 'SeatKind', 'TicketDraft']
