"""Ledger Domain Enums"""

from src.service.ledger.domain.enum.booking_status import BookingStatus
from src.service.ledger.domain.enum.bus_type import BusType
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.enum.payment_kind import PaymentMethod, PaymentType, TransactionType
from src.service.ledger.domain.enum.seat_status import SeatStatus
from src.service.ledger.domain.enum.ticket_action import TicketAction
from src.service.ledger.domain.enum.ticket_status import TicketStatus

__all__ = [
    'BookingStatus',
    'BusType',
    'HistoryAction',
    'PaymentMethod',
    'PaymentType',
    'SeatStatus',
    'TicketAction',
    'TicketStatus',
    'TransactionType',
]
