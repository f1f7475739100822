from enum import StrEnum


class TicketStatus(StrEnum):
    BOOKING = 'booking'
    HOLD = 'hold'  # reserved but unpaid, carries no money
    PAYMENT = 'payment'
