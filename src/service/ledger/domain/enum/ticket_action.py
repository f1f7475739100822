from enum import StrEnum


class TicketAction(StrEnum):
    """Money-moving actions of a single-seat patch"""

    PAY = 'PAY'
    REFUND = 'REFUND'
