from enum import StrEnum


class HistoryAction(StrEnum):
    CREATE = 'CREATE'
    UPDATE = 'UPDATE'
    CANCEL = 'CANCEL'
    SWAP = 'SWAP'
    PASSENGER_UPDATE = 'PASSENGER_UPDATE'
    DELETE = 'DELETE'
    TRANSFER = 'TRANSFER'
    PAY_SEAT = 'PAY_SEAT'
    REFUND_SEAT = 'REFUND_SEAT'
    RECONCILE = 'RECONCILE'
    PAYMENT_ADJUST = 'PAYMENT_ADJUST'
