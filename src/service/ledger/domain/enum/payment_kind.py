"""
Payment ledger tags.

An entry is a tagged variant of PaymentType x TransactionType: a snapshot entry is
"new booking total minus old booking total", an incremental entry is the money of
one seat-level action.
"""

from enum import StrEnum


class PaymentType(StrEnum):
    PAYMENT = 'payment'
    REFUND = 'refund'


class TransactionType(StrEnum):
    SNAPSHOT = 'snapshot'
    INCREMENTAL = 'incremental'


class PaymentMethod(StrEnum):
    CASH = 'cash'
    TRANSFER = 'transfer'
    MIXED = 'mixed'
