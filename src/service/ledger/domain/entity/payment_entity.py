from datetime import datetime, timezone
from typing import List, Optional

import attrs
import uuid_utils
from uuid_utils import UUID

from src.service.ledger.domain.enum.payment_kind import PaymentMethod, PaymentType, TransactionType
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount


@attrs.define(frozen=True)
class PaymentDetails:
    """Seats and trip context the money refers to, kept for the payment dashboard"""

    seats: List[str] = attrs.field(factory=list)
    labels: List[str] = attrs.field(factory=list)
    trip_date: Optional[str] = None
    route: Optional[str] = None
    license_plate: Optional[str] = None


def resolve_payment_method(amount: PaymentAmount) -> PaymentMethod:
    if amount.cash and amount.transfer:
        return PaymentMethod.MIXED
    if amount.transfer:
        return PaymentMethod.TRANSFER
    return PaymentMethod.CASH


@attrs.define(frozen=True)
class Payment:
    """
    Immutable payment ledger entry.

    Amounts are signed: a refund carries negative cash/transfer. Entries are only
    ever appended, a wrong entry is corrected by appending an offsetting one.
    """

    id: UUID
    booking_id: UUID
    cash_amount: int
    transfer_amount: int
    type: PaymentType
    transaction_type: TransactionType
    method: PaymentMethod
    note: str = ''
    details: PaymentDetails = attrs.field(factory=PaymentDetails)
    timestamp: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        booking_id: UUID,
        amount: PaymentAmount,
        transaction_type: TransactionType,
        note: str,
        details: Optional[PaymentDetails] = None,
    ) -> 'Payment':
        return cls(
            id=uuid_utils.uuid7(),
            booking_id=booking_id,
            cash_amount=amount.cash,
            transfer_amount=amount.transfer,
            type=PaymentType.PAYMENT if amount.total >= 0 else PaymentType.REFUND,
            transaction_type=transaction_type,
            method=resolve_payment_method(amount),
            note=note,
            details=details or PaymentDetails(),
            timestamp=datetime.now(timezone.utc),
        )

    @property
    def amount(self) -> PaymentAmount:
        return PaymentAmount(cash=self.cash_amount, transfer=self.transfer_amount)

    @property
    def total_amount(self) -> int:
        return self.cash_amount + self.transfer_amount
