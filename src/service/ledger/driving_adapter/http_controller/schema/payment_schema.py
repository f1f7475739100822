from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.platform.types import UtilsUUID7
from src.service.ledger.domain.entity.payment_entity import Payment
from src.service.ledger.domain.enum.payment_kind import PaymentMethod, PaymentType, TransactionType
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount


class PaymentAdjustmentRequest(BaseModel):
    cash_amount: int = 0
    transfer_amount: int = 0
    note: Optional[str] = None

    class Config:
        json_schema_extra = {
            'example': {'cash_amount': -50000, 'transfer_amount': 0, 'note': 'Trả lại tiền thừa'}
        }

    def to_amount(self) -> PaymentAmount:
        return PaymentAmount(cash=self.cash_amount, transfer=self.transfer_amount)


class PaymentDetailsSchema(BaseModel):
    seats: List[str] = []
    labels: List[str] = []
    trip_date: Optional[str] = None
    route: Optional[str] = None
    license_plate: Optional[str] = None


class PaymentResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'booking_id': '01936d8f-5e73-7c4e-a9c5-123456789abd',
                'cash_amount': 300000,
                'transfer_amount': 0,
                'total_amount': 300000,
                'type': 'payment',
                'transaction_type': 'snapshot',
                'method': 'cash',
                'note': 'Thanh toán (02 vé) 1 2',
                'details': {'seats': ['1-0-0', '1-0-1'], 'labels': ['1', '2']},
                'timestamp': '2025-01-10T10:30:00',
            }
        },
    }

    id: UtilsUUID7  # UUID7
    booking_id: UtilsUUID7
    cash_amount: int
    transfer_amount: int
    total_amount: int
    type: PaymentType
    transaction_type: TransactionType
    method: PaymentMethod
    note: str
    details: PaymentDetailsSchema
    timestamp: Optional[datetime] = None

    @classmethod
    def from_entity(cls, payment: Payment) -> 'PaymentResponse':
        return cls(
            id=payment.id,
            booking_id=payment.booking_id,
            cash_amount=payment.cash_amount,
            transfer_amount=payment.transfer_amount,
            total_amount=payment.total_amount,
            type=payment.type,
            transaction_type=payment.transaction_type,
            method=payment.method,
            note=payment.note,
            details=PaymentDetailsSchema(
                seats=list(payment.details.seats),
                labels=list(payment.details.labels),
                trip_date=payment.details.trip_date,
                route=payment.details.route,
                license_plate=payment.details.license_plate,
            ),
            timestamp=payment.timestamp,
        )
