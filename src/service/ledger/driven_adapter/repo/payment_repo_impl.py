from typing import List, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import to_std_uuid, to_uuid7
from src.service.ledger.app.interface.i_payment_repo import IPaymentRepo
from src.service.ledger.domain.entity.payment_entity import Payment
from src.service.ledger.domain.enum.payment_kind import PaymentMethod, PaymentType, TransactionType
from src.service.ledger.driven_adapter.model.payment_model import PaymentModel
from src.service.ledger.driven_adapter.repo.ledger_document_mapper import (
    payment_details_from_document,
    payment_details_to_document,
)


class PaymentRepoImpl(IPaymentRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def add(self, *, payment: Payment) -> Payment:
        self.session.add(
            PaymentModel(
                id=to_std_uuid(payment.id),
                booking_id=to_std_uuid(payment.booking_id),
                cash_amount=payment.cash_amount,
                transfer_amount=payment.transfer_amount,
                type=str(payment.type),
                transaction_type=str(payment.transaction_type),
                method=str(payment.method),
                note=payment.note,
                details=payment_details_to_document(payment.details),
                timestamp=payment.timestamp,
            )
        )
        await self.session.flush()
        return payment

    @Logger.io
    async def list_by_booking(self, *, booking_id: UUID) -> List[Payment]:
        result = await self.session.execute(
            select(PaymentModel)
            .where(PaymentModel.booking_id == to_std_uuid(booking_id))
            .order_by(PaymentModel.timestamp, PaymentModel.id)
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_all(self) -> List[Payment]:
        result = await self.session.execute(
            select(PaymentModel).order_by(PaymentModel.timestamp, PaymentModel.id)
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def delete_by_booking(self, *, booking_id: UUID) -> int:
        result = await self.session.execute(
            delete(PaymentModel).where(PaymentModel.booking_id == to_std_uuid(booking_id))
        )
        return result.rowcount or 0

    @Logger.io
    async def delete_many(self, *, payment_ids: Sequence[UUID]) -> int:
        if not payment_ids:
            return 0
        result = await self.session.execute(
            delete(PaymentModel).where(
                PaymentModel.id.in_([to_std_uuid(payment_id) for payment_id in payment_ids])
            )
        )
        return result.rowcount or 0

    @staticmethod
    def _model_to_entity(model: PaymentModel) -> Payment:
        return Payment(
            id=to_uuid7(model.id),
            booking_id=to_uuid7(model.booking_id),
            cash_amount=model.cash_amount,
            transfer_amount=model.transfer_amount,
            type=PaymentType(model.type),
            transaction_type=TransactionType(model.transaction_type),
            method=PaymentMethod(model.method),
            note=model.note,
            details=payment_details_from_document(model.details or {}),
            timestamp=model.timestamp,
        )
