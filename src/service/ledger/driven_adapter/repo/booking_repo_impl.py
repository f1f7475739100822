from typing import List

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import to_std_uuid, to_uuid7
from src.service.ledger.app.interface.i_booking_repo import IBookingRepo
from src.service.ledger.domain.entity.booking_entity import Booking
from src.service.ledger.driven_adapter.model.booking_model import BookingModel
from src.service.ledger.driven_adapter.repo.ledger_document_mapper import (
    items_from_documents,
    items_to_documents,
    passenger_from_document,
    passenger_to_document,
)


class BookingRepoImpl(IBookingRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID, for_update: bool = False) -> Booking | None:
        stmt = select(BookingModel).where(BookingModel.id == to_std_uuid(booking_id))
        if for_update:
            # Overwrite rows an earlier unlocked read left in the session
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    @Logger.io
    async def list_by_trip(self, *, trip_id: UUID, for_update: bool = False) -> List[Booking]:
        stmt = (
            select(BookingModel)
            .where(BookingModel.trip_ids.any(to_std_uuid(trip_id)))
            .order_by(BookingModel.id)
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_all(self) -> List[Booking]:
        result = await self.session.execute(select(BookingModel).order_by(BookingModel.id))
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def exists(self, *, booking_id: UUID) -> bool:
        result = await self.session.execute(
            select(exists().where(BookingModel.id == to_std_uuid(booking_id)))
        )
        return bool(result.scalar())

    @Logger.io
    async def add(self, *, booking: Booking) -> Booking:
        model = BookingModel(id=to_std_uuid(booking.id), created_at=booking.created_at)
        self._copy_to_model(booking, model)
        self.session.add(model)
        await self.session.flush()
        return booking

    @Logger.io
    async def save(self, *, booking: Booking) -> Booking:
        model = await self.session.get(BookingModel, to_std_uuid(booking.id))
        if model is None:
            raise ValueError(f'Booking {booking.id} does not exist')
        self._copy_to_model(booking, model)
        await self.session.flush()
        return booking

    @Logger.io
    async def delete(self, *, booking_id: UUID) -> None:
        await self.session.execute(
            delete(BookingModel).where(BookingModel.id == to_std_uuid(booking_id))
        )

    @staticmethod
    def _copy_to_model(booking: Booking, model: BookingModel) -> None:
        model.passenger = passenger_to_document(booking.passenger)
        model.items = items_to_documents(booking.items)
        model.trip_ids = [to_std_uuid(trip_id) for trip_id in booking.trip_ids]
        model.total_price = booking.total_price
        model.total_tickets = booking.total_tickets
        model.updated_at = booking.updated_at

    @staticmethod
    def _model_to_entity(model: BookingModel) -> Booking:
        return Booking(
            id=to_uuid7(model.id),
            passenger=passenger_from_document(model.passenger or {}),
            items=items_from_documents(model.items),
            total_price=model.total_price,
            total_tickets=model.total_tickets,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
