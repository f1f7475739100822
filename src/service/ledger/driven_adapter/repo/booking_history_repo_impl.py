from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import to_std_uuid, to_uuid7
from src.service.ledger.app.interface.i_booking_history_repo import IBookingHistoryRepo
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.driven_adapter.model.booking_history_model import BookingHistoryModel


class BookingHistoryRepoImpl(IBookingHistoryRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def add(self, *, entry: BookingHistory) -> BookingHistory:
        self.session.add(
            BookingHistoryModel(
                id=to_std_uuid(entry.id),
                booking_id=to_std_uuid(entry.booking_id),
                action=str(entry.action),
                description=entry.description,
                details=entry.details,
                timestamp=entry.timestamp,
            )
        )
        await self.session.flush()
        return entry

    @Logger.io
    async def list_by_booking(self, *, booking_id: UUID) -> List[BookingHistory]:
        result = await self.session.execute(
            select(BookingHistoryModel)
            .where(BookingHistoryModel.booking_id == to_std_uuid(booking_id))
            .order_by(BookingHistoryModel.timestamp.desc(), BookingHistoryModel.id.desc())
        )
        return [
            BookingHistory(
                id=to_uuid7(model.id),
                booking_id=to_uuid7(model.booking_id),
                action=HistoryAction(model.action),
                description=model.description,
                details=model.details or {},
                timestamp=model.timestamp,
            )
            for model in result.scalars().all()
        ]
