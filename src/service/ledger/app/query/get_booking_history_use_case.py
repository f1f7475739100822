from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory


class GetBookingHistoryUseCase:
    """Audit trail of a booking, newest first. Still readable after the booking is deleted."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, booking_id: UUID) -> List[BookingHistory]:
        async with self.uow:
            return await self.uow.history_repo.list_by_booking(booking_id=booking_id)
