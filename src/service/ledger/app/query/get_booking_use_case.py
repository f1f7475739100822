from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.ledger_write_support import build_view, get_booking_or_raise
from src.service.ledger.app.dto.booking_view import BookingView


class GetBookingUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, booking_id: UUID) -> BookingView:
        async with self.uow:
            booking = await get_booking_or_raise(self.uow, booking_id)
            return await build_view(self.uow, booking)
