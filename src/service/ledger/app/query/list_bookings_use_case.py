from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.ledger_write_support import build_views
from src.service.ledger.app.dto.booking_view import BookingView


class ListBookingsUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, trip_id: Optional[UUID] = None) -> List[BookingView]:
        """All bookings, or the ones with a ticket on `trip_id`. Status is derived per call."""
        async with self.uow:
            if trip_id is None:
                bookings = await self.uow.booking_repo.list_all()
            else:
                bookings = [
                    booking
                    for booking in await self.uow.booking_repo.list_by_trip(trip_id=trip_id)
                    if booking.item_for_trip(trip_id) is not None
                ]
            views = await build_views(self.uow, bookings)

        Logger.base.info(f'📋 [LIST_BOOKINGS] {len(views)} booking(s) (trip={trip_id})')
        return views
