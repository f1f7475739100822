from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ledger.domain.entity.trip_entity import Trip


class GetTripUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, trip_id: UUID) -> Trip:
        async with self.uow:
            trip = await self.uow.trip_repo.get_by_id(trip_id=trip_id)

        if trip is None:
            Logger.base.warning(f'⚠️ [GET_TRIP] Trip {trip_id} not found')
            raise NotFoundError(f'Trip {trip_id} not found')
        return trip
