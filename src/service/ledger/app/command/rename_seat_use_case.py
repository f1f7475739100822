from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.command.ledger_write_support import lock_trips
from src.service.ledger.domain.entity.trip_entity import Trip


class RenameSeatUseCase:
    """Change a seat's display label. The seat id and every ticket stay untouched."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, trip_id: UUID, seat_id: str, label: str) -> Trip:
        label = label.strip()
        if not label:
            raise ValidationError('Seat label cannot be empty')

        with self.tracer.start_as_current_span(
            'use_case.rename_seat', attributes={'trip.id': str(trip_id), 'seat.id': seat_id}
        ):
            async with self.uow:
                trip = (await lock_trips(self.uow, [trip_id]))[str(trip_id)]
                old_label = trip.seat(seat_id).label
                if any(seat.label == label and seat.id != seat_id for seat in trip.seats):
                    raise ConflictError(f'Label {label} is already used on this trip')

                trip.rename_seat(seat_id=seat_id, label=label)
                await self.uow.trip_repo.save(trip=trip)
                await self.uow.commit()

        Logger.base.info(f'🏷️ [RENAME_SEAT] Trip {trip_id} seat {seat_id}: {old_label} -> {label}')
        return trip
