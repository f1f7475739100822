from datetime import datetime, timezone
from typing import Optional, Self

import uuid_utils
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.ledger.domain.bus_layout import (
    BusLayout,
    default_layout,
    generate_seats,
    seat_kind_counts,
)
from src.service.ledger.domain.entity.trip_entity import Trip
from src.service.ledger.domain.enum.bus_type import BusType


class RegisterTripUseCase:
    """Provision a trip and its seat map from a bus layout, every seat available."""

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
    async def execute(
        self,
        *,
        route: str,
        departure_time: datetime,
        license_plate: str,
        bus_type: BusType,
        layout: Optional[BusLayout] = None,
    ) -> Trip:
        if not route.strip():
            raise ValidationError('Route is required')

        bus_type = BusType(bus_type)
        seats = generate_seats(layout or default_layout(bus_type), bus_type)
        now = datetime.now(timezone.utc)
        trip = Trip(
            id=uuid_utils.uuid7(),
            route=route.strip(),
            departure_time=departure_time,
            license_plate=license_plate.strip(),
            bus_type=bus_type,
            seats=seats,
            created_at=now,
            updated_at=now,
        )

        with self.tracer.start_as_current_span(
            'use_case.register_trip',
            attributes={'trip.id': str(trip.id), 'trip.seats': len(seats)},
        ):
            async with self.uow:
                await self.uow.trip_repo.add(trip=trip)
                await self.uow.commit()

        counts = ', '.join(f'{kind}={count}' for kind, count in seat_kind_counts(seats).items())
        Logger.base.info(
            f'🚌 [REGISTER_TRIP] {trip.route} {trip.trip_date} ({bus_type}): '
            f'{len(seats)} seats [{counts}]'
        )
        return trip
