from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import to_std_uuid, to_uuid7
from src.service.ledger.app.interface.i_trip_repo import ITripRepo
from src.service.ledger.domain.entity.trip_entity import Trip
from src.service.ledger.domain.enum.bus_type import BusType
from src.service.ledger.driven_adapter.model.trip_model import TripModel
from src.service.ledger.driven_adapter.repo.ledger_document_mapper import (
    seat_from_document,
    seat_to_document,
)


class TripRepoImpl(ITripRepo):
    """Trip rows, seat map in one JSONB column. Commit belongs to the Unit of Work."""

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, trip_id: UUID, for_update: bool = False) -> Trip | None:
        stmt = select(TripModel).where(TripModel.id == to_std_uuid(trip_id))
        if for_update:
            # Overwrite rows an earlier unlocked read left in the session
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    @Logger.io
    async def get_many(self, *, trip_ids: Sequence[UUID], for_update: bool = False) -> List[Trip]:
        if not trip_ids:
            return []
        stmt = (
            select(TripModel)
            .where(TripModel.id.in_([to_std_uuid(trip_id) for trip_id in trip_ids]))
            .order_by(TripModel.id)
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_all(self) -> List[Trip]:
        result = await self.session.execute(select(TripModel).order_by(TripModel.departure_time))
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def add(self, *, trip: Trip) -> Trip:
        self.session.add(
            TripModel(
                id=to_std_uuid(trip.id),
                route=trip.route,
                departure_time=trip.departure_time,
                license_plate=trip.license_plate,
                bus_type=str(trip.bus_type),
                seats=[seat_to_document(seat) for seat in trip.seats],
                created_at=trip.created_at,
                updated_at=trip.updated_at,
            )
        )
        await self.session.flush()
        return trip

    @Logger.io
    async def save(self, *, trip: Trip) -> Trip:
        model = await self.session.get(TripModel, to_std_uuid(trip.id))
        if model is None:
            raise ValueError(f'Trip {trip.id} does not exist')
        # Reassign, JSONB columns do not track in-place mutation
        model.seats = [seat_to_document(seat) for seat in trip.seats]
        model.route = trip.route
        model.license_plate = trip.license_plate
        await self.session.flush()
        return trip

    @staticmethod
    def _model_to_entity(model: TripModel) -> Trip:
        return Trip(
            id=to_uuid7(model.id),
            route=model.route,
            departure_time=model.departure_time,
            license_plate=model.license_plate,
            bus_type=BusType(model.bus_type),
            seats=[seat_from_document(doc) for doc in model.seats or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
