"""Booking Repository Interface - passenger record plus ticket ledger items."""

from abc import ABC, abstractmethod
from typing import List

from uuid_utils import UUID

from src.service.ledger.domain.entity.booking_entity import Booking


class IBookingRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID, for_update: bool = False) -> Booking | None:
        pass

    @abstractmethod
    async def list_by_trip(self, *, trip_id: UUID, for_update: bool = False) -> List[Booking]:
        """
        Bookings with an item on the trip, ordered by id.

        Args:
            trip_id: Trip ID
            for_update: Lock the returned rows

        Returns:
            Matching bookings, including ones whose item there is empty
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Booking]:
        pass

    @abstractmethod
    async def exists(self, *, booking_id: UUID) -> bool:
        pass

    @abstractmethod
    async def add(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def save(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def delete(self, *, booking_id: UUID) -> None:
        pass
