"""
Trip Repository Interface

A trip row carries its whole seat map, so loading a trip for update also locks
every seat of that trip.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from uuid_utils import UUID

from src.service.ledger.domain.entity.trip_entity import Trip


class ITripRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, trip_id: UUID, for_update: bool = False) -> Trip | None:
        """
        Args:
            trip_id: Trip ID
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            Trip entity or None if not found
        """
        pass

    @abstractmethod
    async def get_many(self, *, trip_ids: Sequence[UUID], for_update: bool = False) -> List[Trip]:
        """
        Load several trips, locked in ascending id order when for_update is set
        so concurrent operations never wait on each other in a cycle.

        Missing ids are skipped.
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Trip]:
        pass

    @abstractmethod
    async def add(self, *, trip: Trip) -> Trip:
        pass

    @abstractmethod
    async def save(self, *, trip: Trip) -> Trip:
        """Persist the seat map of an existing trip"""
        pass
