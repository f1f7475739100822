from abc import ABC, abstractmethod
from typing import List

from uuid_utils import UUID

from src.service.ledger.domain.entity.booking_history_entity import BookingHistory


class IBookingHistoryRepo(ABC):
    @abstractmethod
    async def add(self, *, entry: BookingHistory) -> BookingHistory:
        pass

    @abstractmethod
    async def list_by_booking(self, *, booking_id: UUID) -> List[BookingHistory]:
        """Audit entries of one booking, newest first"""
        pass
