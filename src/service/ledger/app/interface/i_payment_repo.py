"""
Payment Repository Interface

Append-only: there is no update. Deletion exists for booking deletion and the
cleanup job only.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from uuid_utils import UUID

from src.service.ledger.domain.entity.payment_entity import Payment


class IPaymentRepo(ABC):
    @abstractmethod
    async def add(self, *, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def list_by_booking(self, *, booking_id: UUID) -> List[Payment]:
        """Entries of one booking, oldest first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Payment]:
        pass

    @abstractmethod
    async def delete_by_booking(self, *, booking_id: UUID) -> int:
        """
        Returns:
            Number of deleted entries
        """
        pass

    @abstractmethod
    async def delete_many(self, *, payment_ids: Sequence[UUID]) -> int:
        pass
