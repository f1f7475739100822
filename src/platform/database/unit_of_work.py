"""
Unit of Work - one database transaction per ledger operation.

The trip seat map, the booking ticket ledger and the payment ledger are written
through repositories sharing a single session, so a mutating operation either
commits all three surfaces or none of them.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.ledger.app.interface.i_booking_history_repo import IBookingHistoryRepo
    from src.service.ledger.app.interface.i_booking_repo import IBookingRepo
    from src.service.ledger.app.interface.i_payment_repo import IPaymentRepo
    from src.service.ledger.app.interface.i_trip_repo import ITripRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            trip = await uow.trip_repo.get_by_id(trip_id=..., for_update=True)
            ...
            await uow.commit()

    Leaving the block without commit() rolls everything back.
    """

    trip_repo: ITripRepo
    booking_repo: IBookingRepo
    payment_repo: IPaymentRepo
    history_repo: IBookingHistoryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory
        self._session_cm: AsyncContextManager[AsyncSession] | None = None
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.ledger.driven_adapter.repo.booking_history_repo_impl import (
            BookingHistoryRepoImpl,
        )
        from src.service.ledger.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
        from src.service.ledger.driven_adapter.repo.payment_repo_impl import PaymentRepoImpl
        from src.service.ledger.driven_adapter.repo.trip_repo_impl import TripRepoImpl

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        self.trip_repo = TripRepoImpl(session=self.session)
        self.booking_repo = BookingRepoImpl(session=self.session)
        self.payment_repo = PaymentRepoImpl(session=self.session)
        self.history_repo = BookingHistoryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._session_cm is not None:
                await self._session_cm.__aexit__(*args)
            self._session_cm = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'Unit of Work used outside its context'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
