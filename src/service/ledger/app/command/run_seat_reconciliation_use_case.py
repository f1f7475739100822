"""
Seat Reconciliation Use Case

Batch repair of the seat maps. For each trip, in its own transaction:
1. Group the tickets of every booking by seat
2. Resolve seats claimed by more than one ticket (highest price, then most
   recently updated booking wins), stripping the seat from the losers
3. Re-derive every seat's status from its winning ticket

Re-runnable: a second pass over a healed trip changes nothing.
"""

from typing import Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.dto.maintenance_dto import (
    MaintenanceAction,
    MaintenanceLog,
    SeatReconciliationReport,
)
from src.service.ledger.domain.entity.booking_entity import Booking
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.entity.trip_entity import Trip
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.seat_claim import SeatClaim, rank_seat_claims
from src.service.ledger.domain.seat_state import derive_seat_status


class RunSeatReconciliationUseCase:
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
    async def execute(self) -> SeatReconciliationReport:
        report = SeatReconciliationReport()

        async with self.uow:
            trip_ids = [trip.id for trip in await self.uow.trip_repo.list_all()]

        Logger.base.info(f'🔧 [SEAT_SYNC] Scanning {len(trip_ids)} trip(s)')
        for trip_id in trip_ids:
            with self.tracer.start_as_current_span(
                'use_case.reconcile_trip_seats', attributes={'trip.id': str(trip_id)}
            ):
                async with self.uow:
                    # Re-read under lock, the trip may have changed since the scan
                    trip = await self.uow.trip_repo.get_by_id(trip_id=trip_id, for_update=True)
                    if trip is None:
                        continue
                    bookings = await self.uow.booking_repo.list_by_trip(
                        trip_id=trip_id, for_update=True
                    )
                    trip_changed, losers = self._reconcile_trip(trip, bookings, report)

                    if trip_changed:
                        await self.uow.trip_repo.save(trip=trip)
                    for booking, lost_labels in losers.values():
                        await self.uow.booking_repo.save(booking=booking)
                        await self.uow.history_repo.add(
                            entry=BookingHistory.create(
                                booking_id=booking.id,
                                action=HistoryAction.RECONCILE,
                                description=(
                                    f'Lost seat(s) {", ".join(lost_labels)} to a '
                                    f'higher-priority booking'
                                ),
                                details={'tripId': str(trip.id), 'seats': lost_labels},
                            )
                        )
                    await self.uow.commit()

        Logger.base.info(
            f'✅ [SEAT_SYNC] fixed={report.fixed_count} sync={report.sync_count} '
            f'conflict={report.conflict_count}'
        )
        return report

    @staticmethod
    def _reconcile_trip(
        trip: Trip,
        bookings: List[Booking],
        report: SeatReconciliationReport,
    ) -> tuple[bool, Dict[str, tuple[Booking, List[str]]]]:
        claims: Dict[str, List[SeatClaim]] = {}
        for booking in bookings:
            if booking.total_tickets == 0:
                continue
            item = booking.item_for_trip(trip.id)
            if item is None:
                continue
            for ticket in item.tickets:
                claims.setdefault(ticket.seat_id, []).append(
                    SeatClaim(booking=booking, item=item, ticket=ticket)
                )

        losers: Dict[str, tuple[Booking, List[str]]] = {}
        for seat_id, seat_claims in claims.items():
            if len(seat_claims) < 2:
                continue
            ranked = rank_seat_claims(seat_claims)
            claims[seat_id] = ranked[:1]
            winner = ranked[0]
            label = trip.label_of(seat_id)
            for loser in ranked[1:]:
                # Identity removal: the same booking may hold the seat twice
                loser.item.tickets = [t for t in loser.item.tickets if t is not loser.ticket]
                loser.booking.prune_empty_items()
                loser.booking.touch()
                losers.setdefault(str(loser.booking.id), (loser.booking, []))[1].append(label)

            report.conflict_count += 1
            report.logs.append(
                MaintenanceLog(
                    route=trip.route,
                    date=trip.trip_date,
                    seat=label,
                    action=MaintenanceAction.CONFLICT,
                    details=(
                        f'{len(seat_claims)} tickets claimed the seat, kept booking '
                        f'{winner.booking.id} (price {winner.ticket.price})'
                    ),
                    extra={
                        'winner': str(winner.booking.id),
                        'losers': [str(claim.booking.id) for claim in ranked[1:]],
                    },
                )
            )

        trip_changed = False
        for seat in trip.seats:
            winning = claims.get(seat.id)
            ticket = winning[0].ticket if winning else None
            expected = derive_seat_status(ticket.status if ticket else None)
            if seat.status == expected:
                continue

            action = MaintenanceAction.SYNC if ticket else MaintenanceAction.FIXED
            if ticket:
                report.sync_count += 1
            else:
                report.fixed_count += 1
            report.logs.append(
                MaintenanceLog(
                    route=trip.route,
                    date=trip.trip_date,
                    seat=seat.label,
                    action=action,
                    details=f'{seat.status} -> {expected}',
                )
            )
            trip.apply_ticket_state(seat_id=seat.id, ticket=ticket)
            trip_changed = True

        return trip_changed or bool(losers), losers
