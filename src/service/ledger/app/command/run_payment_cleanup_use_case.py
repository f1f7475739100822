"""
Payment Cleanup Use Case

Batch audit of the payment ledger:
- (a) entries whose booking no longer exists are deleted
- (b) entries of hold bookings are deleted, holds carry no money
- (c) paid-in totals that differ from the ticket prices are reported, never fixed
- (d) a stale booking total_price cache is recomputed in place

One booking per transaction, each re-read under lock before it is touched.
"""

from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ledger.app.dto.maintenance_dto import (
    MaintenanceAction,
    MaintenanceLog,
    PaymentCleanupReport,
)
from src.service.ledger.domain.booking_status_deriver import is_hold_booking
from src.service.ledger.domain.entity.booking_entity import Booking
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.entity.payment_entity import Payment
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.payment_ledger import total_paid


class RunPaymentCleanupUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, mismatch_tolerance: int = 0) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)
        self.mismatch_tolerance = mismatch_tolerance

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, mismatch_tolerance=config.PAYMENT_MISMATCH_TOLERANCE)

    @Logger.io
    async def execute(self) -> PaymentCleanupReport:
        report = PaymentCleanupReport()

        async with self.uow:
            payments = await self.uow.payment_repo.list_all()
            booking_ids = [booking.id for booking in await self.uow.booking_repo.list_all()]

        known = {str(booking_id) for booking_id in booking_ids}
        orphans: dict[str, List[Payment]] = {}
        for payment in payments:
            if str(payment.booking_id) not in known:
                orphans.setdefault(str(payment.booking_id), []).append(payment)

        Logger.base.info(
            f'🧹 [PAYMENT_CLEANUP] {len(payments)} payment(s), {len(booking_ids)} booking(s), '
            f'{len(orphans)} orphaned booking id(s)'
        )
        for orphan_payments in orphans.values():
            await self._delete_orphans(orphan_payments, report)
        for booking_id in booking_ids:
            await self._audit_booking(booking_id, report)

        Logger.base.info(
            f'✅ [PAYMENT_CLEANUP] deleted={report.deleted_count} fixed={report.fixed_count} '
            f'mismatch={report.mismatch_count}'
        )
        return report

    async def _delete_orphans(self, payments: List[Payment], report: PaymentCleanupReport) -> None:
        booking_id = payments[0].booking_id
        with self.tracer.start_as_current_span(
            'use_case.delete_orphan_payments', attributes={'booking.id': str(booking_id)}
        ):
            async with self.uow:
                # A booking created with this id since the scan adopts the entries
                if await self.uow.booking_repo.exists(booking_id=booking_id):
                    return
                deleted = await self.uow.payment_repo.delete_many(
                    payment_ids=[payment.id for payment in payments]
                )
                await self.uow.commit()

        report.deleted_count += deleted
        for payment in payments:
            report.logs.append(
                self._payment_log(payment, 'Booking no longer exists', MaintenanceAction.DELETED)
            )

    async def _audit_booking(self, booking_id: UUID, report: PaymentCleanupReport) -> None:
        with self.tracer.start_as_current_span(
            'use_case.audit_booking_payments', attributes={'booking.id': str(booking_id)}
        ):
            async with self.uow:
                booking = await self.uow.booking_repo.get_by_id(booking_id=booking_id, for_update=True)
                if booking is None:
                    return
                payments = await self.uow.payment_repo.list_by_booking(booking_id=booking_id)
                changed = False

                if payments and is_hold_booking(booking):
                    deleted = await self.uow.payment_repo.delete_many(
                        payment_ids=[payment.id for payment in payments]
                    )
                    report.deleted_count += deleted
                    for payment in payments:
                        report.logs.append(
                            self._payment_log(payment, 'Hold booking', MaintenanceAction.DELETED)
                        )
                    payments = []

                actual_price = sum(ticket.price for ticket in booking.all_tickets())
                paid = total_paid(payments)
                carries_money = paid != 0 or any(t.is_paid for t in booking.all_tickets())
                if booking.total_tickets > 0 and carries_money:
                    difference = paid - actual_price
                    if abs(difference) > self.mismatch_tolerance:
                        report.mismatch_count += 1
                        direction = 'over' if difference > 0 else 'under'
                        report.logs.append(
                            self._booking_log(
                                booking,
                                MaintenanceAction.MISMATCH,
                                f'Paid {paid}, tickets {actual_price}: {direction} by {abs(difference)}',
                                extra={
                                    'bookingId': str(booking.id),
                                    'paid': paid,
                                    'actualPrice': actual_price,
                                    'difference': difference,
                                },
                            )
                        )

                ticket_count = len(booking.all_tickets())
                if booking.total_price != actual_price or booking.total_tickets != ticket_count:
                    stale_price = booking.total_price
                    booking.recompute_totals()
                    booking.touch()
                    changed = True
                    report.fixed_count += 1
                    report.logs.append(
                        self._booking_log(
                            booking,
                            MaintenanceAction.FIXED,
                            f'totalPrice {stale_price} -> {booking.total_price}',
                        )
                    )

                if changed:
                    await self.uow.booking_repo.save(booking=booking)
                    await self.uow.history_repo.add(
                        entry=BookingHistory.create(
                            booking_id=booking.id,
                            action=HistoryAction.RECONCILE,
                            description='Recomputed booking totals',
                            details={'totalPrice': booking.total_price},
                        )
                    )
                await self.uow.commit()

    @staticmethod
    def _payment_log(payment: Payment, reason: str, action: MaintenanceAction) -> MaintenanceLog:
        return MaintenanceLog(
            route=payment.details.route or '',
            date=payment.details.trip_date or '',
            seat=' '.join(payment.details.labels or payment.details.seats),
            action=action,
            details=f'{reason}: removed {payment.type} {payment.total_amount}',
            extra={'bookingId': str(payment.booking_id), 'paymentId': str(payment.id)},
        )

    @staticmethod
    def _booking_log(
        booking: Booking, action: MaintenanceAction, details: str, extra: dict | None = None
    ) -> MaintenanceLog:
        first_item = booking.items[0] if booking.items else None
        return MaintenanceLog(
            route=first_item.route if first_item else '',
            date=first_item.trip_date if first_item else '',
            seat=' '.join(ticket.seat_id for ticket in booking.all_tickets()),
            action=action,
            details=details,
            extra=extra or {'bookingId': str(booking.id)},
        )
