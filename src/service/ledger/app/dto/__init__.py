"""Ledger Application DTOs"""

from src.service.ledger.app.dto.booking_command_dto import (
    BookingItemInput,
    SeatTransferPair,
    TicketPatch,
)
from src.service.ledger.app.dto.booking_view import BookingView
from src.service.ledger.app.dto.maintenance_dto import (
    MaintenanceAction,
    MaintenanceLog,
    PaymentCleanupReport,
    SeatReconciliationReport,
)
from src.service.ledger.app.dto.operation_result import (
    BookingDeletionResult,
    BookingMutationResult,
    SeatSwapResult,
    SeatTransferResult,
)

__all__ = [
    'BookingDeletionResult',
    'BookingItemInput',
    'BookingMutationResult',
    'BookingView',
    'MaintenanceAction',
    'MaintenanceLog',
    'PaymentCleanupReport',
    'SeatReconciliationReport',
    'SeatSwapResult',
    'SeatTransferPair',
    'SeatTransferResult',
    'TicketPatch',
]
