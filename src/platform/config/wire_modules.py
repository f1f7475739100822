"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.ledger.app.command import (
    create_booking_use_case,
    delete_booking_use_case,
    patch_ticket_use_case,
    record_payment_adjustment_use_case,
    register_trip_use_case,
    rename_seat_use_case,
    run_payment_cleanup_use_case,
    run_seat_reconciliation_use_case,
    swap_seats_use_case,
    transfer_seats_use_case,
    update_booking_use_case,
)
from src.service.ledger.app.query import (
    get_booking_history_use_case,
    get_booking_use_case,
    get_trip_use_case,
    list_bookings_use_case,
    list_payments_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    update_booking_use_case,
    swap_seats_use_case,
    transfer_seats_use_case,
    patch_ticket_use_case,
    delete_booking_use_case,
    register_trip_use_case,
    rename_seat_use_case,
    record_payment_adjustment_use_case,
    run_seat_reconciliation_use_case,
    run_payment_cleanup_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    get_booking_history_use_case,
    list_payments_use_case,
    get_trip_use_case,
]
