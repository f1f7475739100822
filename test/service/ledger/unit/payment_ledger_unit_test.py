"""
Unit tests for payment ledger arithmetic

Test Coverage:
1. Summing signed entries into cash/transfer totals
2. Snapshot deltas: written only on change, signed, labelled by seat
3. Incremental entries for single-seat pay and refund
"""

import pytest

from src.service.ledger.domain.entity.payment_entity import resolve_payment_method
from src.service.ledger.domain.enum.payment_kind import PaymentMethod, PaymentType, TransactionType
from src.service.ledger.domain.enum.ticket_status import TicketStatus
from src.service.ledger.domain.payment_ledger import (
    build_incremental_entry,
    build_snapshot_delta,
    summarize_payments,
    total_paid,
)
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount
from test.service.ledger.ledger_builders import make_booking, make_payment, make_trip, seat_id


pytestmark = pytest.mark.unit


class TestSummarizePayments:
    def test_empty_ledger_is_zero(self):
        assert summarize_payments([]) == PaymentAmount()
        assert total_paid([]) == 0

    def test_refunds_are_subtracted(self):
        # Given
        trip = make_trip()
        booking = make_booking(trip, {seat_id(0): (300_000, TicketStatus.PAYMENT)})
        payments = [
            make_payment(booking, cash=200_000, transfer=100_000),
            make_payment(booking, cash=-150_000),
        ]

        # When
        summary = summarize_payments(payments)

        # Then
        assert summary == PaymentAmount(cash=50_000, transfer=100_000)
        assert total_paid(payments) == 150_000


class TestSnapshotDelta:
    def setup_method(self):
        self.trip = make_trip()
        self.booking = make_booking(
            self.trip,
            {seat_id(0): (100_000, TicketStatus.PAYMENT), seat_id(1): (200_000, TicketStatus.PAYMENT)},
        )

    def test_unchanged_total_writes_nothing(self):
        amount = PaymentAmount(cash=300_000)

        entry = build_snapshot_delta(booking=self.booking, current=amount, requested=amount)

        assert entry is None

    def test_first_payment_records_the_full_amount(self):
        # When
        entry = build_snapshot_delta(
            booking=self.booking,
            current=PaymentAmount(),
            requested=PaymentAmount(cash=300_000),
            trips=[self.trip],
        )

        # Then
        assert entry is not None
        assert entry.cash_amount == 300_000
        assert entry.transfer_amount == 0
        assert entry.type == PaymentType.PAYMENT
        assert entry.transaction_type == TransactionType.SNAPSHOT
        assert entry.method == PaymentMethod.CASH
        assert entry.note == 'Thanh toán (02 vé) A1 A2'
        assert entry.details.labels == ['A1', 'A2']
        assert entry.details.route == self.trip.route

    def test_lower_requested_total_is_a_refund(self):
        entry = build_snapshot_delta(
            booking=self.booking,
            current=PaymentAmount(cash=300_000, transfer=100_000),
            requested=PaymentAmount(cash=300_000),
        )

        assert entry is not None
        assert entry.type == PaymentType.REFUND
        assert entry.amount == PaymentAmount(transfer=-100_000)
        assert entry.note.startswith('Hoàn tiền')

    def test_ledger_sum_follows_every_requested_total(self):
        """Appending each delta keeps sum(entries) equal to the last requested total"""
        # Given
        requested_sequence = [
            PaymentAmount(cash=300_000),
            PaymentAmount(cash=100_000, transfer=200_000),
            PaymentAmount(cash=100_000, transfer=200_000),
            PaymentAmount(),
            PaymentAmount(transfer=50_000),
        ]
        ledger = []

        # When
        for requested in requested_sequence:
            entry = build_snapshot_delta(
                booking=self.booking, current=summarize_payments(ledger), requested=requested
            )
            if entry is not None:
                ledger.append(entry)

            # Then
            assert summarize_payments(ledger) == requested

        # The unchanged step wrote no row
        assert len(ledger) == 4


class TestIncrementalEntry:
    def test_refund_of_one_seat(self):
        # Given
        trip = make_trip()
        booking = make_booking(trip, {seat_id(2): (150_000, TicketStatus.PAYMENT)})

        # When
        entry = build_incremental_entry(
            booking_id=booking.id,
            amount=PaymentAmount(cash=-150_000),
            trip=trip,
            seat_id=seat_id(2),
        )

        # Then
        assert entry.transaction_type == TransactionType.INCREMENTAL
        assert entry.type == PaymentType.REFUND
        assert entry.total_amount == -150_000
        assert entry.note == 'Hoàn tiền ghế A3'
        assert entry.details.seats == [seat_id(2)]
        assert entry.details.trip_date == trip.trip_date


class TestResolvePaymentMethod:
    @pytest.mark.parametrize(
        'amount,expected',
        [
            (PaymentAmount(cash=10), PaymentMethod.CASH),
            (PaymentAmount(transfer=10), PaymentMethod.TRANSFER),
            (PaymentAmount(cash=10, transfer=5), PaymentMethod.MIXED),
            (PaymentAmount(), PaymentMethod.CASH),
        ],
    )
    def test_method_from_split(self, amount, expected):
        assert resolve_payment_method(amount) == expected
