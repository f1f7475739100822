"""
Unit tests for PatchTicketUseCase

Test Coverage:
1. Contact field edits, mirrored onto the passenger of single-seat bookings
2. PAY: seat priced and sold, incremental entry appended
3. REFUND: paid seat removed with a negative entry, unpaid seat simply removed
4. Refusals leave the ledger untouched
"""

import pytest

from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.service.ledger.app.command.patch_ticket_use_case import PatchTicketUseCase
from src.service.ledger.app.dto.booking_command_dto import TicketPatch
from src.service.ledger.domain.enum.booking_status import BookingStatus
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.enum.payment_kind import PaymentType, TransactionType
from src.service.ledger.domain.enum.seat_status import SeatStatus
from src.service.ledger.domain.enum.ticket_action import TicketAction
from src.service.ledger.domain.enum.ticket_status import TicketStatus
from src.service.ledger.domain.ledger_exceptions import TicketNotFoundError
from src.service.ledger.domain.payment_ledger import total_paid
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount
from test.service.ledger.ledger_builders import make_booking, make_payment, make_trip, seat_id


pytestmark = pytest.mark.unit


class TestPatchTicketFields:
    @pytest.fixture(autouse=True)
    def _setup(self, ledger_store, uow):
        self.store = ledger_store
        self.use_case = PatchTicketUseCase(uow=uow)
        self.trip = ledger_store.put_trip(make_trip())

    def _seed(self, tickets):
        trip = self.store.trip(self.trip.id)
        booking = make_booking(trip, tickets)
        self.store.put_trip(trip)
        self.store.put_booking(booking)
        return booking

    @pytest.mark.asyncio
    async def test_single_seat_booking_mirrors_contact_fields(self):
        # Given
        booking = self._seed({seat_id(0): (0, TicketStatus.BOOKING)})

        # When
        result = await self.use_case.execute(
            booking_id=booking.id,
            seat_id=seat_id(0),
            patch=TicketPatch(pickup='Ngã tư Hàng Xanh', phone='0912000111'),
        )

        # Then
        stored = self.store.booking(booking.id)
        ticket = stored.all_tickets()[0]
        assert ticket.pickup == 'Ngã tư Hàng Xanh'
        assert ticket.phone == '0912000111'
        assert stored.passenger.pickup_point == 'Ngã tư Hàng Xanh'
        assert stored.passenger.phone == '0912000111'
        assert result.payment is None

        entry = self.store.history_of(booking.id)[-1]
        assert entry.action == HistoryAction.PASSENGER_UPDATE
        assert entry.details['changes'] == {'pickup': 'Ngã tư Hàng Xanh', 'phone': '0912000111'}

    @pytest.mark.asyncio
    async def test_multi_seat_booking_keeps_the_passenger(self):
        booking = self._seed(
            {seat_id(0): (0, TicketStatus.BOOKING), seat_id(1): (0, TicketStatus.BOOKING)}
        )

        await self.use_case.execute(
            booking_id=booking.id, seat_id=seat_id(1), patch=TicketPatch(name='Trần Thị B')
        )

        stored = self.store.booking(booking.id)
        assert stored.items[0].find_ticket(seat_id(1)).name == 'Trần Thị B'
        assert stored.passenger.name == booking.passenger.name

    @pytest.mark.asyncio
    async def test_exact_bed_is_only_an_annotation(self):
        booking = self._seed({seat_id(0): (0, TicketStatus.BOOKING)})

        await self.use_case.execute(
            booking_id=booking.id, seat_id=seat_id(0), patch=TicketPatch(exact_bed=True)
        )

        ticket = self.store.booking(booking.id).all_tickets()[0]
        assert ticket.exact_bed is True
        assert ticket.status == TicketStatus.BOOKING
        assert self.store.trip(self.trip.id).seat(seat_id(0)).status == SeatStatus.BOOKED

    @pytest.mark.asyncio
    async def test_empty_patch_is_refused(self):
        booking = self._seed({seat_id(0): (0, TicketStatus.BOOKING)})

        with pytest.raises(ValidationError, match='Nothing to update'):
            await self.use_case.execute(
                booking_id=booking.id, seat_id=seat_id(0), patch=TicketPatch()
            )

    @pytest.mark.asyncio
    async def test_seat_without_ticket(self):
        booking = self._seed({seat_id(0): (0, TicketStatus.BOOKING)})

        with pytest.raises(TicketNotFoundError):
            await self.use_case.execute(
                booking_id=booking.id, seat_id=seat_id(3), patch=TicketPatch(note='x')
            )

    @pytest.mark.asyncio
    async def test_unknown_booking(self):
        with pytest.raises(NotFoundError):
            await self.use_case.execute(
                booking_id=self.trip.id, seat_id=seat_id(0), patch=TicketPatch(note='x')
            )


class TestPaySeat:
    @pytest.fixture(autouse=True)
    def _setup(self, ledger_store, uow):
        self.store = ledger_store
        self.use_case = PatchTicketUseCase(uow=uow)

        trip = make_trip()
        self.booking = make_booking(
            trip, {seat_id(0): (0, TicketStatus.BOOKING), seat_id(1): (0, TicketStatus.BOOKING)}
        )
        self.trip = ledger_store.put_trip(trip)
        ledger_store.put_booking(self.booking)

    @pytest.mark.asyncio
    async def test_pay_one_seat(self):
        # When
        result = await self.use_case.execute(
            booking_id=self.booking.id,
            seat_id=seat_id(1),
            action=TicketAction.PAY,
            payment=PaymentAmount(transfer=180_000),
        )

        # Then: the seat is priced and sold
        stored = self.store.booking(self.booking.id)
        ticket = stored.items[0].find_ticket(seat_id(1))
        assert ticket.price == 180_000
        assert ticket.status == TicketStatus.PAYMENT
        assert stored.total_price == 180_000
        assert self.store.trip(self.trip.id).seat(seat_id(1)).status == SeatStatus.SOLD
        assert self.store.trip(self.trip.id).seat(seat_id(0)).status == SeatStatus.BOOKED

        # And: one incremental entry for that seat
        payments = self.store.payments_of(self.booking.id)
        assert len(payments) == 1
        assert payments[0].transaction_type == TransactionType.INCREMENTAL
        assert payments[0].transfer_amount == 180_000
        assert payments[0].details.labels == ['A2']

        assert result.booking.status == BookingStatus.PAYMENT
        assert self.store.history_of(self.booking.id)[-1].action == HistoryAction.PAY_SEAT

    @pytest.mark.asyncio
    @pytest.mark.parametrize('payment', [None, PaymentAmount(), PaymentAmount(cash=-5)])
    async def test_pay_needs_a_positive_amount(self, payment):
        with pytest.raises(ValidationError, match='positive'):
            await self.use_case.execute(
                booking_id=self.booking.id,
                seat_id=seat_id(0),
                action=TicketAction.PAY,
                payment=payment,
            )

        assert self.store.payments_of(self.booking.id) == []


class TestRefundSeat:
    @pytest.fixture(autouse=True)
    def _setup(self, ledger_store, uow):
        self.store = ledger_store
        self.use_case = PatchTicketUseCase(uow=uow)

        trip = make_trip()
        self.booking = make_booking(
            trip,
            {seat_id(0): (100_000, TicketStatus.PAYMENT), seat_id(1): (150_000, TicketStatus.PAYMENT)},
        )
        self.trip = ledger_store.put_trip(trip)
        ledger_store.put_booking(self.booking)
        ledger_store.put_payment(make_payment(self.booking, cash=250_000))

    @pytest.mark.asyncio
    async def test_refund_one_paid_seat(self):
        """Refunding the 150k seat of a 250k booking leaves 100k paid"""
        # When
        result = await self.use_case.execute(
            booking_id=self.booking.id, seat_id=seat_id(1), action=TicketAction.REFUND
        )

        # Then: the seat left the booking and the trip
        stored = self.store.booking(self.booking.id)
        assert stored.items[0].seat_ids == [seat_id(0)]
        assert stored.total_price == 100_000
        assert self.store.trip(self.trip.id).seat(seat_id(1)).status == SeatStatus.AVAILABLE

        # And: a negative incremental entry was appended
        payments = self.store.payments_of(self.booking.id)
        assert len(payments) == 2
        refund = payments[-1]
        assert refund.type == PaymentType.REFUND
        assert refund.transaction_type == TransactionType.INCREMENTAL
        assert refund.cash_amount == -150_000
        assert total_paid(payments) == 100_000

        assert result.booking.status == BookingStatus.PAYMENT
        assert self.store.history_of(self.booking.id)[-1].action == HistoryAction.REFUND_SEAT

    @pytest.mark.asyncio
    async def test_refund_split_between_cash_and_transfer(self):
        await self.use_case.execute(
            booking_id=self.booking.id,
            seat_id=seat_id(1),
            action=TicketAction.REFUND,
            payment=PaymentAmount(cash=50_000, transfer=100_000),
        )

        refund = self.store.payments_of(self.booking.id)[-1]
        assert refund.amount == PaymentAmount(cash=-50_000, transfer=-100_000)

    @pytest.mark.asyncio
    async def test_refund_split_must_match_the_price(self):
        # When
        with pytest.raises(ValidationError, match='does not match'):
            await self.use_case.execute(
                booking_id=self.booking.id,
                seat_id=seat_id(1),
                action=TicketAction.REFUND,
                payment=PaymentAmount(cash=100_000),
            )

        # Then: nothing moved
        assert self.store.booking(self.booking.id).total_tickets == 2
        assert len(self.store.payments_of(self.booking.id)) == 1
        assert self.store.trip(self.trip.id).seat(seat_id(1)).status == SeatStatus.SOLD

    @pytest.mark.asyncio
    async def test_refund_of_the_last_seat_cancels(self):
        # Given: one seat already refunded
        await self.use_case.execute(
            booking_id=self.booking.id, seat_id=seat_id(1), action=TicketAction.REFUND
        )

        # When
        result = await self.use_case.execute(
            booking_id=self.booking.id, seat_id=seat_id(0), action=TicketAction.REFUND
        )

        # Then
        assert result.booking.status == BookingStatus.CANCELLED
        assert total_paid(self.store.payments_of(self.booking.id)) == 0

    @pytest.mark.asyncio
    async def test_unpaid_seat_is_removed_without_money(self):
        # Given
        trip = self.store.trip(self.trip.id)
        unpaid = make_booking(
            trip, {seat_id(3): (0, TicketStatus.BOOKING), seat_id(4): (0, TicketStatus.BOOKING)}
        )
        self.store.put_trip(trip)
        self.store.put_booking(unpaid)

        # When
        result = await self.use_case.execute(
            booking_id=unpaid.id, seat_id=seat_id(3), action=TicketAction.REFUND
        )

        # Then
        assert result.payment is None
        assert self.store.payments_of(unpaid.id) == []
        assert self.store.trip(self.trip.id).seat(seat_id(3)).status == SeatStatus.AVAILABLE
        assert self.store.history_of(unpaid.id)[-1].action == HistoryAction.CANCEL
