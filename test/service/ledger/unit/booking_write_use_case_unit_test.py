"""
Unit tests for CreateBookingUseCase, UpdateBookingUseCase and DeleteBookingUseCase

Test Coverage:
1. Create: itemized paid booking, hold booking, multi-trip booking, seat conflicts
2. Update: seat diff, payment delta, full cancellation, rollback on conflict
3. Delete: seats released, payments dropped, history kept
"""

import pytest

from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.service.ledger.app.command.create_booking_use_case import (
    CreateBookingUseCase,
    resolve_target_status,
)
from src.service.ledger.app.command.delete_booking_use_case import DeleteBookingUseCase
from src.service.ledger.app.command.update_booking_use_case import UpdateBookingUseCase
from src.service.ledger.app.dto.booking_command_dto import BookingItemInput
from src.service.ledger.domain.enum.booking_status import BookingStatus
from src.service.ledger.domain.enum.history_action import HistoryAction
from src.service.ledger.domain.enum.payment_kind import TransactionType
from src.service.ledger.domain.enum.seat_status import SeatStatus
from src.service.ledger.domain.enum.ticket_status import TicketStatus
from src.service.ledger.domain.ledger_exceptions import (
    MissingTicketDetailError,
    SeatNotFoundError,
    SeatUnavailableError,
)
from src.service.ledger.domain.payment_ledger import total_paid
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount
from src.service.ledger.domain.value_object.ticket_draft import TicketDraft
from test.service.ledger.ledger_builders import (
    PASSENGER,
    make_booking,
    make_payment,
    make_trip,
    seat_id,
)


pytestmark = pytest.mark.unit


class TestResolveTargetStatus:
    def test_explicit_status_wins(self):
        assert (
            resolve_target_status(TicketStatus.HOLD, PaymentAmount(cash=10)) == TicketStatus.HOLD
        )

    def test_money_implies_payment(self):
        assert resolve_target_status(None, PaymentAmount(transfer=1)) == TicketStatus.PAYMENT

    def test_no_money_implies_booking(self):
        assert resolve_target_status(None, PaymentAmount()) == TicketStatus.BOOKING


class TestCreateBooking:
    @pytest.fixture(autouse=True)
    def _setup(self, ledger_store, uow):
        self.store = ledger_store
        self.uow = uow
        self.trip = ledger_store.put_trip(make_trip())
        self.use_case = CreateBookingUseCase(uow=uow)

    @pytest.mark.asyncio
    async def test_itemized_paid_booking(self):
        """Two priced seats paid in cash: one ledger entry for the whole total"""
        # Given
        item = BookingItemInput(
            trip_id=self.trip.id,
            tickets=[
                TicketDraft(seat_id=seat_id(0), price=100_000),
                TicketDraft(seat_id=seat_id(1), price=200_000),
            ],
        )

        # When
        result = await self.use_case.execute(
            items=[item], passenger=PASSENGER, payment=PaymentAmount(cash=300_000)
        )

        # Then: the booking carries both priced tickets
        view = result.booking
        assert view.status == BookingStatus.PAYMENT
        assert view.booking.total_price == 300_000
        assert view.booking.total_tickets == 2
        assert view.total_paid == 300_000

        # And: both seats are sold
        trip = self.store.trip(self.trip.id)
        assert trip.seat(seat_id(0)).status == SeatStatus.SOLD
        assert trip.seat(seat_id(1)).status == SeatStatus.SOLD

        # And: exactly one snapshot entry of 300k
        payments = self.store.payments_of(view.booking.id)
        assert len(payments) == 1
        assert payments[0].cash_amount == 300_000
        assert payments[0].transaction_type == TransactionType.SNAPSHOT

        # And: one CREATE history entry
        history = self.store.history_of(view.booking.id)
        assert [entry.action for entry in history] == [HistoryAction.CREATE]
        assert history[0].details['totalPrice'] == 300_000
        assert history[0].details['items'][0]['seats'] == ['A1', 'A2']
        assert self.uow.commit_count == 1

    @pytest.mark.asyncio
    async def test_unpaid_booking_writes_no_payment(self):
        result = await self.use_case.execute(
            items=[BookingItemInput(trip_id=self.trip.id, seat_ids=[seat_id(2)])],
            passenger=PASSENGER,
        )

        assert result.booking.status == BookingStatus.BOOKING
        assert result.payment is None
        assert self.store.payments_of(result.booking.booking.id) == []
        assert self.store.trip(self.trip.id).seat(seat_id(2)).status == SeatStatus.BOOKED

    @pytest.mark.asyncio
    async def test_hold_booking_ignores_payment(self):
        # When
        result = await self.use_case.execute(
            items=[BookingItemInput(trip_id=self.trip.id, seat_ids=[seat_id(0)])],
            passenger=PASSENGER,
            payment=PaymentAmount(cash=100_000),
            status=TicketStatus.HOLD,
        )

        # Then
        assert result.booking.status == BookingStatus.HOLD
        assert self.store.payments_of(result.booking.booking.id) == []
        assert self.store.trip(self.trip.id).seat(seat_id(0)).status == SeatStatus.HELD

    @pytest.mark.asyncio
    async def test_booking_spanning_two_trips(self):
        # Given
        return_trip = self.store.put_trip(make_trip(route='Đà Lạt - Sài Gòn'))

        # When
        result = await self.use_case.execute(
            items=[
                BookingItemInput(trip_id=self.trip.id, seat_ids=[seat_id(0)]),
                BookingItemInput(trip_id=return_trip.id, seat_ids=[seat_id(3)]),
            ],
            passenger=PASSENGER,
        )

        # Then
        booking = self.store.booking(result.booking.booking.id)
        assert booking is not None
        assert [str(trip_id) for trip_id in booking.trip_ids] == [
            str(self.trip.id),
            str(return_trip.id),
        ]
        assert len(result.updated_trips) == 2
        assert self.store.trip(return_trip.id).seat(seat_id(3)).status == SeatStatus.BOOKED

    @pytest.mark.asyncio
    async def test_taken_seat_is_refused_and_nothing_is_written(self):
        # Given: A1 already booked by someone else
        trip = self.store.trip(self.trip.id)
        other = make_booking(trip, {seat_id(0): (0, TicketStatus.BOOKING)})
        self.store.put_trip(trip)
        self.store.put_booking(other)

        # When / Then
        with pytest.raises(SeatUnavailableError, match='A1'):
            await self.use_case.execute(
                items=[BookingItemInput(trip_id=self.trip.id, seat_ids=[seat_id(1), seat_id(0)])],
                passenger=PASSENGER,
            )

        assert len(self.store.bookings) == 1
        assert self.store.trip(self.trip.id).seat(seat_id(1)).status == SeatStatus.AVAILABLE
        assert self.uow.commit_count == 0

    @pytest.mark.asyncio
    async def test_paid_booking_without_prices_is_refused(self):
        with pytest.raises(MissingTicketDetailError):
            await self.use_case.execute(
                items=[BookingItemInput(trip_id=self.trip.id, seat_ids=[seat_id(0)])],
                passenger=PASSENGER,
                payment=PaymentAmount(cash=100_000),
            )

        assert self.store.bookings == {}

    @pytest.mark.asyncio
    async def test_unknown_seat(self):
        with pytest.raises(SeatNotFoundError):
            await self.use_case.execute(
                items=[BookingItemInput(trip_id=self.trip.id, seat_ids=['1-9-9'])],
                passenger=PASSENGER,
            )

    @pytest.mark.asyncio
    async def test_unknown_trip(self):
        with pytest.raises(NotFoundError, match='Trip'):
            await self.use_case.execute(
                items=[BookingItemInput(trip_id=make_trip().id, seat_ids=[seat_id(0)])],
                passenger=PASSENGER,
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize('repeat_trip', [True, False])
    async def test_invalid_item_lists(self, repeat_trip):
        items = (
            [
                BookingItemInput(trip_id=self.trip.id, seat_ids=[seat_id(0)]),
                BookingItemInput(trip_id=self.trip.id, seat_ids=[seat_id(1)]),
            ]
            if repeat_trip
            else []
        )

        with pytest.raises(ValidationError):
            await self.use_case.execute(items=items, passenger=PASSENGER)


class TestUpdateBooking:
    @pytest.fixture(autouse=True)
    def _setup(self, ledger_store, uow):
        self.store = ledger_store
        self.uow = uow
        self.use_case = UpdateBookingUseCase(uow=uow)

        trip = make_trip()
        self.booking = make_booking(trip, {seat_id(0): (0, TicketStatus.BOOKING)})
        self.trip = ledger_store.put_trip(trip)
        ledger_store.put_booking(self.booking)

    @pytest.mark.asyncio
    async def test_moving_to_other_seats(self):
        # When: A1 -> A2, A3
        result = await self.use_case.execute(
            booking_id=self.booking.id,
            items=[BookingItemInput(trip_id=self.trip.id, seat_ids=[seat_id(1), seat_id(2)])],
            passenger=PASSENGER,
        )

        # Then: the old seat is released, the new ones booked
        trip = self.store.trip(self.trip.id)
        assert trip.seat(seat_id(0)).status == SeatStatus.AVAILABLE
        assert trip.seat(seat_id(1)).status == SeatStatus.BOOKED
        assert trip.seat(seat_id(2)).status == SeatStatus.BOOKED
        assert result.booking.booking.total_tickets == 2
        assert result.payment is None

        # And: the history records the seat diff
        entry = self.store.history_of(self.booking.id)[-1]
        assert entry.action == HistoryAction.UPDATE
        change = entry.details['changes'][0]
        assert change['removed'] == ['A1']
        assert change['added'] == ['A2', 'A3']

    @pytest.mark.asyncio
    async def test_keeping_its_own_seat_is_not_a_conflict(self):
        result = await self.use_case.execute(
            booking_id=self.booking.id,
            items=[BookingItemInput(trip_id=self.trip.id, seat_ids=[seat_id(0), seat_id(1)])],
            passenger=PASSENGER,
        )

        assert [t.seat_id for t in result.booking.booking.all_tickets()] == [
            seat_id(0),
            seat_id(1),
        ]

    @pytest.mark.asyncio
    async def test_payment_moves_by_the_delta_only(self):
        # Given: A1 paid 100k
        paid_trip = make_trip()
        paid = make_booking(paid_trip, {seat_id(0): (100_000, TicketStatus.PAYMENT)})
        self.store.put_trip(paid_trip)
        self.store.put_booking(paid)
        self.store.put_payment(make_payment(paid, cash=100_000))

        # When: add A2 at 150k, total paid becomes 250k
        result = await self.use_case.execute(
            booking_id=paid.id,
            items=[
                BookingItemInput(
                    trip_id=paid_trip.id,
                    tickets=[
                        TicketDraft(seat_id=seat_id(0), price=100_000),
                        TicketDraft(seat_id=seat_id(1), price=150_000),
                    ],
                )
            ],
            passenger=PASSENGER,
            payment=PaymentAmount(cash=100_000, transfer=150_000),
        )

        # Then
        assert result.payment is not None
        assert result.payment.amount == PaymentAmount(transfer=150_000)
        assert total_paid(self.store.payments_of(paid.id)) == 250_000
        assert result.booking.status == BookingStatus.PAYMENT
        assert self.store.history_of(paid.id)[-1].details['paymentDelta'] == 150_000

    @pytest.mark.asyncio
    async def test_paid_booking_needs_prices_when_payment_is_omitted(self):
        """Without a payment the paid-in total is kept, so the seats stay paid"""
        # Given
        paid_trip = make_trip()
        paid = make_booking(paid_trip, {seat_id(0): (100_000, TicketStatus.PAYMENT)})
        self.store.put_trip(paid_trip)
        self.store.put_booking(paid)
        self.store.put_payment(make_payment(paid, cash=100_000))

        # When / Then
        with pytest.raises(MissingTicketDetailError):
            await self.use_case.execute(
                booking_id=paid.id,
                items=[BookingItemInput(trip_id=paid_trip.id, seat_ids=[seat_id(1)])],
                passenger=PASSENGER,
            )

        # And: the seat map is untouched
        assert self.store.trip(paid_trip.id).seat(seat_id(0)).status == SeatStatus.SOLD

    @pytest.mark.asyncio
    async def test_hold_update_leaves_the_payment_ledger_alone(self):
        # Given: A1 paid 100k
        paid_trip = make_trip()
        paid = make_booking(paid_trip, {seat_id(0): (100_000, TicketStatus.PAYMENT)})
        self.store.put_trip(paid_trip)
        self.store.put_booking(paid)
        self.store.put_payment(make_payment(paid, cash=100_000))

        # When: turned into a hold with a different amount
        result = await self.use_case.execute(
            booking_id=paid.id,
            items=[BookingItemInput(trip_id=paid_trip.id, seat_ids=[seat_id(0)])],
            passenger=PASSENGER,
            payment=PaymentAmount(cash=250_000, transfer=50_000),
            status=TicketStatus.HOLD,
        )

        # Then: no entry appended, the ledger total is unchanged
        assert result.payment is None
        payments = self.store.payments_of(paid.id)
        assert len(payments) == 1
        assert total_paid(payments) == 100_000
        assert self.store.history_of(paid.id)[-1].details['paymentDelta'] == 0

        # And: the seat is held
        assert self.store.trip(paid_trip.id).seat(seat_id(0)).status == SeatStatus.HELD
        assert self.store.booking(paid.id).all_tickets()[0].status == TicketStatus.HOLD

    @pytest.mark.asyncio
    async def test_removing_every_seat_cancels(self):
        # When
        result = await self.use_case.execute(
            booking_id=self.booking.id, items=[], passenger=PASSENGER
        )

        # Then
        assert result.booking.status == BookingStatus.CANCELLED
        assert result.booking.booking.total_tickets == 0
        assert self.store.trip(self.trip.id).seat(seat_id(0)).status == SeatStatus.AVAILABLE
        assert self.store.history_of(self.booking.id)[-1].action == HistoryAction.CANCEL

    @pytest.mark.asyncio
    async def test_seat_of_another_booking_rolls_everything_back(self):
        # Given: A2 belongs to another booking
        trip = self.store.trip(self.trip.id)
        other = make_booking(trip, {seat_id(1): (0, TicketStatus.BOOKING)})
        self.store.put_trip(trip)
        self.store.put_booking(other)

        # When
        with pytest.raises(SeatUnavailableError):
            await self.use_case.execute(
                booking_id=self.booking.id,
                items=[BookingItemInput(trip_id=self.trip.id, seat_ids=[seat_id(1)])],
                passenger=PASSENGER,
            )

        # Then: A1 is still held by the original booking
        assert self.store.trip(self.trip.id).seat(seat_id(0)).status == SeatStatus.BOOKED
        stored = self.store.booking(self.booking.id)
        assert stored is not None
        assert stored.all_tickets()[0].seat_id == seat_id(0)

    @pytest.mark.asyncio
    async def test_unknown_booking(self):
        with pytest.raises(NotFoundError, match='Booking'):
            await self.use_case.execute(
                booking_id=make_trip().id, items=[], passenger=PASSENGER
            )


class TestDeleteBooking:
    @pytest.fixture(autouse=True)
    def _setup(self, ledger_store, uow):
        self.store = ledger_store
        self.use_case = DeleteBookingUseCase(uow=uow)

        trip = make_trip()
        self.booking = make_booking(
            trip,
            {seat_id(0): (100_000, TicketStatus.PAYMENT), seat_id(1): (100_000, TicketStatus.PAYMENT)},
        )
        self.neighbour = make_booking(trip, {seat_id(4): (0, TicketStatus.BOOKING)})
        self.trip = ledger_store.put_trip(trip)
        ledger_store.put_booking(self.booking)
        ledger_store.put_booking(self.neighbour)
        ledger_store.put_payment(make_payment(self.booking, cash=200_000))

    @pytest.mark.asyncio
    async def test_delete_releases_seats_and_drops_payments(self):
        # When
        result = await self.use_case.execute(booking_id=self.booking.id)

        # Then
        assert self.store.booking(self.booking.id) is None
        assert self.store.payments_of(self.booking.id) == []
        assert result.deleted_payment_count == 1

        trip = self.store.trip(self.trip.id)
        assert trip.seat(seat_id(0)).status == SeatStatus.AVAILABLE
        assert trip.seat(seat_id(1)).status == SeatStatus.AVAILABLE
        assert trip.seat(seat_id(4)).status == SeatStatus.BOOKED

        # And: the remaining bookings of the trip are returned
        assert [str(view.booking.id) for view in result.bookings] == [str(self.neighbour.id)]

    @pytest.mark.asyncio
    async def test_history_survives_the_booking(self):
        await self.use_case.execute(booking_id=self.booking.id)

        history = self.store.history_of(self.booking.id)
        assert [entry.action for entry in history] == [HistoryAction.DELETE]
        assert history[0].details['deletedPayments'] == 1

    @pytest.mark.asyncio
    async def test_unknown_booking(self):
        with pytest.raises(NotFoundError):
            await self.use_case.execute(booking_id=self.trip.id)
