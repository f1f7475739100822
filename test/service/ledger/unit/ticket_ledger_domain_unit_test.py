"""
Unit tests for ticket building and booking aggregates

Test Coverage:
1. build_item_tickets: itemized drafts, unpriced paid seats, detail fallbacks
2. diff_seat_ids ordering
3. Booking price/count caches and empty item pruning
"""

import pytest

from src.platform.exception.exceptions import DomainError, ValidationError
from src.service.ledger.domain.entity.booking_entity import Booking
from src.service.ledger.domain.entity.ticket_entity import Ticket
from src.service.ledger.domain.enum.ticket_status import TicketStatus
from src.service.ledger.domain.ledger_exceptions import MissingTicketDetailError
from src.service.ledger.domain.ticket_ledger_domain import build_item_tickets, diff_seat_ids
from src.service.ledger.domain.value_object.ticket_draft import TicketDraft
from test.service.ledger.ledger_builders import PASSENGER, make_booking, make_trip, seat_id


pytestmark = pytest.mark.unit


class TestBuildItemTickets:
    def test_itemized_drafts_carry_their_prices(self):
        # Given
        drafts = [
            TicketDraft(seat_id=seat_id(0), price=100_000),
            TicketDraft(seat_id=seat_id(1), price=200_000, note='cửa sổ'),
        ]

        # When
        tickets = build_item_tickets(
            seat_ids=[], drafts=drafts, status=TicketStatus.PAYMENT, passenger=PASSENGER
        )

        # Then
        assert [(t.seat_id, t.price, t.status) for t in tickets] == [
            (seat_id(0), 100_000, TicketStatus.PAYMENT),
            (seat_id(1), 200_000, TicketStatus.PAYMENT),
        ]
        assert tickets[1].note == 'cửa sổ'

    def test_contact_fields_default_to_the_passenger(self):
        tickets = build_item_tickets(
            seat_ids=[seat_id(0)], drafts=None, status=TicketStatus.BOOKING, passenger=PASSENGER
        )

        assert tickets[0].price == 0
        assert tickets[0].name == PASSENGER.name
        assert tickets[0].phone == PASSENGER.phone
        assert tickets[0].pickup == PASSENGER.pickup_point
        assert tickets[0].dropoff == ''
        assert tickets[0].exact_bed is False

    def test_previous_ticket_details_survive_an_update(self):
        # Given: the seat already carries a note and a custom pickup
        trip = make_trip()
        booking = make_booking(trip, {seat_id(0): (0, TicketStatus.BOOKING)})
        previous = booking.items[0]
        previous.tickets[0].note = 'mang theo xe máy'
        previous.tickets[0].pickup = 'Ngã tư Hàng Xanh'

        # When
        tickets = build_item_tickets(
            seat_ids=[seat_id(0), seat_id(1)],
            drafts=None,
            status=TicketStatus.BOOKING,
            passenger=PASSENGER,
            previous=previous,
        )

        # Then
        assert tickets[0].note == 'mang theo xe máy'
        assert tickets[0].pickup == 'Ngã tư Hàng Xanh'
        assert tickets[1].pickup == PASSENGER.pickup_point

    def test_paid_booking_without_drafts_is_refused(self):
        with pytest.raises(MissingTicketDetailError):
            build_item_tickets(
                seat_ids=[seat_id(0)],
                drafts=None,
                status=TicketStatus.PAYMENT,
                passenger=PASSENGER,
            )

    def test_paid_draft_without_price_is_refused(self):
        with pytest.raises(MissingTicketDetailError, match='needs a price'):
            build_item_tickets(
                seat_ids=[],
                drafts=[TicketDraft(seat_id=seat_id(0))],
                status=TicketStatus.PAYMENT,
                passenger=PASSENGER,
            )

    def test_draft_status_overrides_the_booking_status(self):
        tickets = build_item_tickets(
            seat_ids=[],
            drafts=[
                TicketDraft(seat_id=seat_id(0), price=100_000),
                TicketDraft(seat_id=seat_id(1), price=0, status=TicketStatus.BOOKING),
            ],
            status=TicketStatus.PAYMENT,
            passenger=PASSENGER,
        )

        assert [t.status for t in tickets] == [TicketStatus.PAYMENT, TicketStatus.BOOKING]

    @pytest.mark.parametrize(
        'seat_ids,drafts,message',
        [
            ([seat_id(0), seat_id(0)], None, 'appears twice'),
            ([seat_id(1)], [TicketDraft(seat_id=seat_id(0), price=1)], 'different seats'),
            ([], [TicketDraft(seat_id=seat_id(0), price=-5)], 'negative'),
        ],
    )
    def test_invalid_requests(self, seat_ids, drafts, message):
        with pytest.raises(ValidationError, match=message):
            build_item_tickets(
                seat_ids=seat_ids, drafts=drafts, status=TicketStatus.BOOKING, passenger=PASSENGER
            )


class TestDiffSeatIds:
    def test_removed_added_kept(self):
        diff = diff_seat_ids(['a', 'b', 'c'], ['c', 'd', 'a'])

        assert diff.removed == ['b']
        assert diff.added == ['d']
        assert diff.kept == ['c', 'a']
        assert diff.is_empty is False

    def test_same_seats_is_empty(self):
        assert diff_seat_ids(['a', 'b'], ['b', 'a']).is_empty is True


class TestBookingAggregate:
    def test_create_needs_a_ticket(self):
        trip = make_trip()
        empty = make_booking(trip, {}, occupy=False).items

        with pytest.raises(DomainError, match='at least one ticket'):
            Booking.create(passenger=PASSENGER, items=empty)

    def test_caches_follow_ticket_changes(self):
        # Given
        trip = make_trip()
        booking = make_booking(
            trip,
            {seat_id(0): (100_000, TicketStatus.PAYMENT), seat_id(1): (200_000, TicketStatus.PAYMENT)},
        )
        item = booking.items[0]

        # When
        item.remove_ticket(seat_id(0))
        item.add_ticket(Ticket(seat_id=seat_id(3), price=50_000))
        booking.recompute_totals()

        # Then
        assert item.price == 250_000
        assert booking.total_price == 250_000
        assert booking.total_tickets == 2

    def test_prune_drops_empty_items(self):
        trip = make_trip()
        booking = make_booking(trip, {seat_id(0): (100_000, TicketStatus.BOOKING)})

        booking.items[0].remove_ticket(seat_id(0))
        booking.prune_empty_items()

        assert booking.items == []
        assert booking.total_price == 0
        assert booking.total_tickets == 0

    def test_duplicate_seat_in_one_item_is_refused(self):
        trip = make_trip()
        booking = make_booking(trip, {seat_id(0): (0, TicketStatus.BOOKING)})

        with pytest.raises(DomainError, match='already part'):
            booking.items[0].add_ticket(Ticket(seat_id=seat_id(0)))
