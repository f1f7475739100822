from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.platform.types import UtilsUUID7
from src.service.ledger.app.dto.booking_command_dto import (
    BookingItemInput,
    SeatTransferPair,
    TicketPatch,
)
from src.service.ledger.app.dto.booking_view import BookingView
from src.service.ledger.domain.entity.booking_entity import BookingItem
from src.service.ledger.domain.entity.booking_history_entity import BookingHistory
from src.service.ledger.domain.entity.ticket_entity import Ticket
from src.service.ledger.domain.enum.booking_status import BookingStatus
from src.service.ledger.domain.enum.ticket_action import TicketAction
from src.service.ledger.domain.enum.ticket_status import TicketStatus
from src.service.ledger.domain.value_object.passenger import Passenger
from src.service.ledger.domain.value_object.payment_amount import PaymentAmount
from src.service.ledger.domain.value_object.ticket_draft import TicketDraft
from src.service.ledger.driving_adapter.http_controller.schema.trip_schema import TripResponse


class PassengerSchema(BaseModel):
    name: str = ''
    phone: str = ''
    email: Optional[str] = None
    note: Optional[str] = None
    pickup_point: Optional[str] = None
    dropoff_point: Optional[str] = None

    def to_value(self) -> Passenger:
        return Passenger(**self.model_dump())

    @classmethod
    def from_value(cls, passenger: Passenger) -> 'PassengerSchema':
        return cls(
            name=passenger.name,
            phone=passenger.phone,
            email=passenger.email,
            note=passenger.note,
            pickup_point=passenger.pickup_point,
            dropoff_point=passenger.dropoff_point,
        )


class PaymentAmountSchema(BaseModel):
    paid_cash: int = 0
    paid_transfer: int = 0

    def to_value(self) -> PaymentAmount:
        return PaymentAmount(cash=self.paid_cash, transfer=self.paid_transfer)


class TicketDraftSchema(BaseModel):
    seat_id: str
    price: Optional[int] = None
    status: Optional[TicketStatus] = None
    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    note: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    exact_bed: Optional[bool] = None

    def to_value(self) -> TicketDraft:
        return TicketDraft(**self.model_dump())


class BookingItemRequest(BaseModel):
    trip_id: UtilsUUID7
    seat_ids: List[str] = []
    tickets: Optional[List[TicketDraftSchema]] = None

    def to_input(self) -> BookingItemInput:
        return BookingItemInput(
            trip_id=self.trip_id,
            seat_ids=list(self.seat_ids),
            tickets=[ticket.to_value() for ticket in self.tickets] if self.tickets else None,
        )


class BookingWriteRequest(BaseModel):
    """Body of create and full update"""

    items: List[BookingItemRequest]
    passenger: PassengerSchema
    payment: Optional[PaymentAmountSchema] = None
    status: Optional[TicketStatus] = None

    class Config:
        json_schema_extra = {
            'example': {
                'items': [
                    {
                        'trip_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                        'seat_ids': ['1-0-0', '1-0-1'],
                        'tickets': [
                            {'seat_id': '1-0-0', 'price': 100000},
                            {'seat_id': '1-0-1', 'price': 200000},
                        ],
                    }
                ],
                'passenger': {'name': 'Nguyễn Văn A', 'phone': '0901234567'},
                'payment': {'paid_cash': 300000, 'paid_transfer': 0},
                'status': 'payment',
            }
        }


class TicketPatchRequest(BaseModel):
    trip_id: Optional[UtilsUUID7] = None
    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    note: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    exact_bed: Optional[bool] = None
    action: Optional[TicketAction] = None
    payment: Optional[PaymentAmountSchema] = None

    class Config:
        json_schema_extra = {
            'examples': [
                {'pickup': 'Bến xe Miền Đông', 'phone': '0901234567'},
                {'action': 'PAY', 'payment': {'paid_cash': 150000, 'paid_transfer': 0}},
                {'action': 'REFUND'},
            ]
        }

    def to_patch(self) -> TicketPatch:
        return TicketPatch(
            pickup=self.pickup,
            dropoff=self.dropoff,
            note=self.note,
            name=self.name,
            phone=self.phone,
            exact_bed=self.exact_bed,
        )


class SeatPairSchema(BaseModel):
    source_seat_id: str
    target_seat_id: str


class SeatTransferRequest(BaseModel):
    from_trip_id: UtilsUUID7
    to_trip_id: UtilsUUID7
    seat_pairs: List[SeatPairSchema] = Field(min_length=1)

    class Config:
        json_schema_extra = {
            'example': {
                'from_trip_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'to_trip_id': '01936d8f-6a10-7c4e-a9c5-123456789def',
                'seat_pairs': [{'source_seat_id': '1-0-0', 'target_seat_id': '1-2-1'}],
            }
        }

    def to_pairs(self) -> List[SeatTransferPair]:
        return [
            SeatTransferPair(source_seat_id=pair.source_seat_id, target_seat_id=pair.target_seat_id)
            for pair in self.seat_pairs
        ]


class TicketResponse(BaseModel):
    seat_id: str
    price: int
    status: TicketStatus
    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    note: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    exact_bed: bool = False

    @classmethod
    def from_entity(cls, ticket: Ticket) -> 'TicketResponse':
        return cls(
            seat_id=ticket.seat_id,
            price=ticket.price,
            status=ticket.status,
            pickup=ticket.pickup,
            dropoff=ticket.dropoff,
            note=ticket.note,
            name=ticket.name,
            phone=ticket.phone,
            exact_bed=ticket.exact_bed,
        )


class BookingItemResponse(BaseModel):
    trip_id: UtilsUUID7
    trip_date: str
    route: str
    license_plate: str
    price: int
    tickets: List[TicketResponse]

    @classmethod
    def from_entity(cls, item: BookingItem) -> 'BookingItemResponse':
        return cls(
            trip_id=item.trip_id,
            trip_date=item.trip_date,
            route=item.route,
            license_plate=item.license_plate,
            price=item.price,
            tickets=[TicketResponse.from_entity(ticket) for ticket in item.tickets],
        )


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'status': 'payment',
                'total_price': 300000,
                'total_tickets': 2,
                'paid_cash': 300000,
                'paid_transfer': 0,
                'total_paid': 300000,
                'passenger': {'name': 'Nguyễn Văn A', 'phone': '0901234567'},
                'items': [],
                'created_at': '2025-01-10T10:30:00',
                'updated_at': '2025-01-10T10:30:00',
            }
        },
    }

    id: UtilsUUID7  # UUID7
    status: BookingStatus
    total_price: int
    total_tickets: int
    paid_cash: int
    paid_transfer: int
    total_paid: int
    passenger: PassengerSchema
    items: List[BookingItemResponse]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_view(cls, view: BookingView) -> 'BookingResponse':
        booking = view.booking
        return cls(
            id=booking.id,
            status=view.status,
            total_price=booking.total_price,
            total_tickets=booking.total_tickets,
            paid_cash=view.paid.cash,
            paid_transfer=view.paid.transfer,
            total_paid=view.total_paid,
            passenger=PassengerSchema.from_value(booking.passenger),
            items=[BookingItemResponse.from_entity(item) for item in booking.items],
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookingMutationResponse(BaseModel):
    booking: BookingResponse
    updated_trips: List[TripResponse]


class BookingDeletionResponse(BaseModel):
    trips: List[TripResponse]
    bookings: List[BookingResponse]


class SeatSwapResponse(BaseModel):
    bookings: List[BookingResponse]
    trips: List[TripResponse]


class SeatTransferResponse(BaseModel):
    ok: bool
    booking: BookingResponse


class BookingHistoryResponse(BaseModel):
    id: UtilsUUID7  # UUID7
    booking_id: UtilsUUID7
    action: str
    description: str
    details: Dict[str, Any]
    timestamp: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entry: BookingHistory) -> 'BookingHistoryResponse':
        return cls(
            id=entry.id,
            booking_id=entry.booking_id,
            action=str(entry.action),
            description=entry.description,
            details=entry.details,
            timestamp=entry.timestamp,
        )
