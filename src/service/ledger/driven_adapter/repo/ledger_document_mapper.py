"""
JSON document mapping for the JSONB columns.

Seat maps and booking items are stored as documents with camelCase keys, the
shape the booking dashboard reads directly.
"""

from typing import Any, Dict, List

from src.platform.types.uuid7_utils_types import to_uuid7
from src.service.ledger.domain.entity.booking_entity import BookingItem
from src.service.ledger.domain.entity.payment_entity import PaymentDetails
from src.service.ledger.domain.entity.seat_entity import Seat
from src.service.ledger.domain.entity.ticket_entity import Ticket
from src.service.ledger.domain.enum.bus_type import BusType
from src.service.ledger.domain.value_object.passenger import Passenger
from src.service.ledger.domain.value_object.seat_key import SeatKey


def seat_to_document(seat: Seat) -> Dict[str, Any]:
    return {
        'id': seat.id,
        'label': seat.label,
        'status': str(seat.status),
        'floor': seat.floor,
        'row': seat.row,
        'col': seat.col,
    }


def seat_from_document(doc: Dict[str, Any]) -> Seat:
    return Seat(
        key=SeatKey.parse(doc['id']),
        label=doc.get('label') or doc['id'],
        status=doc.get('status', 'available'),
        row=doc.get('row'),
        col=doc.get('col'),
    )


def ticket_to_document(ticket: Ticket) -> Dict[str, Any]:
    return {
        'seatId': ticket.seat_id,
        'price': ticket.price,
        'status': str(ticket.status),
        'pickup': ticket.pickup,
        'dropoff': ticket.dropoff,
        'note': ticket.note,
        'name': ticket.name,
        'phone': ticket.phone,
        'exactBed': ticket.exact_bed,
    }


def ticket_from_document(doc: Dict[str, Any]) -> Ticket:
    return Ticket(
        seat_id=doc['seatId'],
        price=int(doc.get('price') or 0),
        status=doc.get('status', 'booking'),
        pickup=doc.get('pickup'),
        dropoff=doc.get('dropoff'),
        note=doc.get('note'),
        name=doc.get('name'),
        phone=doc.get('phone'),
        exact_bed=bool(doc.get('exactBed', False)),
    )


def item_to_document(item: BookingItem) -> Dict[str, Any]:
    return {
        'tripId': str(item.trip_id),
        'tripDate': item.trip_date,
        'route': item.route,
        'licensePlate': item.license_plate,
        'busType': str(item.bus_type) if item.bus_type else None,
        'price': item.price,
        'tickets': [ticket_to_document(ticket) for ticket in item.tickets],
    }


def item_from_document(doc: Dict[str, Any]) -> BookingItem:
    # price is a stored cache, kept as read so the cleanup job can spot drift
    return BookingItem(
        trip_id=to_uuid7(doc['tripId']),
        trip_date=doc.get('tripDate', ''),
        route=doc.get('route', ''),
        license_plate=doc.get('licensePlate', ''),
        bus_type=BusType(doc['busType']) if doc.get('busType') else None,
        tickets=[ticket_from_document(ticket) for ticket in doc.get('tickets', [])],
        price=int(doc.get('price') or 0),
    )


def items_to_documents(items: List[BookingItem]) -> List[Dict[str, Any]]:
    return [item_to_document(item) for item in items]


def items_from_documents(docs: List[Dict[str, Any]]) -> List[BookingItem]:
    return [item_from_document(doc) for doc in docs or []]


def passenger_to_document(passenger: Passenger) -> Dict[str, Any]:
    return {
        'name': passenger.name,
        'phone': passenger.phone,
        'email': passenger.email,
        'note': passenger.note,
        'pickupPoint': passenger.pickup_point,
        'dropoffPoint': passenger.dropoff_point,
    }


def passenger_from_document(doc: Dict[str, Any]) -> Passenger:
    return Passenger(
        name=doc.get('name') or '',
        phone=doc.get('phone') or '',
        email=doc.get('email'),
        note=doc.get('note'),
        pickup_point=doc.get('pickupPoint'),
        dropoff_point=doc.get('dropoffPoint'),
    )


def payment_details_to_document(details: PaymentDetails) -> Dict[str, Any]:
    return {
        'seats': list(details.seats),
        'labels': list(details.labels),
        'tripDate': details.trip_date,
        'route': details.route,
        'licensePlate': details.license_plate,
    }


def payment_details_from_document(doc: Dict[str, Any]) -> PaymentDetails:
    return PaymentDetails(
        seats=list(doc.get('seats') or []),
        labels=list(doc.get('labels') or []),
        trip_date=doc.get('tripDate'),
        route=doc.get('route'),
        license_plate=doc.get('licensePlate'),
    )
