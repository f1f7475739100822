from typing import List, Optional

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.ledger.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.ledger.app.command.delete_booking_use_case import DeleteBookingUseCase
from src.service.ledger.app.command.patch_ticket_use_case import PatchTicketUseCase
from src.service.ledger.app.command.transfer_seats_use_case import TransferSeatsUseCase
from src.service.ledger.app.command.update_booking_use_case import UpdateBookingUseCase
from src.service.ledger.app.query.get_booking_history_use_case import GetBookingHistoryUseCase
from src.service.ledger.app.query.get_booking_use_case import GetBookingUseCase
from src.service.ledger.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.ledger.driving_adapter.http_controller.schema.booking_schema import (
    BookingDeletionResponse,
    BookingHistoryResponse,
    BookingMutationResponse,
    BookingResponse,
    BookingWriteRequest,
    SeatTransferRequest,
    SeatTransferResponse,
    TicketPatchRequest,
)
from src.service.ledger.driving_adapter.http_controller.schema.trip_schema import TripResponse


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingWriteRequest,
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingMutationResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('item_count', len(request.items))

        result = await use_case.execute(
            items=[item.to_input() for item in request.items],
            passenger=request.passenger.to_value(),
            payment=request.payment.to_value() if request.payment else None,
            status=request.status,
        )

        span.set_attribute('booking.id', str(result.booking.booking.id))
        return BookingMutationResponse(
            booking=BookingResponse.from_view(result.booking),
            updated_trips=[TripResponse.from_entity(trip) for trip in result.updated_trips],
        )


@router.get('')
@Logger.io
async def list_bookings(
    trip_id: Optional[UtilsUUID7] = None,
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    views = await use_case.execute(trip_id=trip_id)
    return [BookingResponse.from_view(view) for view in views]


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UtilsUUID7,
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    return BookingResponse.from_view(await use_case.execute(booking_id=booking_id))


@router.put('/{booking_id}')
@Logger.io
async def update_booking(
    booking_id: UtilsUUID7,
    request: BookingWriteRequest,
    use_case: UpdateBookingUseCase = Depends(UpdateBookingUseCase.depends),
) -> BookingMutationResponse:
    with tracer.start_as_current_span('controller.update_booking') as span:
        span.set_attribute('booking.id', str(booking_id))

        result = await use_case.execute(
            booking_id=booking_id,
            items=[item.to_input() for item in request.items],
            passenger=request.passenger.to_value(),
            payment=request.payment.to_value() if request.payment else None,
            status=request.status,
        )
        return BookingMutationResponse(
            booking=BookingResponse.from_view(result.booking),
            updated_trips=[TripResponse.from_entity(trip) for trip in result.updated_trips],
        )


@router.delete('/{booking_id}')
@Logger.io
async def delete_booking(
    booking_id: UtilsUUID7,
    use_case: DeleteBookingUseCase = Depends(DeleteBookingUseCase.depends),
) -> BookingDeletionResponse:
    with tracer.start_as_current_span('controller.delete_booking') as span:
        span.set_attribute('booking.id', str(booking_id))

        result = await use_case.execute(booking_id=booking_id)
        return BookingDeletionResponse(
            trips=[TripResponse.from_entity(trip) for trip in result.trips],
            bookings=[BookingResponse.from_view(view) for view in result.bookings],
        )


@router.patch('/{booking_id}/tickets/{seat_id}')
@Logger.io
async def patch_ticket(
    booking_id: UtilsUUID7,
    seat_id: str,
    request: TicketPatchRequest,
    use_case: PatchTicketUseCase = Depends(PatchTicketUseCase.depends),
) -> BookingMutationResponse:
    with tracer.start_as_current_span('controller.patch_ticket') as span:
        span.set_attribute('booking.id', str(booking_id))
        span.set_attribute('seat_id', seat_id)
        if request.action:
            span.set_attribute('action', str(request.action))

        result = await use_case.execute(
            booking_id=booking_id,
            seat_id=seat_id,
            patch=request.to_patch(),
            action=request.action,
            payment=request.payment.to_value() if request.payment else None,
            trip_id=request.trip_id,
        )
        return BookingMutationResponse(
            booking=BookingResponse.from_view(result.booking),
            updated_trips=[TripResponse.from_entity(trip) for trip in result.updated_trips],
        )


@router.post('/{booking_id}/transfer')
@Logger.io
async def transfer_seats(
    booking_id: UtilsUUID7,
    request: SeatTransferRequest,
    use_case: TransferSeatsUseCase = Depends(TransferSeatsUseCase.depends),
) -> SeatTransferResponse:
    with tracer.start_as_current_span('controller.transfer_seats') as span:
        span.set_attribute('booking.id', str(booking_id))
        span.set_attribute('seat_count', len(request.seat_pairs))

        result = await use_case.execute(
            booking_id=booking_id,
            from_trip_id=request.from_trip_id,
            to_trip_id=request.to_trip_id,
            seat_pairs=request.to_pairs(),
        )
        return SeatTransferResponse(ok=result.ok, booking=BookingResponse.from_view(result.booking))


@router.get('/{booking_id}/history')
@Logger.io
async def get_booking_history(
    booking_id: UtilsUUID7,
    use_case: GetBookingHistoryUseCase = Depends(GetBookingHistoryUseCase.depends),
) -> List[BookingHistoryResponse]:
    entries = await use_case.execute(booking_id=booking_id)
    return [BookingHistoryResponse.from_entity(entry) for entry in entries]
