from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.ledger.app.command.register_trip_use_case import RegisterTripUseCase
from src.service.ledger.app.command.rename_seat_use_case import RenameSeatUseCase
from src.service.ledger.app.command.swap_seats_use_case import SwapSeatsUseCase
from src.service.ledger.app.query.get_trip_use_case import GetTripUseCase
from src.service.ledger.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
    SeatSwapResponse,
)
from src.service.ledger.driving_adapter.http_controller.schema.trip_schema import (
    SeatRenameRequest,
    SeatSwapRequest,
    TripCreateRequest,
    TripResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def register_trip(
    request: TripCreateRequest,
    use_case: RegisterTripUseCase = Depends(RegisterTripUseCase.depends),
) -> TripResponse:
    trip = await use_case.execute(
        route=request.route,
        departure_time=request.departure_time,
        license_plate=request.license_plate,
        bus_type=request.bus_type,
        layout=request.layout.to_layout() if request.layout else None,
    )
    return TripResponse.from_entity(trip)


@router.get('/{trip_id}')
@Logger.io
async def get_trip(
    trip_id: UtilsUUID7,
    use_case: GetTripUseCase = Depends(GetTripUseCase.depends),
) -> TripResponse:
    return TripResponse.from_entity(await use_case.execute(trip_id=trip_id))


@router.patch('/{trip_id}/seats/{seat_id}')
@Logger.io
async def rename_seat(
    trip_id: UtilsUUID7,
    seat_id: str,
    request: SeatRenameRequest,
    use_case: RenameSeatUseCase = Depends(RenameSeatUseCase.depends),
) -> TripResponse:
    trip = await use_case.execute(trip_id=trip_id, seat_id=seat_id, label=request.label)
    return TripResponse.from_entity(trip)


@router.post('/{trip_id}/swap')
@Logger.io
async def swap_seats(
    trip_id: UtilsUUID7,
    request: SeatSwapRequest,
    use_case: SwapSeatsUseCase = Depends(SwapSeatsUseCase.depends),
) -> SeatSwapResponse:
    with tracer.start_as_current_span('controller.swap_seats') as span:
        span.set_attribute('trip.id', str(trip_id))
        span.set_attribute('seats', f'{request.seat_id_a}<->{request.seat_id_b}')

        result = await use_case.execute(
            trip_id=trip_id,
            seat_id_a=request.seat_id_a,
            seat_id_b=request.seat_id_b,
            target_trip_id=request.target_trip_id,
        )
        return SeatSwapResponse(
            bookings=[BookingResponse.from_view(view) for view in result.bookings],
            trips=[TripResponse.from_entity(trip) for trip in result.trips],
        )
