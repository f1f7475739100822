from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from src.platform.types import UtilsUUID7
from src.service.ledger.domain.bus_layout import BusLayout
from src.service.ledger.domain.entity.trip_entity import Trip
from src.service.ledger.domain.enum.bus_type import BusType
from src.service.ledger.domain.enum.seat_status import SeatStatus


class BusLayoutRequest(BaseModel):
    floors: int = Field(ge=1)
    rows: int = Field(ge=1)
    cols: int = Field(ge=1)
    active_seats: Optional[List[str]] = None
    seat_labels: Dict[str, str] = {}
    bench_floors: List[int] = []
    floor_seat_count: int = Field(default=0, ge=0)

    def to_layout(self) -> BusLayout:
        return BusLayout(
            floors=self.floors,
            rows=self.rows,
            cols=self.cols,
            active_seats=frozenset(self.active_seats) if self.active_seats is not None else None,
            seat_labels=dict(self.seat_labels),
            bench_floors=tuple(self.bench_floors),
            floor_seat_count=self.floor_seat_count,
        )


class TripCreateRequest(BaseModel):
    route: str
    departure_time: datetime
    license_plate: str = ''
    bus_type: BusType
    layout: Optional[BusLayoutRequest] = None

    class Config:
        json_schema_extra = {
            'example': {
                'route': 'Sài Gòn - Đà Lạt',
                'departure_time': '2025-01-10T22:00:00+07:00',
                'license_plate': '51B-123.45',
                'bus_type': 'SLEEPER',
            }
        }


class SeatRenameRequest(BaseModel):
    label: str

    class Config:
        json_schema_extra = {'example': {'label': 'A1'}}


class SeatSwapRequest(BaseModel):
    seat_id_a: str
    seat_id_b: str
    target_trip_id: Optional[UtilsUUID7] = None  # set only by callers swapping across trips

    class Config:
        json_schema_extra = {'example': {'seat_id_a': '1-0-0', 'seat_id_b': '1-0-1'}}


class SeatResponse(BaseModel):
    id: str
    label: str
    status: SeatStatus
    floor: int
    row: Optional[int] = None
    col: Optional[int] = None


class TripResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'route': 'Sài Gòn - Đà Lạt',
                'trip_date': '2025-01-10 22:00',
                'departure_time': '2025-01-10T22:00:00+07:00',
                'license_plate': '51B-123.45',
                'bus_type': 'SLEEPER',
                'seats': [
                    {
                        'id': '1-0-0',
                        'label': '1',
                        'status': 'available',
                        'floor': 1,
                        'row': 0,
                        'col': 0,
                    }
                ],
            }
        },
    }

    id: UtilsUUID7  # UUID7
    route: str
    trip_date: str
    departure_time: datetime
    license_plate: str
    bus_type: BusType
    seats: List[SeatResponse]

    @classmethod
    def from_entity(cls, trip: Trip) -> 'TripResponse':
        return cls(
            id=trip.id,
            route=trip.route,
            trip_date=trip.trip_date,
            departure_time=trip.departure_time,
            license_plate=trip.license_plate,
            bus_type=trip.bus_type,
            seats=[
                SeatResponse(
                    id=seat.id,
                    label=seat.label,
                    status=seat.status,
                    floor=seat.floor,
                    row=seat.row,
                    col=seat.col,
                )
                for seat in trip.seats
            ],
        )
