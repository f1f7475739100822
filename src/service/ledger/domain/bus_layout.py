"""
Bus layout templates and seat map generation.

A layout describes the physical positions of a bus; a trip's seat map is generated
from it once, when the trip is registered. Grid seats are keyed floor-row-col,
the rear bench floor-bench-i and aisle seats floor-floor-i.
"""

from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.ledger.domain.entity.seat_entity import Seat
from src.service.ledger.domain.enum.bus_type import BusType
from src.service.ledger.domain.value_object.seat_key import SeatKey, SeatKind


BENCH_SIZE = 5
FLOOR_SEAT_FLOOR = 1  # aisle seats always sit on the lower deck


@attrs.define(frozen=True)
class BusLayout:
    floors: int
    rows: int
    cols: int
    active_seats: Optional[FrozenSet[str]] = None  # None: every position is active
    seat_labels: Dict[str, str] = attrs.field(factory=dict)
    bench_floors: Tuple[int, ...] = ()
    floor_seat_count: int = 0

    def __attrs_post_init__(self) -> None:
        if self.floors < 1 or self.rows < 1 or self.cols < 1:
            raise DomainError('Layout needs at least one floor, row and column')
        if any(floor < 1 or floor > self.floors for floor in self.bench_floors):
            raise DomainError('Bench floor outside the layout')
        if self.floor_seat_count < 0:
            raise DomainError('floor_seat_count cannot be negative')

    def is_active(self, key: SeatKey) -> bool:
        return self.active_seats is None or str(key) in self.active_seats


DEFAULT_LAYOUTS: Dict[BusType, BusLayout] = {
    # 36 berths + 5-seat rear bench upstairs
    BusType.SLEEPER: BusLayout(floors=2, rows=6, cols=3, bench_floors=(2,)),
    # 24 cabins + 6 aisle seats
    BusType.CABIN: BusLayout(floors=2, rows=6, cols=2, floor_seat_count=6),
}


def default_layout(bus_type: BusType) -> BusLayout:
    return DEFAULT_LAYOUTS[BusType(bus_type)]


def _default_grid_labels(layout: BusLayout, bus_type: BusType) -> Dict[str, str]:
    keys = [
        SeatKey.grid(floor=f, row=r, col=c)
        for f in range(1, layout.floors + 1)
        for r in range(layout.rows)
        for c in range(layout.cols)
    ]
    if bus_type == BusType.CABIN:
        # Column 0 is the B side, column 1 the A side, numbered row*2+floor
        return {
            str(key): f'{"B" if key.col == 0 else "A"}{(key.row or 0) * 2 + key.floor}'
            for key in keys
        }

    # Sleeper berths are numbered front to back, lower deck before upper
    active = [key for key in keys if layout.is_active(key)]
    active.sort(key=lambda key: (key.row, key.floor, key.col))
    return {str(key): str(number) for number, key in enumerate(active, start=1)}


@Logger.io(truncate_content=True)
def iter_layout_positions(
    layout: BusLayout, bus_type: BusType
) -> Iterator[Tuple[SeatKey, str, int, int]]:
    """Yield (key, label, display row, display col) for every active position."""
    grid_labels = _default_grid_labels(layout, bus_type)

    for f in range(1, layout.floors + 1):
        for r in range(layout.rows):
            for c in range(layout.cols):
                key = SeatKey.grid(floor=f, row=r, col=c)
                if layout.is_active(key):
                    yield key, layout.seat_labels.get(str(key), grid_labels[str(key)]), r, c

    for i in range(layout.floor_seat_count):
        key = SeatKey.floor_slot(floor=FLOOR_SEAT_FLOOR, index=i)
        if layout.is_active(key):
            yield key, layout.seat_labels.get(str(key), f'Sàn {i + 1}'), i, 0

    # Cabin buses have no rear bench
    if bus_type != BusType.CABIN:
        for f in layout.bench_floors:
            for i in range(BENCH_SIZE):
                key = SeatKey.bench(floor=f, index=i)
                if layout.is_active(key):
                    # The bench sits on the row behind the last grid row
                    yield key, layout.seat_labels.get(str(key), f'B{f}-{i + 1}'), layout.rows, i


def generate_seats(layout: BusLayout, bus_type: BusType) -> List[Seat]:
    seats = [
        Seat(key=key, label=label, row=row, col=col)
        for key, label, row, col in iter_layout_positions(layout, bus_type)
    ]
    if not seats:
        raise DomainError('Layout has no active seats')
    if len({seat.label for seat in seats}) != len(seats):
        raise DomainError('Seat labels must be unique within a trip')
    return seats


def seat_kind_counts(seats: List[Seat]) -> Dict[SeatKind, int]:
    counts = {kind: 0 for kind in SeatKind}
    for seat in seats:
        counts[seat.key.kind] += 1
    return counts
