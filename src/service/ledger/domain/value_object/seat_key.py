"""
Seat Key Value Object

Stable position key of a seat on a bus layout. The key never changes after the
trip is provisioned, the display label lives on the Seat and can be renamed.

String forms:
    grid seat   -> "{floor}-{row}-{col}"     e.g. "1-0-2"
    rear bench  -> "{floor}-bench-{index}"   e.g. "2-bench-4"
    aisle floor -> "{floor}-floor-{index}"   e.g. "1-floor-0"
"""

from enum import StrEnum
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


class SeatKind(StrEnum):
    GRID = 'grid'
    BENCH = 'bench'
    FLOOR = 'floor'


@attrs.define(frozen=True)
class SeatKey:
    """Seat Key (Value Object)"""

    floor: int
    kind: SeatKind
    row: Optional[int] = None
    col: Optional[int] = None
    index: Optional[int] = None

    @classmethod
    def grid(cls, *, floor: int, row: int, col: int) -> 'SeatKey':
        return cls(floor=floor, kind=SeatKind.GRID, row=row, col=col)

    @classmethod
    def bench(cls, *, floor: int, index: int) -> 'SeatKey':
        return cls(floor=floor, kind=SeatKind.BENCH, index=index)

    @classmethod
    def floor_slot(cls, *, floor: int, index: int) -> 'SeatKey':
        return cls(floor=floor, kind=SeatKind.FLOOR, index=index)

    @classmethod
    def parse(cls, seat_id: str) -> 'SeatKey':
        parts = seat_id.split('-')
        try:
            if len(parts) == 3 and parts[1] == SeatKind.BENCH:
                return cls.bench(floor=int(parts[0]), index=int(parts[2]))
            if len(parts) == 3 and parts[1] == SeatKind.FLOOR:
                return cls.floor_slot(floor=int(parts[0]), index=int(parts[2]))
            if len(parts) == 3:
                return cls.grid(floor=int(parts[0]), row=int(parts[1]), col=int(parts[2]))
        except ValueError:
            pass
        raise DomainError(
            f'Invalid seat id: {seat_id}. Expected floor-row-col, floor-bench-i or floor-floor-i'
        )

    def __str__(self) -> str:
        if self.kind is SeatKind.GRID:
            return f'{self.floor}-{self.row}-{self.col}'
        return f'{self.floor}-{self.kind}-{self.index}'
