from typing import Optional

import attrs

from src.service.ledger.domain.enum.seat_status import SeatStatus
from src.service.ledger.domain.value_object.seat_key import SeatKey


@attrs.define
class Seat:
    key: SeatKey
    label: str
    status: SeatStatus = attrs.field(default=SeatStatus.AVAILABLE, converter=SeatStatus)
    row: Optional[int] = None
    col: Optional[int] = None

    @property
    def id(self) -> str:
        return str(self.key)

    @property
    def floor(self) -> int:
        return self.key.floor
