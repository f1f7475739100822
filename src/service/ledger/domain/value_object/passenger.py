from typing import Optional

import attrs


@attrs.define(frozen=True)
class Passenger:
    name: str = ''
    phone: str = ''
    email: Optional[str] = None
    note: Optional[str] = None
    pickup_point: Optional[str] = None
    dropoff_point: Optional[str] = None
