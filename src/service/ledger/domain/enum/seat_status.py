from enum import StrEnum


class SeatStatus(StrEnum):
    """Seat color on a trip's seat map, always derived from the occupying ticket"""

    AVAILABLE = 'available'
    BOOKED = 'booked'
    HELD = 'held'
    SOLD = 'sold'
