from src.platform.exception.exceptions import InvalidOperationError, NotFoundError, ValidationError


class MissingTicketDetailError(ValidationError):
    code = 'missing_ticket_detail'

    def __init__(self, message: str = 'Paid bookings need itemized ticket prices') -> None:
        super().__init__(message)


class CrossTripSwapNotAllowedError(InvalidOperationError):
    code = 'cross_trip_swap'

    def __init__(self, message: str = 'Seats can only be swapped within the same trip') -> None:
        super().__init__(message)


class SeatNotFoundError(NotFoundError):
    code = 'seat_not_found'

    def __init__(self, *, trip_id: object, seat_id: str) -> None:
        self.trip_id = trip_id
        self.seat_id = seat_id
        super().__init__(f'Seat {seat_id} not found on trip {trip_id}')


class SeatUnavailableError(InvalidOperationError):
    code = 'seat_unavailable'

    def __init__(self, *, seat_id: str, label: str) -> None:
        self.seat_id = seat_id
        super().__init__(f'Seat {label} ({seat_id}) is already taken')


class TicketNotFoundError(InvalidOperationError):
    code = 'ticket_not_found'

    def __init__(self, *, seat_id: str) -> None:
        self.seat_id = seat_id
        super().__init__(f'Booking has no ticket on seat {seat_id}')
