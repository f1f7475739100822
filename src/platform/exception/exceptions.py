from typing import ClassVar


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    code: ClassVar[str] = 'error'

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    """Entity invariant broken, e.g. a layout without seats."""

    code = 'domain_error'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(CustomBaseError):
    """Request is well-formed but breaks a ledger rule (e.g. unpriced payment)."""

    code = 'validation_error'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidOperationError(CustomBaseError):
    """Operation is not allowed for the current seat/ticket state."""

    code = 'invalid_operation'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class NotFoundError(CustomBaseError):
    code = 'not_found'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    code = 'conflict'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)
