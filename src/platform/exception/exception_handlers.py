"""
HTTP mapping of ledger errors.

Every error body carries `detail` (human readable) and `code` (stable, for the
back office to branch on, e.g. `seat_unavailable`).
"""

from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger


Handler = Callable[[Request, Exception], Awaitable[Response]]


def _error(status_code: int, *, detail: Any, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'detail': detail, 'code': code})


async def ledger_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, CustomBaseError)
    return _error(exc.status_code, detail=exc.message, code=exc.code)


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, detail=str(exc), code='invalid_value')


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return _error(422, detail=jsonable_encoder(errors), code='request_validation')


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.error(
        f'💥 [HTTP] {request.method} {request.url.path}: unhandled {type(exc).__name__}: {exc}'
    )
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR, detail='Internal server error', code='internal'
    )


def register_exception_handlers(app: FastAPI) -> None:
    handlers: dict[type[Exception], Handler] = {
        CustomBaseError: ledger_error_handler,
        ValueError: value_error_handler,
        RequestValidationError: request_validation_handler,
        Exception: unhandled_error_handler,
    }
    for exception_class, handler in handlers.items():
        app.add_exception_handler(exception_class, handler)
