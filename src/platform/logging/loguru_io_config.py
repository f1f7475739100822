from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
import logging
import re
import sys
from typing import TYPE_CHECKING
import zoneinfo

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.logging.service_context import get_service_context


# Argument names whose values never reach a log line; passenger contact details included
SENSITIVE_KEYWORDS = {
    'password',
    'secret',
    'token',
    'phone',
    'email',
}

# Longest rendered args/return value before truncation
MAX_CONTENT_LENGTH = 1000

chain_start_time_var: ContextVar[float] = ContextVar('first_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


class GeneratorMethod(StrEnum):
    NEXT = 'next'
    SEND = 'send'
    THROW = 'throw'


# granian access line: '127.0.0.1 - "POST /api/ledger/bookings HTTP/1.1" - 201 - 8ms'
_ACCESS_LINE = re.compile(r'"[A-Z]+ \S+ HTTP/[\d.]+" - (?P<status>\d{3}) -')


def access_log_level(message: str) -> str | None:
    match = _ACCESS_LINE.search(message)
    if match is None:
        return None

    status_code = int(match.group('status'))
    if status_code >= 500:
        return 'CRITICAL'
    if status_code == 409:
        return 'WARNING'
    if status_code >= 400:
        return 'ERROR'
    if status_code >= 300:
        return 'WARNING'
    return 'SUCCESS' if status_code >= 200 else 'INFO'


def _bind_defaults(base: 'LoguruLogger') -> 'LoguruLogger':
    return base.bind(
        **{
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.CHAIN_START_TIME: '',
            ExtraField.CALL_TARGET: '',
        }
    )


class InterceptHandler(logging.Handler):
    """Forward stdlib logging (granian, SQLAlchemy, asyncio) into loguru."""

    def __init__(self) -> None:
        super().__init__()
        self._logger = _bind_defaults(loguru_logger)

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()
        if record.levelno <= logging.DEBUG and 'Using selector:' in message:
            return

        level: str | int | None = access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Walk out of the logging module to report the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        self._logger.opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _log_file_path() -> str:
    stamp = datetime.now(zoneinfo.ZoneInfo(settings.LOG_TIMEZONE)).strftime('%Y-%m-%d_%H')
    prefix = 'test_' if settings.DEPLOY_ENV == 'test' else ''
    return f'{settings.LOG_DIR}/{prefix}{stamp}.log'


def _install_sinks(target: 'LoguruLogger') -> None:
    level = 'DEBUG' if settings.DEBUG else 'INFO'
    target.add(sys.stdout, format=io_log_format, level=level, enqueue=True)

    # Production ships stdout only
    if settings.log_to_file:
        target.add(
            _log_file_path(),
            format=io_log_format,
            rotation='1 hour',
            retention=settings.LOG_RETENTION,
            compression='gz',
            enqueue=True,
            level=level,
        )


loguru_logger.remove()
custom_logger = _bind_defaults(loguru_logger)
_install_sinks(custom_logger)

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
