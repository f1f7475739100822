"""
Test Configuration and Fixtures

Unit and API tests run against the in-memory Unit of Work in
test/service/ledger/fake_unit_of_work.py, no database is needed.
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'seat_ledger_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'seat_ledger_test_db_{worker_id}'

    # Test runs log to their own directory and file prefix
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['LOG_DIR'] = str(test_log_dir)
    os.environ['DEPLOY_ENV'] = 'test'

    os.environ.setdefault('DB_POOL_SIZE', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from opentelemetry import trace  # noqa: E402
from opentelemetry.sdk.trace import TracerProvider  # noqa: E402
from opentelemetry.sdk.trace.export import SimpleSpanProcessor  # noqa: E402
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (  # noqa: E402
    InMemorySpanExporter,
)
import pytest  # noqa: E402

from test.service.ledger.fake_unit_of_work import (  # noqa: E402
    FakeUnitOfWork,
    InMemoryLedgerStore,
)


@pytest.fixture
def ledger_store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


@pytest.fixture
def uow(ledger_store: InMemoryLedgerStore) -> FakeUnitOfWork:
    return FakeUnitOfWork(ledger_store)


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def recording_tracer(span_exporter: InMemorySpanExporter) -> trace.Tracer:
    """Tracer whose finished spans land in span_exporter, the global provider is left alone."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider.get_tracer('test')
