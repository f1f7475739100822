"""
OpenTelemetry tracing for the ledger service.

Spans go to the OTLP collector named by OTEL_EXPORTER_OTLP_ENDPOINT and/or the
console; with neither configured the provider is still installed so controller
spans carry trace ids into the logs.
"""

from typing import Optional

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from sqlalchemy.ext.asyncio import AsyncEngine

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class TracingConfig:
    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: Optional[str] = None,
        enable_console: Optional[bool] = None,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint or settings.OTEL_EXPORTER_OTLP_ENDPOINT
        self.enable_console = (
            settings.OTEL_CONSOLE_EXPORT if enable_console is None else enable_console
        )
        self._provider: Optional[TracerProvider] = None
        self._sqlalchemy: Optional[SQLAlchemyInstrumentor] = None

    def setup(self) -> None:
        """Install the global tracer provider, once per process."""
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                'deployment.environment': settings.DEPLOY_ENV,
            }
        )
        self._provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

        exporters = []
        if self.otlp_endpoint:
            exporters.append(OTLPSpanExporter(endpoint=self.otlp_endpoint))
        if self.enable_console:
            exporters.append(ConsoleSpanExporter())
        for exporter in exporters:
            self._provider.add_span_processor(BatchSpanProcessor(exporter))

        trace.set_tracer_provider(self._provider)
        Logger.base.info(
            f'📊 [TRACING] {self.service_name}: '
            f'{", ".join(type(e).__name__ for e in exporters) or "no exporter"}'
        )

    @staticmethod
    def instrument_fastapi(*, app: FastAPI) -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=settings.OTEL_EXCLUDED_URLS)

    def instrument_sqlalchemy(self, *, engine: AsyncEngine) -> None:
        self._sqlalchemy = SQLAlchemyInstrumentor()
        self._sqlalchemy.instrument(engine=engine.sync_engine)

    def shutdown(self) -> None:
        if self._sqlalchemy is not None:
            self._sqlalchemy.uninstrument()
            self._sqlalchemy = None
        if self._provider is not None:
            self._provider.shutdown()
            self._provider = None
