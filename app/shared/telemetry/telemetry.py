"""OpenTelemetry tracing for the API and its outbound calls.

Off unless TELEMETRY_ENABLED. When on, spans cover inbound requests
(FastAPI), outbound httpx traffic (Firestore REST, Identity Toolkit, FCM,
the LLM endpoint) and the use cases decorated with @traced. Log records
get trace_id/span_id so access log lines can be joined to traces.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

logger = logging.getLogger(__name__)

# Probes and crawler files; one span each would only be noise.
EXCLUDED_URLS = "/api/v1/health,/robots.txt,/sitemap.xml"


def build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Exporter for TELEMETRY_EXPORTER: "console", "otlp" or "none" (returns None)."""
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if not otlp_endpoint:
            raise ValueError("TELEMETRY_OTLP_ENDPOINT is required for the otlp exporter")
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if exporter_type != "console":
        logger.warning("Unknown telemetry exporter %r, falling back to console", exporter_type)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Owns the tracer provider and the instrumentations attached to it."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None
        self._httpx = HTTPXClientInstrumentor()

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Create the global tracer provider.

        Sampling follows the parent span when a caller propagates one,
        else keeps sample_rate of new traces. A failure here is logged and
        leaves tracing off; the API still starts.
        """
        if not self.enabled:
            return None
        try:
            provider = TracerProvider(
                resource=Resource.create({
                    SERVICE_NAME: self.service_name,
                    SERVICE_VERSION: self.service_version,
                    "deployment.environment": self.environment,
                }),
                sampler=ParentBased(TraceIdRatioBased(sample_rate)),
            )
            exporter = build_exporter(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
        except Exception:
            logger.exception("Telemetry setup failed; tracing stays off")
            return None
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "Tracing on: service=%s exporter=%s sample_rate=%s",
            self.service_name,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        if self.tracer_provider is None:
            return
        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=self.tracer_provider, excluded_urls=EXCLUDED_URLS
        )

    def instrument_httpx(self) -> None:
        """Trace every httpx client, including ones created before this call."""
        if self.tracer_provider is None:
            return
        self._httpx.instrument(tracer_provider=self.tracer_provider)

    def instrument_logging(self) -> None:
        if self.tracer_provider is None:
            return
        LoggingInstrumentor().instrument(
            tracer_provider=self.tracer_provider, set_logging_format=True
        )

    def shutdown(self) -> None:
        """Remove the httpx hooks and flush pending spans."""
        if self.tracer_provider is None:
            return
        if self._httpx.is_instrumented_by_opentelemetry:
            self._httpx.uninstrument()
        self.tracer_provider.shutdown()
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None


def get_telemetry() -> TelemetryConfig | None:
    """Telemetry set up by the lifespan, or None when tracing is off."""
    return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    _telemetry = telemetry
