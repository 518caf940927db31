"""Telemetry sink backed by OpenTelemetry spans."""

import logging
from collections.abc import Mapping

from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
    SpanExportResult,
)
from opentelemetry.trace import Status, StatusCode

from ..core.constants import OTEL_ATTRIBUTES
from ..core.exceptions import SinkDeliveryError
from ..models.levels import SeverityLevel
from .base import TelemetrySink

logger = logging.getLogger(__name__)


class DeliverySpanProcessor(SpanProcessor):
    """Export each span as it ends and raise when the exporter rejects it.

    Unlike the SDK's ``SimpleSpanProcessor``, which logs export failures, this
    processor raises ``SinkDeliveryError`` on the thread that ended the span.
    """

    def __init__(self, exporter: SpanExporter):
        self.exporter = exporter

    def on_end(self, span: ReadableSpan) -> None:
        if not (span.context and span.context.trace_flags.sampled):
            return

        try:
            result = self.exporter.export((span,))
        except Exception as e:
            raise SinkDeliveryError(f"Exporter failed on span {span.name!r}: {e}") from e

        if result is not SpanExportResult.SUCCESS:
            raise SinkDeliveryError(f"Exporter rejected span {span.name!r}: {result.name}")

    def shutdown(self) -> None:
        self.exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self.exporter.force_flush(timeout_millis)


class OpenTelemetrySink(TelemetrySink):
    """Forward telemetry records to an OpenTelemetry tracer.

    Every record becomes one short span: events are named after the event,
    log lines use a ``trace`` span and exceptions an ``exception`` span with
    the exception recorded on it. The tracer provider is owned by the sink
    and never installed globally.

    With ``batch=False`` each span is exported before the ``track_*`` call
    returns and a failed export raises ``SinkDeliveryError``. Batch mode
    exports on a background thread, so it cannot report delivery errors to
    the caller; the SDK logs them instead.
    """

    def __init__(
        self,
        service_name: str = "insightlog",
        exporter: SpanExporter | None = None,
        batch: bool = True,
        tracer_provider: TracerProvider | None = None,
    ):
        """Initialize the sink.

        Args:
            service_name: Name of the service for telemetry
            exporter: Optional custom span exporter (defaults to console)
            batch: Use a batching span processor instead of exporting each span
                as it ends
            tracer_provider: Preconfigured provider; when given, ``exporter``
                and ``batch`` are ignored
        """
        if tracer_provider is None:
            resource = Resource.create({"service.name": service_name})
            tracer_provider = TracerProvider(resource=resource)

            if exporter is None:
                exporter = ConsoleSpanExporter()

            processor = BatchSpanProcessor(exporter) if batch else DeliverySpanProcessor(exporter)
            tracer_provider.add_span_processor(processor)

        self.provider = tracer_provider
        self.tracer = tracer_provider.get_tracer("insightlog")
        logger.debug(f"OpenTelemetry sink ready for service {service_name}")

    @classmethod
    def from_config(cls, config, exporter: SpanExporter | None = None) -> "OpenTelemetrySink":
        """Create a sink from an insightlog ``Config``."""
        return cls(service_name=config.service_name, exporter=exporter, batch=config.batch_export)

    def track_event(self, name: str, properties: Mapping[str, str]) -> None:
        try:
            with self.tracer.start_as_current_span(name) as span:
                span.set_attributes(_property_attributes(properties))
        except SinkDeliveryError:
            raise
        except Exception as e:
            raise SinkDeliveryError(f"Failed to export event {name!r}: {e}") from e

    def track_trace(self, message: str, severity: SeverityLevel) -> None:
        try:
            with self.tracer.start_as_current_span(OTEL_ATTRIBUTES.TRACE_SPAN) as span:
                span.set_attribute(OTEL_ATTRIBUTES.MESSAGE, message)
                span.set_attributes(_severity_attributes(severity))
        except SinkDeliveryError:
            raise
        except Exception as e:
            raise SinkDeliveryError(f"Failed to export trace: {e}") from e

    def track_exception(
        self,
        exception: BaseException,
        severity: SeverityLevel | None = None,
        properties: Mapping[str, str] | None = None,
    ) -> None:
        attributes = _property_attributes(properties or {})
        if severity is not None:
            attributes.update(_severity_attributes(severity))

        try:
            with self.tracer.start_as_current_span(
                OTEL_ATTRIBUTES.EXCEPTION_SPAN, record_exception=False, set_status_on_exception=False
            ) as span:
                span.set_attributes(attributes)
                span.record_exception(exception, attributes=attributes)
                span.set_status(Status(StatusCode.ERROR, str(exception)))
        except SinkDeliveryError:
            raise
        except Exception as e:
            raise SinkDeliveryError(f"Failed to export exception: {e}") from e

    def flush(self) -> None:
        """Export any spans held by the span processor."""
        self.provider.force_flush()

    def shutdown(self) -> None:
        """Flush and shut down the tracer provider."""
        self.provider.shutdown()


def _property_attributes(properties: Mapping[str, str]) -> dict[str, str]:
    return {f"{OTEL_ATTRIBUTES.PROPERTY_PREFIX}{key}": value for key, value in properties.items()}


def _severity_attributes(severity: SeverityLevel) -> dict[str, str | int]:
    return {
        OTEL_ATTRIBUTES.SEVERITY: severity.name,
        OTEL_ATTRIBUTES.SEVERITY_NUMBER: int(severity),
    }
