import logging
import os
from typing import Optional

from opentelemetry import trace, _logs
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor

logger = logging.getLogger(__name__)


def setup_telemetry(
    service_name: str = "tradologics-sdk", endpoint: Optional[str] = None
) -> bool:
    """
    Sets up OpenTelemetry Tracing and Logging.
    The bridge and dispatcher spans are no-ops until this has run.
    """
    endpoint = endpoint or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")

    if not endpoint:
        logger.info("Telemetry: OTLP Endpoint not set. Skipping setup.")
        return False

    logger.info(f"Telemetry: Initializing for {service_name} at {endpoint}")

    resource = Resource(attributes={SERVICE_NAME: service_name})

    # --- TRACING ---
    trace_exporter = OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces")
    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(BatchSpanProcessor(trace_exporter))
    trace.set_tracer_provider(tracer_provider)

    # --- LOGGING ---
    log_exporter = OTLPLogExporter(endpoint=f"{endpoint}/v1/logs")
    logger_provider = LoggerProvider(resource=resource)
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(log_exporter))
    _logs.set_logger_provider(logger_provider)

    # Route standard logging through OTLP as well
    handler = LoggingHandler(level=logging.NOTSET, logger_provider=logger_provider)
    logging.getLogger().addHandler(handler)

    logger.info("Telemetry: OTLP Setup Complete (Trace, Logs)")
    return True
