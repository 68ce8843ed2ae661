"""Tracing setup for the Wayfinder API.

Pod fetches open their own ``pod.fetch`` spans; this module only installs the
process-wide tracer provider and hooks FastAPI request spans into it.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter

from wayfinder.core.config import Settings, settings

logger = logging.getLogger(__name__)
_provider: Optional[TracerProvider] = None


def build_tracer_provider(config: Settings, exporter: Optional[SpanExporter] = None) -> TracerProvider:
    """Create a provider tagged with the service identity and the demo pod server."""

    resource = Resource.create(
        {
            "service.name": config.API_TITLE.lower().replace(" ", "-"),
            "service.version": config.API_VERSION,
            "deployment.environment": config.ENVIRONMENT,
            "wayfinder.pod_server": config.DEMO_POD_SERVER,
        }
    )
    provider = TracerProvider(resource=resource)

    exporter = exporter or _otlp_exporter(config)
    if exporter is not None:
        provider.add_span_processor(BatchSpanProcessor(exporter))
    return provider


def setup_tracing(app: Optional[FastAPI] = None) -> None:
    """Install the tracer provider once per process and instrument ``app``."""

    global _provider
    if _provider is None:
        _provider = build_tracer_provider(settings)
        trace.set_tracer_provider(_provider)

    if app is not None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls="metrics")


def _otlp_exporter(config: Settings) -> Optional[SpanExporter]:
    if not config.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("No OTLP endpoint configured; spans are recorded but not exported")
        return None
    logger.info("Exporting spans to %s", config.OTEL_EXPORTER_OTLP_ENDPOINT)
    return OTLPSpanExporter(
        endpoint=str(config.OTEL_EXPORTER_OTLP_ENDPOINT),
        headers=parse_headers(config.OTEL_EXPORTER_OTLP_HEADERS) or None,
    )


def parse_headers(raw_headers: Optional[str]) -> Dict[str, str]:
    """Parse ``key=value`` pairs separated by commas, skipping malformed items."""

    pairs: Dict[str, str] = {}
    for item in (raw_headers or "").split(","):
        key, sep, value = item.partition("=")
        if sep and key.strip():
            pairs[key.strip()] = value.strip()
    return pairs


__all__ = ["build_tracer_provider", "parse_headers", "setup_tracing"]
