from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from wayfinder.core.config import Settings
from wayfinder.core.observability import build_tracer_provider, parse_headers


def test_parse_headers_skips_malformed_items():
    assert parse_headers("api-key=abc, tenant = gov ,broken,=nokey") == {"api-key": "abc", "tenant": "gov"}
    assert parse_headers(None) == {}


def test_provider_records_spans_with_service_identity():
    exporter = InMemorySpanExporter()
    provider = build_tracer_provider(Settings(API_TITLE="Wayfinder API", ENVIRONMENT="staging"), exporter)

    with provider.get_tracer("test").start_as_current_span("pod.fetch"):
        pass
    provider.force_flush()

    spans = exporter.get_finished_spans()
    assert [span.name for span in spans] == ["pod.fetch"]
    assert spans[0].resource.attributes["service.name"] == "wayfinder-api"
    assert spans[0].resource.attributes["deployment.environment"] == "staging"
