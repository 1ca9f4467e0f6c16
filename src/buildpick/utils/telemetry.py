"""Tracing for detection, selection and manifest fetches.

Every span buildpick opens goes through :func:`detection_span`,
:func:`selection_span` or :func:`fetch_span`, so attribute keys live in one
place.  Without a configured SDK the OpenTelemetry API hands out no-op
spans and none of this costs anything.

Call :func:`configure_telemetry` once at startup to export spans (requires
the ``otel`` extra: ``pip install buildpick[otel]``).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from opentelemetry import trace

if TYPE_CHECKING:
    from buildpick.config import TelemetrySettings
    from buildpick.core.capabilities import BrowserSignature

ATTR_BROWSER = "buildpick.browser.name"
ATTR_BROWSER_VERSION = "buildpick.browser.version"
ATTR_OS = "buildpick.os.name"
ATTR_CAPABILITIES = "buildpick.capabilities"
ATTR_BUILD = "buildpick.build.name"
ATTR_BUILD_COUNT = "buildpick.build.count"
ATTR_MANIFEST_URL = "buildpick.manifest.url"

SERVICE_NAME = "buildpick"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or SERVICE_NAME)


class DetectionSpan:
    """Span wrapper recording what a user agent was detected as."""

    def __init__(self, span: trace.Span) -> None:
        self.span = span

    def record(self, signature: BrowserSignature, capabilities: Iterable[str]) -> None:
        self.span.set_attribute(ATTR_BROWSER, signature.browser_name)
        self.span.set_attribute(ATTR_BROWSER_VERSION, signature.browser_version)
        self.span.set_attribute(ATTR_OS, signature.os_name)
        self.span.set_attribute(ATTR_CAPABILITIES, sorted(str(c) for c in capabilities))


class SelectionSpan:
    """Span wrapper recording the candidate count and the chosen build."""

    def __init__(self, span: trace.Span, build_count: int) -> None:
        self.span = span
        span.set_attribute(ATTR_BUILD_COUNT, build_count)

    def chosen(self, name: str) -> None:
        self.span.set_attribute(ATTR_BUILD, name)


@contextmanager
def detection_span(tracer: trace.Tracer) -> Iterator[DetectionSpan]:
    with tracer.start_as_current_span("buildpick.detect") as span:
        yield DetectionSpan(span)


@contextmanager
def selection_span(tracer: trace.Tracer, build_count: int) -> Iterator[SelectionSpan]:
    with tracer.start_as_current_span("buildpick.select") as span:
        yield SelectionSpan(span, build_count)


@contextmanager
def fetch_span(tracer: trace.Tracer, url: str) -> Iterator[trace.Span]:
    with tracer.start_as_current_span("buildpick.manifest.fetch", attributes={ATTR_MANIFEST_URL: url}) as span:
        yield span


def configure_telemetry(settings: TelemetrySettings) -> None:
    """Install an SDK tracer provider according to *settings*.

    Spans go to the OTLP/gRPC endpoint when ``settings.otlp_endpoint`` is
    set and to stdout as JSON otherwise.

    Raises:
        ImportError: If the ``otel`` extra is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = "opentelemetry-sdk is required for tracing. Install it with: pip install buildpick[otel]"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": SERVICE_NAME}))

    if settings.otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = (
                "opentelemetry-exporter-otlp is required to export to "
                f"{settings.otlp_endpoint}. Install it with: pip install buildpick[otel]"
            )
            raise ImportError(msg) from exc
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint)))
    else:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
