"""Tracing for pattern evaluation.

Every call to :func:`permgate.matcher.evaluate` opens one
``permgate.evaluate`` span carrying:

==========================  ============================================
``permgate.match_mode``     ``prefix`` or ``exact``
``permgate.tool``           the tool label filter, when one was given
``permgate.verdict``        ``allowed``, ``denied`` or ``unspecified``
``permgate.pattern``        source of the deciding pattern, if any
``permgate.label``          label of the deciding pattern, if any
==========================  ============================================

Only ``opentelemetry-api`` is a hard dependency, so until a tracer provider
is installed these spans are no-ops.  :func:`configure_telemetry` installs
one (``pip install permgate[otel]``).
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

ATTR_MATCH_MODE = "permgate.match_mode"
ATTR_TOOL = "permgate.tool"
ATTR_VERDICT = "permgate.verdict"
ATTR_PATTERN = "permgate.pattern"
ATTR_LABEL = "permgate.label"

_SDK_HINT = (
    "opentelemetry-sdk is required for tracing. Install it with: pip install permgate[otel]"
)


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*, resolved against whatever provider is installed."""
    return trace.get_tracer(name or "permgate")


def build_tracer_provider(*, service_name: str = "permgate", exporter: Any = None) -> Any:
    """Create an SDK tracer provider that exports evaluation spans.

    *exporter* defaults to the SDK's console exporter (JSON to stdout).
    Spans are exported synchronously, one per evaluation, so tests and
    short CLI runs see them without a flush.

    Raises:
        ImportError: If ``opentelemetry-sdk`` is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        raise ImportError(_SDK_HINT) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(SimpleSpanProcessor(exporter or ConsoleSpanExporter()))
    return provider


def configure_telemetry(*, service_name: str = "permgate", exporter: Any = None) -> Any:
    """Install a provider from :func:`build_tracer_provider` process-wide.

    OpenTelemetry accepts a global provider only once; later calls build a
    provider but the first one stays in effect.  Returns the new provider.

    Raises:
        ImportError: If ``opentelemetry-sdk`` is not installed.
    """
    provider = build_tracer_provider(service_name=service_name, exporter=exporter)
    trace.set_tracer_provider(provider)
    return provider
