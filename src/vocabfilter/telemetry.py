"""Tracing and structured logging for filter actions and the TUI.

``get_telemetry()`` returns the process-wide Telemetry: an OpenTelemetry
tracer for ``filter.action`` / ``tui.search`` spans and ``log``, a logger
adapter that stamps records emitted inside a span with its trace and span
ids. ``configure_file_logging()`` adds a JSON-lines file handler.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Generator

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from vocabfilter.constants import LOGGER_NAME

_NULL_TRACE_ID = "0" * 32
_NULL_SPAN_ID = "0" * 16


def _current_ids() -> dict[str, str]:
    """Hex trace/span ids of the active span, or {} outside any span."""
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return {}
    return {"trace_id": format(ctx.trace_id, "032x"), "span_id": format(ctx.span_id, "016x")}


class SpanHandle:
    """Attribute setter for an open span; OTel errors never reach the caller."""

    def __init__(self, span: object) -> None:
        self._span = span

    def set_attribute(self, key: str, value: object) -> None:
        try:
            self._span.set_attribute(key, value)  # type: ignore[attr-defined]
        except Exception:
            pass


class _SpanIdsAdapter(logging.LoggerAdapter):
    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:  # type: ignore[override]
        kwargs.setdefault("extra", {}).update(_current_ids())
        return msg, kwargs


class Telemetry:
    """Tracer and span-aware logger shared by the state, controller and TUI."""

    def __init__(self, tracer: object) -> None:
        self._tracer = tracer
        self.log = _SpanIdsAdapter(logging.getLogger(LOGGER_NAME), {})

    @contextmanager
    def span(self, name: str) -> Generator[SpanHandle, None, None]:
        """Run the block inside a new current span called *name*."""
        with self._tracer.start_as_current_span(name) as otel_span:  # type: ignore[attr-defined]
            yield SpanHandle(otel_span)

    @classmethod
    def for_testing(cls) -> tuple["Telemetry", InMemorySpanExporter]:
        """Telemetry plus the in-memory exporter its finished spans land in."""
        exporter = InMemorySpanExporter()
        provider = TracerProvider()
        provider.add_span_processor(SimpleSpanProcessor(exporter))
        return cls(provider.get_tracer(LOGGER_NAME)), exporter

    @classmethod
    def noop(cls) -> "Telemetry":
        """Telemetry with no span processor; spans are dropped."""
        return cls(TracerProvider().get_tracer(LOGGER_NAME))


_active: Telemetry | None = None


def get_telemetry() -> Telemetry:
    """Return the installed Telemetry, installing a no-op one if needed."""
    global _active
    if _active is None:
        _active = Telemetry.noop()
    return _active


def set_telemetry(tel: Telemetry) -> None:
    global _active
    _active = tel


class _JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
                "level": record.levelname,
                "logger": record.name,
                "trace": getattr(record, "trace_id", _NULL_TRACE_ID),
                "span": getattr(record, "span_id", _NULL_SPAN_ID),
                "msg": record.getMessage(),
            },
            ensure_ascii=False,
        )


def configure_file_logging(log_dir: str = "logs") -> str:
    """Write vocabfilter logs to ``{log_dir}/vocabfilter-YYYYMMDD.log``, one JSON object per line.

    Only the TUI launcher calls this. A logger that already has a file
    handler is left unchanged.

    Returns:
        Path of the log file.
    """
    from datetime import date
    from pathlib import Path

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / f"vocabfilter-{date.today():%Y%m%d}.log"

    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(_JsonLineFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    return str(log_path)
