# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

import time
from dataclasses import dataclass

import pytest

import yamltags.processor as processor_module
from yamltags import MissingRequiredFieldError, process_struct, tagged
from yamltags.telemetry import metrics as metrics_module


@dataclass
class Service:
    name: str = tagged("required", default="")
    port: int = tagged("default=80", default=0)


class _Recorder:
    def __init__(self):
        self.calls = []

    def add(self, amount, attributes=None):
        self.calls.append((amount, attributes))

    def record(self, amount, attributes=None):
        self.calls.append((amount, attributes))


class _Span:
    def __init__(self):
        self.status = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    def set_status(self, status):
        self.status = status


class _Tracer:
    def __init__(self):
        self.spans = []

    def start_as_current_span(self, name, attributes=None):
        span = _Span()
        self.spans.append((name, attributes, span))
        return span


@pytest.fixture()
def recorded(monkeypatch):
    calls = []
    monkeypatch.setattr(
        processor_module,
        "record_process_metrics",
        lambda status, started_at, reason=None: calls.append((status, reason)),
    )
    return calls


def test_successful_call_recorded_as_ok(recorded):
    process_struct(Service(name="api"))
    assert recorded == [("ok", None)]


def test_violation_recorded_with_reason(recorded):
    with pytest.raises(MissingRequiredFieldError):
        process_struct(Service())

    assert recorded == [("invalid", "MissingRequiredFieldError")]


def test_default_application_counted(monkeypatch):
    counter = _Recorder()
    monkeypatch.setattr(processor_module, "default_applied_total", counter)

    process_struct(Service(name="api"))
    assert counter.calls == [(1, {"struct": "Service"})]

    process_struct(Service(name="api", port=8080))
    assert len(counter.calls) == 1


def test_span_wraps_call_and_marks_errors(monkeypatch):
    tracer = _Tracer()
    monkeypatch.setattr(processor_module, "get_tracer", lambda: tracer)

    process_struct(Service(name="api"))
    with pytest.raises(MissingRequiredFieldError):
        process_struct(Service())

    (ok_name, ok_attrs, ok_span), (_, _, bad_span) = tracer.spans
    assert ok_name == "yamltags.process_struct"
    assert ok_attrs == {"yamltags.struct": "Service"}
    assert ok_span.status is None
    assert bad_span.status.description == "required value not set: Service.name"


def test_record_process_metrics_feeds_instruments(monkeypatch):
    total, violations, latency = _Recorder(), _Recorder(), _Recorder()
    monkeypatch.setattr(metrics_module, "process_total", total)
    monkeypatch.setattr(metrics_module, "violation_total", violations)
    monkeypatch.setattr(metrics_module, "process_latency_ms", latency)

    metrics_module.record_process_metrics("invalid", time.perf_counter(), reason="MultipleOneOfFieldsError")

    assert total.calls == [(1, {"status": "invalid"})]
    assert violations.calls == [(1, {"reason": "MultipleOneOfFieldsError"})]
    [(duration, attrs)] = latency.calls
    assert duration >= 0
    assert attrs == {"status": "invalid"}


def test_record_process_metrics_never_raises(monkeypatch):
    class _Broken:
        def add(self, *_a, **_kw):
            raise RuntimeError("exporter down")

        record = add

    monkeypatch.setattr(metrics_module, "process_total", _Broken())
    monkeypatch.setattr(metrics_module, "process_latency_ms", _Broken())

    metrics_module.record_process_metrics("ok", time.perf_counter())
