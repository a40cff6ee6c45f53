# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Telemetry package - OpenTelemetry instruments for the tag processor."""

from .metrics import (
    default_applied_total,
    process_latency_ms,
    process_total,
    record_process_metrics,
    violation_total,
)
from .runtime import get_tracer, meter

__all__ = [
    "default_applied_total",
    "get_tracer",
    "meter",
    "process_latency_ms",
    "process_total",
    "record_process_metrics",
    "violation_total",
]
