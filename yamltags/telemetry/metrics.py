# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Metric instrument definitions for the tag processor."""

from __future__ import annotations

import logging
import time
from typing import Optional

from .runtime import meter

logger = logging.getLogger(__name__)

process_total = meter.create_counter(
    name="yamltags.process.total",
    description="Counts top-level struct processing calls, partitioned by outcome.",
    unit="1",
)

violation_total = meter.create_counter(
    name="yamltags.violation.total",
    description="Counts processing calls rejected by a tag rule, partitioned by reason.",
    unit="1",
)

default_applied_total = meter.create_counter(
    name="yamltags.default.applied.total",
    description="Counts zero-valued fields filled from a default directive.",
    unit="1",
)

process_latency_ms = meter.create_histogram(
    name="yamltags.process.latency.ms",
    description="Time taken to walk and validate one struct graph.",
    unit="ms",
)


def record_process_metrics(status: str, started_at: float, reason: Optional[str] = None) -> None:
    """Record the outcome of one top-level processing call.

    Args:
        status: ``"ok"`` or ``"invalid"``
        started_at: Timestamp from time.perf_counter() when processing started
        reason: Error class name when the call was rejected
    """
    duration_ms = (time.perf_counter() - started_at) * 1000.0
    try:
        process_latency_ms.record(duration_ms, {"status": status})
        process_total.add(1, {"status": status})
        if reason:
            violation_total.add(1, {"reason": reason})
    except Exception:
        # Telemetry must never interfere with processing
        logger.debug("Failed to record yamltags metrics", exc_info=True)


__all__ = [
    "default_applied_total",
    "process_latency_ms",
    "process_total",
    "record_process_metrics",
    "violation_total",
]
