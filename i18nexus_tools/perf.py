# -*- coding: utf-8 -*-
"""
Performance monitor and completion report.

The monitor is handed to the wrapper by its caller; it records durations for
named spans and reports them through logging. A disabled monitor records
nothing, so callers never need to check whether monitoring is on.

    monitor = PerformanceMonitor(enabled=True)
    with monitor.measure("parse", file="src/App.tsx"):
        ...
    monitor.flush()
"""
from __future__ import annotations

import dataclasses
import itertools
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .utils.logging import compact_json

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class PerformanceMetric:
    name: str
    duration_ms: float
    timestamp: float
    metadata: Dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class PerformanceReport:
    total_duration_ms: float
    total_operations: int
    average_duration_ms: float
    slowest_operation: str
    fastest_operation: str


class PerformanceMonitor:
    def __init__(self, enabled: bool = True, verbose: bool = False) -> None:
        self.enabled = enabled
        self.verbose = verbose
        self.metrics: List[PerformanceMetric] = []
        self._open: Dict[int, Tuple[str, float, Dict[str, Any]]] = {}
        self._ids = itertools.count(1)

    def start(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> Optional[int]:
        if not self.enabled:
            return None
        span = next(self._ids)
        self._open[span] = (name, time.perf_counter(), dict(metadata or {}))
        return span

    def end(self, span: Optional[int], metadata: Optional[Dict[str, Any]] = None) -> float:
        """Close ``span`` and return its duration in milliseconds (0.0 when not recorded)."""
        if span is None or span not in self._open:
            return 0.0
        name, started, meta = self._open.pop(span)
        duration = (time.perf_counter() - started) * 1000.0
        meta.update(metadata or {})
        self.metrics.append(PerformanceMetric(name, duration, time.time(), meta))
        if self.verbose:
            logger.info("%s took %.2fms %s", name, duration, compact_json(meta))
        else:
            logger.debug("%s took %.2fms", name, duration)
        return duration

    @contextmanager
    def measure(self, name: str, **metadata: Any) -> Iterator[Dict[str, Any]]:
        """Time a block; extra metadata can be added to the yielded dict."""
        span = self.start(name, metadata)
        extra: Dict[str, Any] = {}
        try:
            yield extra
        finally:
            self.end(span, extra)

    def report(self) -> Optional[PerformanceReport]:
        if not self.metrics:
            return None
        total = sum(m.duration_ms for m in self.metrics)
        slowest = max(self.metrics, key=lambda m: m.duration_ms)
        fastest = min(self.metrics, key=lambda m: m.duration_ms)
        return PerformanceReport(
            total_duration_ms=total,
            total_operations=len(self.metrics),
            average_duration_ms=total / len(self.metrics),
            slowest_operation=slowest.name,
            fastest_operation=fastest.name,
        )

    def print_report(self) -> None:
        report = self.report()
        if report is None:
            return
        print("\nPerformance report")
        print(f"  Operations: {report.total_operations}")
        print(f"  Total: {report.total_duration_ms:.2f}ms")
        print(f"  Average: {report.average_duration_ms:.2f}ms")
        print(f"  Slowest: {report.slowest_operation}")
        print(f"  Fastest: {report.fastest_operation}")

    def flush(self) -> None:
        report = self.report()
        if report is not None:
            logger.info("Performance summary %s", compact_json(dataclasses.asdict(report)))
        self.metrics.clear()
        self._open.clear()


# ── Completion report ────────────────────────────────────────────────────────

def format_duration(ms: float) -> str:
    if ms >= 1000:
        return f"{ms / 1000:.2f}s"
    return f"{ms:.0f}ms"


def completion_report(
    total_ms: float,
    timings: Sequence[Tuple[str, float]],
    modified: int,
    slowest: int = 3,
) -> str:
    """Summary printed after a wrapper run; ``timings`` holds every file that was read."""
    count = len(timings)
    lines = [
        "",
        "Translation wrapper completed",
        f"  Total time: {format_duration(total_ms)}",
        f"  Files scanned: {count}",
        f"  Files modified: {modified}",
    ]
    if count:
        avg = sum(ms for _, ms in timings) / count
        lines.append(f"  Average per file: {format_duration(avg)}")
        ranked = sorted(timings, key=lambda item: item[1], reverse=True)[:slowest]
        lines.append("  Slowest files:")
        for path, ms in ranked:
            lines.append(f"    {path}: {format_duration(ms)}")
    return "\n".join(lines)
