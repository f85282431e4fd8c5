"""Telemetry for report conversion health and latency."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List

from contracts import ResolvedTime


@dataclass
class LatencyStats:
    p50_ms: float
    p95_ms: float
    max_ms: float


@dataclass
class ConversionSnapshot:
    converted: int
    dropped: int
    degraded_time: int
    drops_by_error: Dict[str, int]
    latency: LatencyStats

    def to_dict(self) -> Dict[str, object]:
        return {
            "converted": self.converted,
            "dropped": self.dropped,
            "degraded_time": self.degraded_time,
            "drops_by_error": dict(self.drops_by_error),
            "latency_ms": {
                "p50": self.latency.p50_ms,
                "p95": self.latency.p95_ms,
                "max": self.latency.max_ms,
            },
        }


@dataclass
class ConversionMonitor:
    latency_samples_ms: List[float] = field(default_factory=list)
    converted: int = 0
    degraded_time: int = 0
    drops_by_error: Counter = field(default_factory=Counter)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_converted(self, stamp: ResolvedTime, latency_ms: float) -> None:
        with self._lock:
            self.converted += 1
            if stamp.degraded:
                self.degraded_time += 1
            self.latency_samples_ms.append(latency_ms)

    def record_dropped(self, error: Exception) -> None:
        with self._lock:
            self.drops_by_error[type(error).__name__] += 1

    def summarize(self) -> LatencyStats:
        with self._lock:
            values = sorted(self.latency_samples_ms)
        if not values:
            return LatencyStats(p50_ms=0.0, p95_ms=0.0, max_ms=0.0)
        max_ms = values[-1]
        p50_ms = values[int(0.5 * (len(values) - 1))]
        p95_ms = values[int(0.95 * (len(values) - 1))]
        return LatencyStats(p50_ms=p50_ms, p95_ms=p95_ms, max_ms=max_ms)

    def snapshot(self) -> ConversionSnapshot:
        latency = self.summarize()
        with self._lock:
            return ConversionSnapshot(
                converted=self.converted,
                dropped=sum(self.drops_by_error.values()),
                degraded_time=self.degraded_time,
                drops_by_error=dict(self.drops_by_error),
                latency=latency,
            )
