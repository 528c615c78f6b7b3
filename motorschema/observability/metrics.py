"""Render counters and latency kept in process memory."""

from __future__ import annotations

import time
from collections import defaultdict
from dataclasses import dataclass, field


@dataclass
class MetricsCollector:
    render_count: int = 0
    empty_count: int = 0
    format_counts: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    error_counts: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    latencies: list[float] = field(default_factory=list)
    _start_time: float = field(default_factory=time.time)

    def record_render(self, output_format: str, latency_ms: float = 0.0, empty: bool = False) -> None:
        self.render_count += 1
        self.format_counts[output_format] += 1
        if empty:
            self.empty_count += 1
        if latency_ms:
            self.latencies.append(latency_ms)
            if len(self.latencies) > 1000:
                self.latencies = self.latencies[-500:]

    def record_error(self, output_format: str) -> None:
        self.error_counts[output_format] += 1

    def summary(self) -> dict:
        avg_latency = sum(self.latencies) / len(self.latencies) if self.latencies else 0
        return {
            "uptime_seconds": int(time.time() - self._start_time),
            "total_renders": self.render_count,
            "empty_renders": self.empty_count,
            "formats": dict(self.format_counts),
            "errors": dict(self.error_counts),
            "avg_latency_ms": round(avg_latency, 3),
        }
