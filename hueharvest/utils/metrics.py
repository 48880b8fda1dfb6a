"""
hueharvest Metrics Collection
In-process metrics collection for extraction counts and stage timings.
"""
import time
from collections import defaultdict, deque, Counter
from typing import Any, Deque, Dict, Optional, Sequence
from threading import Lock

# Per-series history kept for timing and sample-count stats
MAX_SERIES_LENGTH = 1000


class MetricsCollector:
    """Simple in-process metrics collector."""

    def __init__(self, max_series_length: int = MAX_SERIES_LENGTH):
        """Initialize metrics collector; series keep only the newest max_series_length values."""
        self._lock = Lock()
        self._max_series_length = max_series_length
        self._counters: Dict[str, int] = Counter()
        self._timings: Dict[str, Deque[float]] = defaultdict(self._new_series)
        self._sample_counts: Deque[int] = self._new_series()
        self._start_time = time.time()

    def _new_series(self) -> Deque:
        return deque(maxlen=self._max_series_length)

    def increment(self, name: str, amount: int = 1):
        """Increment a named counter."""
        with self._lock:
            self._counters[name] += amount

    def increment_request_count(self, operation: str):
        """Increment request counter for a facade operation."""
        self.increment(f"{operation}_requests_total")

    def increment_failure_count(self, error_type: str):
        """Increment failure counter by error type."""
        self.increment(f"{error_type}_failed_total")

    def record_timing(self, operation: str, duration_ms: float):
        """Record timing for an operation."""
        with self._lock:
            self._timings[f"{operation}_duration_ms"].append(duration_ms)

    def record_sample_count(self, count: int):
        """Record how many points the sampler kept."""
        with self._lock:
            self._sample_counts.append(count)

    def get_counters(self) -> Dict[str, int]:
        """Get current counter values."""
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        """Get timing statistics."""
        with self._lock:
            stats = {}
            for operation, timings in self._timings.items():
                if timings:
                    stats[operation] = {
                        "count": len(timings),
                        "mean": sum(timings) / len(timings),
                        "min": min(timings),
                        "max": max(timings),
                        "p50": self._percentile(timings, 50),
                        "p95": self._percentile(timings, 95)
                    }
            return stats

    def get_sample_count_stats(self) -> Dict[str, float]:
        """Get sampled point count statistics."""
        with self._lock:
            if not self._sample_counts:
                return {}

            return {
                "count": len(self._sample_counts),
                "mean": sum(self._sample_counts) / len(self._sample_counts),
                "min": min(self._sample_counts),
                "max": max(self._sample_counts),
            }

    def get_uptime_seconds(self) -> float:
        """Get collector uptime in seconds."""
        return time.time() - self._start_time

    def get_summary(self) -> Dict[str, Any]:
        """Get complete metrics summary."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
            "sample_count_stats": self.get_sample_count_stats()
        }

    def reset(self):
        """Reset all metrics (for testing)."""
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._sample_counts.clear()
            self._start_time = time.time()

    @staticmethod
    def _percentile(data: Sequence[float], percentile: int) -> float:
        """Calculate percentile of data."""
        if not data:
            return 0.0

        sorted_data = sorted(data)
        k = (len(sorted_data) - 1) * percentile / 100
        f = int(k)
        c = k - f

        if f + 1 < len(sorted_data):
            return sorted_data[f] + c * (sorted_data[f + 1] - sorted_data[f])
        else:
            return sorted_data[f]


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    global _metrics
    if _metrics is not None:
        _metrics.reset()
