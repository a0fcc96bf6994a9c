"""
Palette Atlas Metrics Collection
In-process metrics collection for monitoring and performance tracking.
"""
import time
from collections import defaultdict, Counter
from contextlib import contextmanager
from typing import Any, Dict, List, Optional
from threading import Lock

from loguru import logger


class MetricsCollector:
    """Simple in-process metrics collector."""
    
    def __init__(self):
        """Initialize metrics collector."""
        self._lock = Lock()
        self._counters: Dict[str, int] = Counter()
        self._timings: Dict[str, List[float]] = defaultdict(list)
        self._sample_counts: List[int] = []
        self._start_time = time.time()
    
    def increment_request_count(self, operation: str):
        """Increment request counter for an operation ("palette", "atlas", ...)."""
        with self._lock:
            self._counters[f"{operation}_requests_total"] += 1
    
    def increment_empty_count(self, operation: str):
        """Increment counter of requests that produced an empty result."""
        with self._lock:
            self._counters[f"{operation}_empty_total"] += 1
    
    def increment_failure_count(self, error_type: str):
        """Increment failure counter by error type."""
        with self._lock:
            self._counters[f"failed_total_{error_type}"] += 1
    
    def record_timing(self, operation: str, duration_ms: float):
        """Record timing for an operation."""
        with self._lock:
            self._timings[f"{operation}_duration_ms"].append(duration_ms)
    
    def record_sample_count(self, count: int):
        """Record number of pixel samples fed to clustering."""
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
        """Get pixel sample count statistics."""
        with self._lock:
            if not self._sample_counts:
                return {}
            
            return {
                "count": len(self._sample_counts),
                "mean": sum(self._sample_counts) / len(self._sample_counts),
                "min": min(self._sample_counts),
                "max": max(self._sample_counts)
            }
    
    def get_uptime_seconds(self) -> float:
        """Get service uptime in seconds."""
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
    def _percentile(data: List[float], percentile: int) -> float:
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


@contextmanager
def stage_timer(stage: str, **fields):
    """Time a pipeline stage and record it on the global collector."""
    start_time = time.time()
    try:
        yield
    finally:
        duration_ms = (time.time() - start_time) * 1000
        get_metrics().record_timing(stage, duration_ms)
        logger.bind(**fields).debug(f"Stage {stage} completed in {duration_ms:.1f}ms")
