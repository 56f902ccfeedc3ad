"""
Performance monitoring and benchmarking utilities.

This module provides tools for recording auction clearing latency,
process resource usage, and benchmarking functions.
"""

import time
import psutil
import threading
from contextlib import contextmanager
from typing import Dict, List, Any, Callable, Optional
import logging

from .logger import AuctionLogger

logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Performance monitoring for the auction engine.

    Tracks latency metrics, counters, memory usage, and CPU load.
    """

    def __init__(self):
        """Initialize performance monitor."""
        self.metrics: Dict[str, List[float]] = {}
        self.counters: Dict[str, int] = {}
        self.start_time = time.time()
        self.lock = threading.Lock()

        # System monitoring
        self.process = psutil.Process()
        self.initial_memory = self.process.memory_info().rss

    def record_metric(self, name: str, value: float) -> None:
        """
        Record a performance metric.

        Args:
            name: Metric name
            value: Metric value
        """
        with self.lock:
            self.metrics.setdefault(name, []).append(value)

    def increment_counter(self, name: str, value: int = 1) -> None:
        """
        Increment a counter metric.

        Args:
            name: Counter name
            value: Increment value
        """
        with self.lock:
            self.counters[name] = self.counters.get(name, 0) + value

    def get_metric_stats(self, name: str) -> Dict[str, float]:
        """
        Get statistics for a metric.

        Args:
            name: Metric name

        Returns:
            Dictionary with min, max, avg, count
        """
        with self.lock:
            return _summarize(self.metrics.get(name, []))

    def get_counter(self, name: str) -> int:
        """Get counter value."""
        with self.lock:
            return self.counters.get(name, 0)

    def get_system_stats(self) -> Dict[str, Any]:
        """Get current system statistics."""
        try:
            memory_info = self.process.memory_info()
            return {
                "memory_rss_mb": memory_info.rss / 1024 / 1024,
                "memory_percent": self.process.memory_percent(),
                "cpu_percent": self.process.cpu_percent(),
                "uptime_seconds": time.time() - self.start_time,
                "memory_growth_mb": (memory_info.rss - self.initial_memory) / 1024 / 1024
            }
        except psutil.Error as e:
            logger.error(f"Error getting system stats: {str(e)}")
            return {}

    def get_summary(self) -> Dict[str, Any]:
        """Get performance summary."""
        with self.lock:
            summary = {
                "uptime_seconds": time.time() - self.start_time,
                "counters": dict(self.counters),
                "metrics": {name: _summarize(values) for name, values in self.metrics.items() if values},
            }

        summary.update(self.get_system_stats())
        return summary


def _summarize(values: List[float]) -> Dict[str, float]:
    if not values:
        return {"min": 0, "max": 0, "avg": 0, "count": 0}
    return {
        "min": min(values),
        "max": max(values),
        "avg": sum(values) / len(values),
        "count": len(values)
    }


@contextmanager
def measure_latency(monitor: PerformanceMonitor, operation_name: str,
                    auction_logger: Optional[AuctionLogger] = None):
    """
    Context manager to measure operation latency.

    Args:
        monitor: Performance monitor instance
        operation_name: Name of the operation being measured
        auction_logger: Also log the latency as a performance metric
    """
    start_time = time.perf_counter()
    try:
        yield
    finally:
        latency_ms = (time.perf_counter() - start_time) * 1000
        metric_name = f"{operation_name}_latency_ms"
        monitor.record_metric(metric_name, latency_ms)
        if auction_logger is not None:
            auction_logger.log_performance_metric(metric_name, round(latency_ms, 3))


def benchmark_function(func: Callable, *args, iterations: int = 10, **kwargs) -> Dict[str, float]:
    """
    Benchmark a function execution.

    Args:
        func: Function to benchmark
        *args: Function arguments
        iterations: Number of timed runs
        **kwargs: Function keyword arguments

    Returns:
        Dictionary with timing statistics in milliseconds
    """
    # Warm up
    func(*args, **kwargs)

    times = []
    for _ in range(iterations):
        start_time = time.perf_counter()
        func(*args, **kwargs)
        times.append((time.perf_counter() - start_time) * 1000)

    avg = sum(times) / len(times)
    return {
        "min": min(times),
        "max": max(times),
        "avg": avg,
        "std": (sum((t - avg) ** 2 for t in times) / len(times)) ** 0.5
    }


# Global performance monitor instance
performance_monitor = PerformanceMonitor()


def get_performance_monitor() -> PerformanceMonitor:
    """Get the global performance monitor instance."""
    return performance_monitor
