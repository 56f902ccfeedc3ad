"""
Utility modules for the discrete auction.

This module provides logging, performance monitoring, and other
utility functions for the auction engine.
"""

from .logger import setup_logging, AuctionLogger
from .performance import PerformanceMonitor, benchmark_function, measure_latency, get_performance_monitor

__all__ = [
    "setup_logging",
    "AuctionLogger",
    "PerformanceMonitor",
    "benchmark_function",
    "measure_latency",
    "get_performance_monitor",
]
