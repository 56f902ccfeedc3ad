"""
API layer for the discrete auction.

This module provides the line parser used by the command line, JSON
order validation, and the REST API.
"""

from .parser import parse_order_line, parse_orders, read_orders
from .validators import validate_order_data
from .rest_api import create_app, run_server

__all__ = [
    "parse_order_line",
    "parse_orders",
    "read_orders",
    "validate_order_data",
    "create_app",
    "run_server",
]
