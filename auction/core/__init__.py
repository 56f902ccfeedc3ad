"""
Core discrete auction components.

This module contains the order and result types, the feasibility
filter, the cumulative curve builder, and the clearing algorithm.
"""

from .order import Order, AuctionResult
from .order_types import OrderSide
from .feasibility import is_feasible, FeasibleOrderFilter
from .curves import CurvePoint, SellCurve, BuyCurve, build_curves
from .discrete_auction import DiscreteAuction, match, run_auction

__all__ = [
    "Order",
    "AuctionResult",
    "OrderSide",
    "is_feasible",
    "FeasibleOrderFilter",
    "CurvePoint",
    "SellCurve",
    "BuyCurve",
    "build_curves",
    "DiscreteAuction",
    "match",
    "run_auction",
]
