"""
Cumulative supply and demand curves for the discrete auction.

Raw orders are cleaned per side (infeasible orders dropped, orders at
the same price merged) and turned into cumulative volume curves:

- the sell curve lists, by ascending price, how much can be sold at or
  below each price;
- the buy curve maps each price to how much can be bought at or above
  it, and answers ceiling queries in O(log n) via a SortedDict.
"""

from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple
import logging

from sortedcontainers import SortedDict

from .feasibility import FeasibleOrderFilter
from .order import Order
from .order_types import OrderSide

logger = logging.getLogger(__name__)


class CurvePoint(NamedTuple):
    """A price and the cumulative quantity available at that price."""
    price: int
    quantity: int


class SellCurve:
    """
    Cumulative sell curve, strictly increasing in price.

    Read-only once built.
    """

    def __init__(self, points: Iterable[CurvePoint] = ()):
        self._points: Tuple[CurvePoint, ...] = tuple(points)

    @property
    def points(self) -> Tuple[CurvePoint, ...]:
        return self._points

    def is_empty(self) -> bool:
        return not self._points

    def __iter__(self) -> Iterator[CurvePoint]:
        return iter(self._points)

    def __reversed__(self) -> Iterator[CurvePoint]:
        return reversed(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __repr__(self) -> str:
        return f"SellCurve(levels={len(self._points)})"


class BuyCurve:
    """
    Cumulative buy curve keyed by price.

    Each key maps to the total quantity of buy orders whose limit is at
    or above that key. Read-only once built.
    """

    def __init__(self, levels: Optional[Dict[int, int]] = None):
        self._levels = SortedDict(levels or {})

    def ceiling(self, price: int) -> Optional[CurvePoint]:
        """
        Find the lowest buy price greater than or equal to ``price``.

        Args:
            price: Sell price in subunits

        Returns:
            CurvePoint for the matching buy level, or None if no buyer
            would pay ``price``
        """
        index = self._levels.bisect_left(price)
        if index == len(self._levels):
            return None
        return CurvePoint(*self._levels.peekitem(index))

    def get(self, price: int) -> Optional[int]:
        return self._levels.get(price)

    def points(self) -> List[CurvePoint]:
        """Return curve points by ascending price."""
        return [CurvePoint(price, quantity) for price, quantity in self._levels.items()]

    def is_empty(self) -> bool:
        return not self._levels

    def __len__(self) -> int:
        return len(self._levels)

    def __contains__(self, price: int) -> bool:
        return price in self._levels

    def __repr__(self) -> str:
        return f"BuyCurve(levels={len(self._levels)})"


def clean_orders(orders: Iterable[Order], side: OrderSide, threshold_price: int) -> List[Order]:
    """
    Clean orders of one side before building a curve:
    - orders that can never be filled are dropped;
    - orders with the same price are merged into one;
    - sells are sorted by ascending price, buys by descending price.

    Args:
        orders: Orders of one side
        side: Side of the orders in ``orders``
        threshold_price: Best opposing price beyond which nothing can fill

    Returns:
        Aggregated and sorted list of orders
    """
    volume_by_price: Dict[int, int] = defaultdict(int)
    for order in filter(FeasibleOrderFilter(side, threshold_price), orders):
        volume_by_price[order.price] += order.quantity

    return sorted(
        (Order(side, quantity, price) for price, quantity in volume_by_price.items()),
        reverse=side is OrderSide.BUY,
    )


def build_sell_curve(sell_orders: Sequence[Order]) -> SellCurve:
    """
    Accumulate cleaned sell orders into a sell curve.

    Args:
        sell_orders: Cleaned sell orders sorted by ascending price

    Returns:
        SellCurve with the quantity sellable at or below each price
    """
    points = []
    cumulative_quantity = 0
    for order in sell_orders:
        cumulative_quantity += order.quantity
        points.append(CurvePoint(order.price, cumulative_quantity))
    return SellCurve(points)


def build_buy_curve(buy_orders: Sequence[Order]) -> BuyCurve:
    """
    Accumulate cleaned buy orders into a buy curve.

    Args:
        buy_orders: Cleaned buy orders sorted by descending price

    Returns:
        BuyCurve with the quantity buyable at or above each price
    """
    levels = {}
    cumulative_quantity = 0
    for order in buy_orders:
        cumulative_quantity += order.quantity
        levels[order.price] = cumulative_quantity
    return BuyCurve(levels)


def build_curves(sell_orders: Sequence[Order], buy_orders: Sequence[Order]) -> Tuple[SellCurve, BuyCurve]:
    """
    Build both cumulative curves for one auction run.

    If either side has no orders, both curves are empty.

    Args:
        sell_orders: Raw sell orders
        buy_orders: Raw buy orders

    Returns:
        Tuple of (sell_curve, buy_curve)
    """
    if not sell_orders or not buy_orders:
        logger.debug("One side of the auction is empty, no curves built")
        return SellCurve(), BuyCurve()

    best_buy_price = max(order.price for order in buy_orders)
    best_sell_price = min(order.price for order in sell_orders)

    sell_curve = build_sell_curve(clean_orders(sell_orders, OrderSide.SELL, best_buy_price))
    buy_curve = build_buy_curve(clean_orders(buy_orders, OrderSide.BUY, best_sell_price))

    logger.debug(f"Built curves: {len(sell_curve)} sell levels, {len(buy_curve)} buy levels")
    return sell_curve, buy_curve
