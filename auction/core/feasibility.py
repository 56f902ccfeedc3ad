"""
Feasibility checks for auction orders.

An order is feasible when it could be filled against the best price
on the opposite side: a sell must not ask more than the highest bid,
a buy must not bid less than the lowest ask.
"""

from .order import Order
from .order_types import OrderSide


def is_feasible(order: Order, threshold_price: int) -> bool:
    """
    Check whether an order can clear against the best opposing price.

    Args:
        order: Order to check
        threshold_price: Highest buy price for sells, lowest sell price for buys

    Returns:
        True if the order could be filled
    """
    if order.side is OrderSide.SELL:
        return order.price <= threshold_price
    return order.price >= threshold_price


class FeasibleOrderFilter:
    """Predicate bound to one side and threshold, for use with filter()."""

    def __init__(self, side: OrderSide, threshold_price: int):
        self.side = side
        self.threshold_price = threshold_price

    def __call__(self, order: Order) -> bool:
        return order.side is self.side and is_feasible(order, self.threshold_price)

    def __repr__(self) -> str:
        return f"FeasibleOrderFilter(side={self.side.name}, threshold_price={self.threshold_price})"
