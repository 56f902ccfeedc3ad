"""
Order side definitions for the discrete auction.

An auction order is either an offer to sell or a bid to buy. The single
letter values are the tags used by the line-oriented input format.
"""

from enum import Enum


class OrderSide(Enum):
    """
    Order sides for buy and sell orders.

    - SELL: Orders to sell the security ("S")
    - BUY: Orders to purchase the security ("B")
    """
    SELL = "S"
    BUY = "B"

    @property
    def opposite(self) -> "OrderSide":
        """Return the counterparty side."""
        return OrderSide.BUY if self is OrderSide.SELL else OrderSide.SELL


def validate_order_side(side: str) -> OrderSide:
    """
    Validate and convert a side tag to OrderSide enum.

    Tags are case-sensitive: only "S" and "B" are accepted.

    Args:
        side: String representation of order side

    Returns:
        OrderSide enum value

    Raises:
        ValueError: If side is invalid
    """
    try:
        return OrderSide(side)
    except ValueError:
        raise ValueError(f"Invalid order side: {side}. Must be one of: {[s.value for s in OrderSide]}")
