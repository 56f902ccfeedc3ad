"""
Input validation utilities for the API layer.

This module validates JSON order objects before they are turned into
auction orders. Validators return a ``(is_valid, error, value)`` tuple
instead of raising, so callers can skip bad input and carry on.
"""

from typing import Dict, Any, Optional, Tuple
import logging

from ..config.settings import Settings, get_settings
from ..core.order import Order
from ..core.order_types import OrderSide
from .parser import parse_price

logger = logging.getLogger(__name__)


def validate_order_side(side: Any) -> Tuple[bool, Optional[str], Optional[OrderSide]]:
    """
    Validate order side.

    Accepts the tags "S"/"B" as well as "sell"/"buy" in any case.

    Args:
        side: Order side to validate

    Returns:
        Tuple of (is_valid, error_message, parsed_order_side)
    """
    if not side:
        return False, "Order side is required", None

    if not isinstance(side, str):
        return False, "Order side must be a string", None

    tag = side.strip().upper()
    if tag in OrderSide.__members__:
        return True, None, OrderSide[tag]

    try:
        return True, None, OrderSide(tag)
    except ValueError:
        valid_sides = [s.value for s in OrderSide]
        return False, f"Invalid order side: {side}. Must be one of: {valid_sides}", None


def validate_quantity(quantity: Any, settings: Optional[Settings] = None) -> Tuple[bool, Optional[str], Optional[int]]:
    """
    Validate order quantity.

    Args:
        quantity: Quantity to validate, an integer or integer string
        settings: Settings with the accepted range

    Returns:
        Tuple of (is_valid, error_message, parsed_quantity)
    """
    settings = settings or get_settings()

    if quantity is None:
        return False, "Quantity is required", None

    if isinstance(quantity, bool) or isinstance(quantity, float):
        return False, f"Invalid quantity format: {quantity}", None

    try:
        qty = int(quantity)
    except (ValueError, TypeError):
        return False, f"Invalid quantity format: {quantity}", None

    if not settings.accepts_quantity(qty):
        return False, f"Quantity out of range [{settings.min_quantity}, {settings.max_quantity}]: {qty}", None

    return True, None, qty


def validate_price(price: Any, settings: Optional[Settings] = None) -> Tuple[bool, Optional[str], Optional[int]]:
    """
    Validate order price.

    The price is given in currency units and converted to subunits.

    Args:
        price: Price to validate
        settings: Settings with the accepted range

    Returns:
        Tuple of (is_valid, error_message, parsed_price_in_subunits)
    """
    settings = settings or get_settings()

    if price is None:
        return False, "Price is required", None

    if isinstance(price, bool):
        return False, f"Invalid price format: {price}", None

    subunits = parse_price(str(price).strip())
    if subunits is None:
        return False, f"Invalid price format: {price}", None

    if not settings.accepts_price(subunits):
        return False, f"Price out of range: {price}", None

    return True, None, subunits


def validate_order_data(data: Any, settings: Optional[Settings] = None) -> Tuple[bool, Optional[str], Optional[Order]]:
    """
    Validate a complete JSON order.

    Args:
        data: Order object with side, quantity and price
        settings: Settings with the accepted ranges

    Returns:
        Tuple of (is_valid, error_message, order)
    """
    if not isinstance(data, dict):
        return False, "Order must be an object", None

    for field in ('side', 'quantity', 'price'):
        if field not in data:
            return False, f"Missing required field: {field}", None

    is_valid, error, side = validate_order_side(data['side'])
    if not is_valid:
        return False, error, None

    is_valid, error, quantity = validate_quantity(data['quantity'], settings)
    if not is_valid:
        return False, error, None

    is_valid, error, price = validate_price(data['price'], settings)
    if not is_valid:
        return False, error, None

    return True, None, Order(side, quantity, price)


def validate_auction_request(data: Any) -> Tuple[bool, Optional[str], Optional[list]]:
    """
    Validate the envelope of an auction request.

    Args:
        data: Request body

    Returns:
        Tuple of (is_valid, error_message, raw_orders)
    """
    if not isinstance(data, dict):
        return False, "Request body must be a JSON object", None

    orders = data.get('orders')
    if orders is None:
        return False, "Missing required field: orders", None

    if not isinstance(orders, list):
        return False, "Field 'orders' must be a list", None

    return True, None, orders
