"""
Line-oriented order input.

Each line describes one order as ``<S|B> <quantity> <price>``, for
example ``S 100 15.40``. Ingestion is best effort: blank, malformed,
or out-of-range lines are skipped, never reported as errors.
"""

import re
from decimal import Decimal, DecimalException
from itertools import islice
from typing import Dict, Iterable, List, Optional
import logging

from ..config.settings import Settings, get_settings
from ..core.discrete_auction import split_by_side
from ..core.order import Order, SUBUNITS_PER_UNIT
from ..core.order_types import OrderSide
from ..utils.logger import AuctionLogger

logger = logging.getLogger(__name__)
auction_logger = AuctionLogger()

# fields are separated by ASCII whitespace only
LINE_WHITESPACE = ' \t\n\x0b\f\r'
INPUT_LINE_SPLIT_PATTERN = re.compile(r'[ \t\n\x0b\f\r]+')
INTEGER_PATTERN = re.compile(r'^[+-]?[0-9]+$')
DECIMAL_PATTERN = re.compile(r'^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$')

# no accepted price has more than this many integer digits
MAX_PRICE_MAGNITUDE = 18

SIDE_POSITION = 0
QUANTITY_POSITION = 1
PRICE_POSITION = 2
SPLIT_LINE_SIZE = 3


def parse_price(token: str) -> Optional[int]:
    """
    Convert a decimal price token to subunits, truncating toward zero.

    Args:
        token: Plain ASCII decimal, optionally with an exponent

    Returns:
        Price in subunits, or None if the token is not a usable price
    """
    if not DECIMAL_PATTERN.fullmatch(token):
        return None

    try:
        price = Decimal(token)
        if not price.is_finite() or abs(price.adjusted()) > MAX_PRICE_MAGNITUDE:
            return None
        return int(price * SUBUNITS_PER_UNIT)
    except DecimalException:
        return None


def parse_order_line(line: str, settings: Optional[Settings] = None) -> Optional[Order]:
    """
    Parse one input line into an order.

    Args:
        line: Raw input line
        settings: Settings with the accepted quantity and price ranges

    Returns:
        Parsed Order, or None if the line is not a valid order
    """
    settings = settings or get_settings()

    line = line.rstrip(LINE_WHITESPACE)
    if not line:
        return None

    values = INPUT_LINE_SPLIT_PATTERN.split(line)
    if len(values) != SPLIT_LINE_SIZE:
        auction_logger.log_rejected_input(line, f"{len(values)} fields")
        return None

    try:
        side = OrderSide(values[SIDE_POSITION])
    except ValueError:
        auction_logger.log_rejected_input(line, "unknown side")
        return None

    quantity_token = values[QUANTITY_POSITION]
    if not INTEGER_PATTERN.fullmatch(quantity_token):
        auction_logger.log_rejected_input(line, "invalid quantity")
        return None
    quantity = int(quantity_token)

    price = parse_price(values[PRICE_POSITION])
    if price is None:
        auction_logger.log_rejected_input(line, "invalid price")
        return None

    if not settings.accepts_quantity(quantity) or not settings.accepts_price(price):
        auction_logger.log_rejected_input(line, "out of accepted range")
        return None

    return Order(side, quantity, price)


def parse_orders(lines: Iterable[str], settings: Optional[Settings] = None) -> List[Order]:
    """
    Parse input lines into orders.

    Only the first ``max_order_count`` lines are read; lines that do
    not describe a valid order are dropped.

    Args:
        lines: Input lines
        settings: Settings with input limits

    Returns:
        Orders in input order
    """
    settings = settings or get_settings()
    orders = []
    skipped = 0
    for line in islice(lines, settings.max_order_count):
        order = parse_order_line(line, settings)
        if order is None:
            skipped += 1
        else:
            orders.append(order)

    if skipped:
        logger.info(f"Skipped {skipped} invalid input lines")
    return orders


def read_orders(lines: Iterable[str], settings: Optional[Settings] = None) -> Dict[OrderSide, List[Order]]:
    """
    Read orders from a text stream and group them by side.

    Args:
        lines: Text stream or any iterable of lines
        settings: Settings with input limits

    Returns:
        Dictionary with a list of orders for each side
    """
    return split_by_side(parse_orders(lines, settings))
