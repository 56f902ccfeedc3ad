"""
Discrete (call) auction clearing.

Outline of the algorithm:

1. Prices arrive as integer subunits, so comparisons between prices
   are exact.
2. Orders that can never be filled are dropped and orders of one side
   at the same price are merged (see ``curves.clean_orders``).
3. Each side becomes a cumulative volume curve; the buy curve is kept
   in a sorted mapping for ceiling lookups.
4. The sell curve is scanned from the highest price down. For each sell
   price the cheapest buy level still willing to pay it is found, and
   the volume that can trade there is min(sellable, buyable). Overall
   cost is O(n log n).
"""

import logging
import threading
from datetime import datetime, timezone
from itertools import islice
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .curves import BuyCurve, SellCurve, build_curves
from .order import AuctionResult, Order
from .order_types import OrderSide
from ..config.settings import Settings, get_settings
from ..utils.logger import AuctionLogger
from ..utils.performance import PerformanceMonitor, get_performance_monitor, measure_latency

logger = logging.getLogger(__name__)


def match(sell_curve: SellCurve, buy_curve: BuyCurve) -> AuctionResult:
    """
    Find the volume-maximizing clearing price for two cumulative curves.

    Every (sell price, buy price) pair tied at the best volume is kept,
    in descending sell price order, and averaged into the clearing price.

    Args:
        sell_curve: Cumulative sell curve
        buy_curve: Cumulative buy curve

    Returns:
        AuctionResult for the best volume, or a no-deal result
    """
    if sell_curve.is_empty() or buy_curve.is_empty():
        return AuctionResult.no_deal()

    best_quantity = 0
    optimal_prices: List[int] = []

    # highest sell price first, so no second sort is needed
    for sell_point in reversed(sell_curve):
        buy_point = buy_curve.ceiling(sell_point.price)
        if buy_point is None:
            continue

        deal_quantity = min(sell_point.quantity, buy_point.quantity)
        if deal_quantity >= best_quantity:
            if deal_quantity > best_quantity:
                optimal_prices.clear()
                best_quantity = deal_quantity
            optimal_prices.append(sell_point.price)
            optimal_prices.append(buy_point.price)

    return AuctionResult.from_optimal_prices(optimal_prices, best_quantity)


class DiscreteAuction:
    """
    Call auction engine for a single security.

    Each call to ``clear`` builds fresh curves from the given orders, so
    one engine may serve many independent auctions. Only the run
    statistics are shared between calls.
    """

    def __init__(self, settings: Optional[Settings] = None, monitor: Optional[PerformanceMonitor] = None):
        """Initialize the auction engine."""
        self.settings = settings or get_settings()
        self.monitor = monitor or get_performance_monitor()
        self.auction_logger = AuctionLogger()
        self._lock = threading.Lock()

        # Statistics
        self.total_auctions_run = 0
        self.total_deals = 0
        self.total_volume = 0
        self.last_result: Optional[AuctionResult] = None
        self.start_time = datetime.now(timezone.utc)

        logger.info("Discrete auction engine initialized")

    def clear(self, sell_orders: Iterable[Order], buy_orders: Iterable[Order]) -> AuctionResult:
        """
        Run one auction over already validated orders.

        Args:
            sell_orders: Sell orders
            buy_orders: Buy orders

        Returns:
            AuctionResult for this batch
        """
        sell_orders = list(sell_orders)
        buy_orders = list(buy_orders)

        if self.settings.enable_performance_monitoring:
            with measure_latency(self.monitor, "auction_clear", self.auction_logger):
                result = self._clear(sell_orders, buy_orders)
        else:
            result = self._clear(sell_orders, buy_orders)

        self._record(result)
        return result

    def clear_orders(self, orders: Iterable[Order]) -> AuctionResult:
        """
        Run one auction over a mixed stream of orders.

        At most ``max_order_count`` orders are taken; the rest is ignored.

        Args:
            orders: Sell and buy orders in any order

        Returns:
            AuctionResult for this batch
        """
        by_side = split_by_side(islice(orders, self.settings.max_order_count))
        return self.clear(by_side[OrderSide.SELL], by_side[OrderSide.BUY])

    def _clear(self, sell_orders: Sequence[Order], buy_orders: Sequence[Order]) -> AuctionResult:
        sell_curve, buy_curve = build_curves(sell_orders, buy_orders)
        self.auction_logger.log_auction_run(len(sell_orders), len(buy_orders), len(sell_curve), len(buy_curve))

        result = match(sell_curve, buy_curve)
        self.auction_logger.log_auction_result(
            result.quantity,
            str(result.price) if result.is_deal else None,
            len(result.optimal_prices)
        )
        return result

    def _record(self, result: AuctionResult) -> None:
        with self._lock:
            self.total_auctions_run += 1
            if result.is_deal:
                self.total_deals += 1
                self.total_volume += result.quantity
            self.last_result = result

        self.monitor.increment_counter("auctions_run")
        if result.is_deal:
            self.monitor.increment_counter("auction_deals")

    def get_statistics(self) -> Dict[str, Any]:
        """Get engine statistics."""
        uptime = datetime.now(timezone.utc) - self.start_time

        with self._lock:
            return {
                "uptime_seconds": uptime.total_seconds(),
                "total_auctions_run": self.total_auctions_run,
                "total_deals": self.total_deals,
                "total_volume": self.total_volume,
                "last_result": self.last_result.to_dict() if self.last_result else None,
            }


def split_by_side(orders: Iterable[Order]) -> Dict[OrderSide, List[Order]]:
    """Group orders by side; both sides are always present."""
    by_side: Dict[OrderSide, List[Order]] = {side: [] for side in OrderSide}
    for order in orders:
        by_side[order.side].append(order)
    return by_side


def run_auction(sell_orders: Iterable[Order], buy_orders: Iterable[Order]) -> AuctionResult:
    """
    Clear one auction without engine bookkeeping.

    Args:
        sell_orders: Sell orders
        buy_orders: Buy orders

    Returns:
        AuctionResult for this batch
    """
    return match(*build_curves(list(sell_orders), list(buy_orders)))
