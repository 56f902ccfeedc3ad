"""
Order and AuctionResult data structures for the discrete auction.

Prices are kept as integers in the smallest currency subunit so that
comparisons between two different prices are always exact. Only the
clearing price of a result is rendered back into a two-decimal Decimal.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Dict, Any, Sequence, Tuple

from .order_types import OrderSide

SUBUNITS_PER_UNIT = Decimal(100)
PRICE_QUANTUM = Decimal('0.01')

NO_DEAL = "0 n/a"


def subunits_to_amount(subunits: int) -> Decimal:
    """Convert an integer subunit price into a two-decimal currency amount."""
    return (Decimal(subunits) / SUBUNITS_PER_UNIT).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Order:
    """
    Represents a single auction order.

    Orders are immutable once created and compare by price only,
    which is the only priority the call auction knows about.
    """

    side: OrderSide
    quantity: int
    price: int

    def __post_init__(self):
        """Validate order after initialization."""
        self._validate()

    def _validate(self) -> None:
        """
        Validate order parameters.

        Raises:
            ValueError: If order parameters are invalid
        """
        if not isinstance(self.side, OrderSide):
            raise ValueError(f"Side must be an OrderSide, got: {self.side!r}")

        if not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValueError(f"Quantity must be a positive integer, got: {self.quantity!r}")

        if not isinstance(self.price, int) or self.price <= 0:
            raise ValueError(f"Price must be a positive integer number of subunits, got: {self.price!r}")

    def __lt__(self, other: "Order") -> bool:
        return self.price < other.price

    def __le__(self, other: "Order") -> bool:
        return self.price <= other.price

    def __gt__(self, other: "Order") -> bool:
        return self.price > other.price

    def __ge__(self, other: "Order") -> bool:
        return self.price >= other.price

    @property
    def is_sell(self) -> bool:
        return self.side is OrderSide.SELL

    @property
    def price_amount(self) -> Decimal:
        """Limit price as a two-decimal currency amount."""
        return subunits_to_amount(self.price)

    def to_dict(self) -> Dict[str, Any]:
        """Convert order to dictionary for serialization."""
        return {
            "side": self.side.value,
            "quantity": self.quantity,
            "price": str(self.price_amount),
        }


@dataclass(frozen=True)
class AuctionResult:
    """
    Outcome of one auction run.

    A result with zero quantity means no deal was possible; its price
    is None. Otherwise ``price`` is the clearing price in currency units
    with exactly two fractional digits.
    """

    quantity: int = 0
    price: Optional[Decimal] = None
    optimal_prices: Tuple[int, ...] = field(default=(), repr=False)

    @classmethod
    def no_deal(cls) -> "AuctionResult":
        return cls()

    @classmethod
    def from_optimal_prices(cls, optimal_prices: Sequence[int], best_quantity: int) -> "AuctionResult":
        """
        Build a result from every price tied at the best volume.

        The clearing price is the mean of all tied sell and buy prices:
        the integer mean is rounded up to a whole subunit, then converted
        to currency units with half-up rounding to two places.

        Args:
            optimal_prices: Tied prices in subunits, sells and buys mixed
            best_quantity: Maximum tradable volume

        Returns:
            AuctionResult instance
        """
        if best_quantity <= 0 or not optimal_prices:
            return cls.no_deal()

        total = sum(optimal_prices)
        count = len(optimal_prices)
        mean_subunits, remainder = divmod(total, count)
        if remainder:
            mean_subunits += 1

        return cls(
            quantity=best_quantity,
            price=subunits_to_amount(mean_subunits),
            optimal_prices=tuple(optimal_prices),
        )

    @property
    def is_deal(self) -> bool:
        """Check if the auction produced a trade."""
        return self.quantity > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "quantity": self.quantity,
            "price": str(self.price) if self.is_deal else None,
            "result": str(self),
        }

    def __str__(self) -> str:
        if not self.is_deal:
            return NO_DEAL
        return f"{self.quantity} {self.price:.2f}"
