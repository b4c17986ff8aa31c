"""Inventory snapshot model used by the finance calculations."""

from dataclasses import dataclass
from decimal import Decimal

from stockwise.domain.money import to_decimal

UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class InventoryItem:
    """A single stock line in an inventory snapshot.

    ``price`` and ``cost_price`` accept ints, floats and numeric strings and
    are stored as Decimal.
    """

    id: str
    name: str
    quantity: int
    price: Decimal
    category: str | None = None
    cost_price: Decimal | None = None  # None means "estimate from price"

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", to_decimal(self.price))
        if self.cost_price is not None:
            object.__setattr__(self, "cost_price", to_decimal(self.cost_price))

    @property
    def category_key(self) -> str:
        return self.category or UNCATEGORIZED

    def effective_cost(self, default_cost_ratio: Decimal) -> Decimal:
        """Unit cost, estimated as ``price * default_cost_ratio`` when unknown.

        A zero cost price is treated as unknown.
        """
        if self.cost_price:
            return self.cost_price
        return self.price * default_cost_ratio
