"""Abstract repository for durable order creation.

The only write the core ever asks of the storage layer is the atomic
order creation. Implementations must, within a single transaction:

1. re-check each line's current stock,
2. decrement it by the ordered quantity,
3. insert the order header and line rows,

so that either everything applies or nothing does. The core never does
the stock check itself because it cannot serialise against other shoppers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import OrderDraft
from storefront.domain.model.stock import StockItem


class OrderRepository(ABC):

    @abstractmethod
    async def create_order(self, draft: OrderDraft) -> str:
        """Atomically decrement stock and record the order.

        Returns the durable order id. Raises a subclass of
        OrderCreationError on any refusal or failure.
        """

    @abstractmethod
    async def get_stock(self, product_id: str) -> StockItem | None:
        """Return the current stock row for a product, or None."""

    @abstractmethod
    async def list_stock(self) -> list[StockItem]:
        """Return every stock row."""

    @abstractmethod
    async def save_stock(self, item: StockItem) -> None:
        """Persist a new or updated stock row outside of any order."""
