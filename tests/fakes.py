"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON adapters but
keep everything in dicts. No file I/O, no network.
"""

from __future__ import annotations

import asyncio

from storefront.domain.exceptions import (
    NotificationError,
    OrderCreationError,
    PersistenceError,
)
from storefront.domain.model.order import OrderDraft
from storefront.domain.model.stock import StockItem
from storefront.domain.repository.cart_storage import CartStorage
from storefront.domain.repository.order_notifier import OrderNotifier
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.stock_allocation_service import (
    StockAllocationService,
)


class InMemoryCartStorage(CartStorage):

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.entries: dict[str, str] = dict(initial or {})
        self.writes = 0
        self.fail_reads = False
        self.fail_writes = False

    def read(self, key: str) -> str | None:
        if self.fail_reads:
            raise PersistenceError("storage unavailable")
        return self.entries.get(key)

    def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceError("quota exceeded")
        self.entries[key] = value
        self.writes += 1


class FakeOrderRepository(OrderRepository):
    """Atomic create guarded by an asyncio.Lock, like a serialisable transaction.

    The ``asyncio.sleep(0)`` inside the critical section hands control to
    any competing submission, so concurrency tests really interleave.
    """

    def __init__(self, items: list[StockItem] | None = None) -> None:
        self._stock: dict[str, StockItem] = {}
        for item in items or []:
            self._stock[item.product_id] = item
        self._lock = asyncio.Lock()
        self._allocator = StockAllocationService()
        self.orders: dict[str, OrderDraft] = {}
        self.calls = 0
        self.fail_with: OrderCreationError | None = None

    async def create_order(self, draft: OrderDraft) -> str:
        self.calls += 1
        async with self._lock:
            await asyncio.sleep(0)
            if self.fail_with is not None:
                raise self.fail_with
            self._allocator.allocate(draft, self._stock)
            order_id = f"order-{len(self.orders) + 1}"
            self.orders[order_id] = draft
            return order_id

    async def get_stock(self, product_id: str) -> StockItem | None:
        return self._stock.get(product_id)

    async def list_stock(self) -> list[StockItem]:
        return list(self._stock.values())

    async def save_stock(self, item: StockItem) -> None:
        self._stock[item.product_id] = item


class FakeNotifier(OrderNotifier):

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[tuple[str, OrderDraft]] = []

    async def notify(self, order_id: str, draft: OrderDraft) -> None:
        if self.fail:
            raise NotificationError("mail service down")
        self.sent.append((order_id, draft))
