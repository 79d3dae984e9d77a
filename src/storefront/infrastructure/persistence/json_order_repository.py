"""JSON-file-backed implementation of OrderRepository.

Stock rows and orders share one document so a single atomic file
replace commits the stock decrement and the order insert together.
Writers are serialised by an ``asyncio.Lock``; the store is meant for a
single process.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from storefront.application.payloads import order_payload
from storefront.domain.exceptions import DomainException, TransportError
from storefront.domain.model.order import OrderDraft
from storefront.domain.model.stock import StockItem
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.stock_allocation_service import (
    StockAllocationService,
)

logger = structlog.get_logger()


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path, currency: str = "USD") -> None:
        self._file_path = file_path
        self._currency = currency
        self._lock = asyncio.Lock()
        self._allocator = StockAllocationService()
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    async def create_order(self, draft: OrderDraft) -> str:
        async with self._lock:
            document = self._load_raw()
            stock = self._load_stock(document)

            # Raises before anything is written if any line cannot be served.
            self._allocator.allocate(draft, stock)

            order_id = str(uuid.uuid4())
            record = order_payload(draft)
            record["id"] = order_id
            record["created_at"] = datetime.now(timezone.utc).isoformat()

            document["stock"] = [self._stock_to_raw(item) for item in stock.values()]
            document["orders"].append(record)
            self._persist_raw(document)

        logger.debug("order_stored", order_id=order_id, path=str(self._file_path))
        return order_id

    async def get_stock(self, product_id: str) -> StockItem | None:
        return self._load_stock(self._load_raw()).get(product_id)

    async def list_stock(self) -> list[StockItem]:
        return list(self._load_stock(self._load_raw()).values())

    async def save_stock(self, item: StockItem) -> None:
        async with self._lock:
            document = self._load_raw()
            stock = self._load_stock(document)
            stock[item.product_id] = item
            document["stock"] = [self._stock_to_raw(row) for row in stock.values()]
            self._persist_raw(document)

    async def list_orders(self) -> list[dict[str, Any]]:
        return list(self._load_raw()["orders"])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _stock_to_raw(item: StockItem) -> dict[str, Any]:
        return {
            "product_id": item.product_id,
            "name": item.name,
            "price": str(item.price.amount),
            "stock": item.stock,
            "image_url": item.image_url,
        }

    def _stock_to_domain(self, raw: dict[str, Any]) -> StockItem:
        return StockItem(
            product_id=raw["product_id"],
            name=raw["name"],
            price=Money.of(raw["price"], self._currency),
            stock=raw["stock"],
            image_url=raw.get("image_url"),
        )

    def _load_stock(self, document: dict[str, list[Any]]) -> dict[str, StockItem]:
        """Stock rows keyed by product id, in document order."""
        stock: dict[str, StockItem] = {}
        for raw in document["stock"]:
            try:
                item = self._stock_to_domain(raw)
            except (KeyError, TypeError, AttributeError, DomainException) as exc:
                raise TransportError(f"Order store has a malformed stock row: {exc}") from exc
            stock[item.product_id] = item
        return stock

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, list[Any]]:
        try:
            document = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise TransportError(f"Order store unavailable: {exc}") from exc
        if not isinstance(document, dict) or not all(
            isinstance(document.get(key), list) for key in ("stock", "orders")
        ):
            raise TransportError(
                "Order store is malformed: expected an object with 'stock' and 'orders' lists"
            )
        return document

    def _persist_raw(self, document: dict[str, list[dict[str, Any]]]) -> None:
        # Write a sibling temp file then swap it in: readers see either the
        # old document or the new one, never a partial write.
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=".store-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(document, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            raise TransportError(f"Order store unavailable: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps({"stock": [], "orders": []}) + "\n", encoding="utf-8"
            )
