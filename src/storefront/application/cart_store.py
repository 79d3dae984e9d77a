"""Application service: the shopper's Cart Store.

One CartStore is built per session and handed to whoever needs the cart.
It wraps the Cart aggregate and writes the full line sequence through to
the injected CartStorage after every mutation.

Persistence is never allowed to break the shopper's flow: a corrupt or
missing saved cart loads as empty, and a failed save is logged while the
in-memory change stands.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import structlog

from storefront.application.dto import CartDTO, CartLineDTO
from storefront.domain.exceptions import PersistenceError, ValidationError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_storage import CartStorage

CART_KEY = "cart"

logger = structlog.get_logger()


class CartStore:

    def __init__(
        self,
        storage: CartStorage,
        currency: str = "USD",
        on_persistence_error: Callable[[PersistenceError], None] | None = None,
    ) -> None:
        self._storage = storage
        self._currency = currency
        self._on_persistence_error = on_persistence_error
        self._cart = self._load()

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product, quantity: int = 1) -> CartLine | None:
        line = self._cart.add(product, quantity)
        logger.info(
            "cart_item_added",
            product_id=product.id,
            requested=quantity,
            quantity=line.quantity if line else 0,
        )
        self._persist()
        return line

    def set_quantity(self, product_id: str, quantity: int) -> CartLine | None:
        line = self._cart.set_quantity(product_id, quantity)
        logger.info(
            "cart_quantity_set",
            product_id=product_id,
            requested=quantity,
            quantity=line.quantity if line else 0,
        )
        self._persist()
        return line

    def remove(self, product_id: str) -> None:
        self._cart.remove(product_id)
        logger.info("cart_item_removed", product_id=product_id)
        self._persist()

    def clear(self) -> None:
        self._cart.clear()
        logger.info("cart_cleared")
        self._persist()

    # --- Queries --------------------------------------------------------------

    def lines(self) -> tuple[CartLine, ...]:
        return self._cart.lines

    def get(self, product_id: str) -> CartLine | None:
        return self._cart.get(product_id)

    def total(self) -> Money:
        return self._cart.total()

    def item_count(self) -> int:
        return self._cart.item_count

    def is_empty(self) -> bool:
        return len(self._cart) == 0

    def summary(self) -> CartDTO:
        return CartDTO(
            lines=[
                CartLineDTO(
                    product_id=line.product_id,
                    name=line.name,
                    quantity=line.quantity,
                    stock=line.stock_ceiling,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in self._cart.lines
            ],
            item_count=self._cart.item_count,
            total=str(self._cart.total()),
        )

    # --- Persistence ----------------------------------------------------------

    def _load(self) -> Cart:
        try:
            raw = self._storage.read(CART_KEY)
            if raw is None:
                return Cart(currency=self._currency)
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError(f"expected a list of cart lines, got {type(records).__name__}")
            cart = Cart(
                [self._to_domain(record) for record in records],
                currency=self._currency,
            )
        except (PersistenceError, ValidationError, ValueError, TypeError, KeyError) as exc:
            logger.warning("cart_load_failed", error=str(exc))
            return Cart(currency=self._currency)

        logger.debug("cart_loaded", lines=len(cart))
        return cart

    def _persist(self) -> None:
        payload = json.dumps([self._to_raw(line) for line in self._cart.lines])
        try:
            self._storage.write(CART_KEY, payload)
        except PersistenceError as exc:
            logger.warning("cart_persist_failed", error=str(exc))
            if self._on_persistence_error is not None:
                self._on_persistence_error(exc)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLine) -> dict[str, Any]:
        return {
            "id": line.product_id,
            "name": line.name,
            "price": str(line.unit_price.amount),
            "quantity": line.quantity,
            "image_url": line.image_url,
            "stock": line.stock_ceiling,
        }

    def _to_domain(self, raw: dict[str, Any]) -> CartLine:
        return CartLine(
            product_id=str(raw["id"]),
            name=raw["name"],
            unit_price=Money.of(raw["price"], self._currency),
            quantity=raw["quantity"],
            stock_ceiling=raw["stock"],
            image_url=raw.get("image_url"),
        )
