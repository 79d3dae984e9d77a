"""StockItem — the storage layer's view of a product's available units.

Only the atomic order-creation primitive mutates stock. The invariant it
protects is the one the whole subsystem depends on: stock never goes
below zero.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import StockConflictError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


@dataclass
class StockItem:
    """Aggregate root for a product row in the store.

    Invariants:
    - ``stock`` is always >= 0
    """

    product_id: str
    name: str
    price: Money
    stock: int
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not self.product_id or not isinstance(self.product_id, str):
            raise ValidationError("Stock row needs a product id")
        if not isinstance(self.stock, int) or self.stock < 0:
            raise ValidationError(
                f"Stock for {self.name} must be a non-negative integer, got {self.stock!r}"
            )

    def decrement(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises StockConflictError if the current stock cannot cover it.
        """
        if quantity <= 0:
            raise ValidationError("Decrement quantity must be positive")
        if quantity > self.stock:
            raise StockConflictError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.stock} available)"
            )
        self.stock -= quantity

    def set_stock(self, stock: int) -> None:
        if stock < 0:
            raise ValidationError("Stock cannot be negative")
        self.stock = stock

    def to_product(self) -> Product:
        """Snapshot handed to the cart; may be stale by the time it is used."""
        return Product(
            id=self.product_id,
            name=self.name,
            price=self.price,
            stock=self.stock,
            image_url=self.image_url,
        )
