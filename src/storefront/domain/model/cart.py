"""Cart aggregate — the shopper's pending selection.

The Cart knows nothing about orders. It only guarantees that every line
it holds satisfies ``1 <= quantity <= stock_ceiling`` and that the total
is derived from the lines on every read.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class CartLine:
    """One product entry, quantity clamped to a stock snapshot."""

    product_id: str
    name: str
    unit_price: Money
    quantity: int
    stock_ceiling: int
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.quantity, int) or not isinstance(self.stock_ceiling, int):
            raise ValidationError("Cart quantities must be integers")
        if self.stock_ceiling < 0:
            raise ValidationError(
                f"Stock ceiling for {self.name} cannot be negative"
            )
        if not 1 <= self.quantity <= self.stock_ceiling:
            raise ValidationError(
                f"Quantity {self.quantity} for {self.name} outside "
                f"1..{self.stock_ceiling}"
            )

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


def _clamp(value: int, ceiling: int) -> int:
    return max(0, min(value, ceiling))


class Cart:
    """Ordered mapping of product id to CartLine.

    Product id is the uniqueness key: adding a product already present
    bumps its quantity instead of duplicating the line. Quantities are
    clamped silently instead of raising.
    """

    def __init__(self, lines: list[CartLine] | None = None, currency: str = "USD") -> None:
        self.currency = currency
        self._lines: dict[str, CartLine] = {}
        for line in lines or []:
            if line.product_id in self._lines:
                raise ValidationError(f"Duplicate cart line for product '{line.product_id}'")
            self._lines[line.product_id] = line

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product, quantity: int = 1) -> CartLine | None:
        """Add *quantity* units of *product*, clamped to its stock.

        Returns the resulting line, or None when the clamp leaves nothing
        (zero-stock product or non-positive request).
        """
        if product.price.currency != self.currency:
            raise ValidationError(
                f"Cannot add {product.name} priced in {product.price.currency} "
                f"to a {self.currency} cart"
            )
        existing = self._lines.get(product.id)
        current = existing.quantity if existing is not None else 0
        new_quantity = _clamp(current + quantity, product.stock)

        if new_quantity == 0:
            self._lines.pop(product.id, None)
            return None

        # Refresh the snapshot (price, ceiling) from the product just seen.
        line = CartLine(
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            quantity=new_quantity,
            stock_ceiling=product.stock,
            image_url=product.image_url,
        )
        self._lines[product.id] = line
        return line

    def set_quantity(self, product_id: str, quantity: int) -> CartLine | None:
        """Set a line's quantity, clamped to ``[0, stock_ceiling]``.

        A clamped value of 0 removes the line. Unknown ids are ignored.
        """
        line = self._lines.get(product_id)
        if line is None:
            return None
        new_quantity = _clamp(quantity, line.stock_ceiling)
        if new_quantity == 0:
            del self._lines[product_id]
            return None
        updated = replace(line, quantity=new_quantity)
        self._lines[product_id] = updated
        return updated

    def remove(self, product_id: str) -> None:
        self._lines.pop(product_id, None)

    def clear(self) -> None:
        self._lines.clear()

    # --- Queries --------------------------------------------------------------

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines.values())

    def get(self, product_id: str) -> CartLine | None:
        return self._lines.get(product_id)

    def total(self) -> Money:
        result = Money.zero(self.currency)
        for line in self._lines.values():
            result = result + line.line_total
        return result

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)
