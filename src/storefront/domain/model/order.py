"""OrderDraft — immutable snapshot of a validated checkout.

A draft never changes after construction: it is either accepted by the
storage layer as a whole or discarded. Building one is the job of the
OrderAssembler; this module only defines the shape.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderDraftLine:
    """A line item with its price locked at submission time."""

    product_id: str
    name: str
    quantity: int
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class OrderDraft:
    customer_name: str
    customer_email: str
    shipping_address: str
    lines: tuple[OrderDraftLine, ...]
    total_amount: Money
    customer_phone: str | None = None
    notes: str | None = None

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)
