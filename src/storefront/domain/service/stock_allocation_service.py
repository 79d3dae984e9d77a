"""Domain service: Stock Allocation.

The body of the atomic order-creation transaction. Storage adapters call
``allocate`` while holding whatever serialises their writers (a database
transaction, a lock around a document) and persist only if it returns.

The two-phase approach (validate-then-mutate) ensures stock is never
left partially decremented when one line of the order fails.
"""

from __future__ import annotations

from collections.abc import Mapping

from storefront.domain.exceptions import (
    ConstraintViolationError,
    OrderRejectedError,
    StockConflictError,
)
from storefront.domain.model.order import OrderDraft
from storefront.domain.model.stock import StockItem
from storefront.domain.model.value_objects import Money


class StockAllocationService:

    def check_draft(self, draft: OrderDraft) -> None:
        """Reject payloads the store would never accept, whatever the stock."""
        problems: list[str] = []
        if not draft.lines:
            problems.append("Order has no items")
        for line in draft.lines:
            if line.quantity < 1:
                problems.append(f"Invalid quantity for {line.name}")
            if line.unit_price.rounded().is_zero:
                problems.append(f"Invalid price for {line.name}")
        if problems:
            raise OrderRejectedError("; ".join(problems))

        computed = Money.zero(draft.total_amount.currency)
        for line in draft.lines:
            computed = computed + line.line_total
        if computed.rounded() != draft.total_amount.rounded():
            raise OrderRejectedError(
                f"Order total {draft.total_amount} does not match items ({computed.rounded()})"
            )

    def allocate(self, draft: OrderDraft, stock: Mapping[str, StockItem]) -> None:
        """Decrement stock for every line of *draft*, or for none of them.

        Uses a two-phase approach:
          Phase 1 — validate: every product exists and has enough stock
                    for the summed quantity ordered.  Fails before any
                    mutation.
          Phase 2 — mutate: call ``decrement()`` on each StockItem.
        """
        self.check_draft(draft)

        # Phase 1: aggregate per product and validate
        wanted: dict[str, int] = {}
        for line in draft.lines:
            if line.product_id not in stock:
                raise ConstraintViolationError(
                    f"Product '{line.name}' is no longer available"
                )
            wanted[line.product_id] = wanted.get(line.product_id, 0) + line.quantity

        for product_id, qty in wanted.items():
            item = stock[product_id]
            if qty > item.stock:
                raise StockConflictError(
                    f"Insufficient stock for {item.name} "
                    f"(need {qty}, have {item.stock} available)"
                )

        # Phase 2: mutate
        for product_id, qty in wanted.items():
            stock[product_id].decrement(qty)
