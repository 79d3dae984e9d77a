"""Application service: Order Assembler.

Turns the cart's current lines plus the checkout form into an immutable
OrderDraft. Validation is exhaustive: every broken rule is reported in
one ValidationError so the shopper can fix them all at once.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from storefront.application.dto import CheckoutForm
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import OrderDraft, OrderDraftLine
from storefront.domain.model.value_objects import Money

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _optional(value: str) -> str | None:
    value = (value or "").strip()
    return value or None


class OrderAssembler:

    def __init__(self, currency: str = "USD") -> None:
        self._currency = currency

    def validate(self, lines: Sequence[CartLine], form: CheckoutForm) -> list[str]:
        """Return every violated rule; an empty list means the input is valid."""
        errors: list[str] = []

        if not form.name.strip():
            errors.append("Name is required")

        email = form.email.strip()
        if not email:
            errors.append("Email is required")
        elif not EMAIL_PATTERN.match(email):
            errors.append("Email is not valid")

        if not form.address.strip():
            errors.append("Shipping address is required")

        if not lines:
            errors.append("Cart is empty")
        if any(line.quantity < 1 for line in lines):
            errors.append("Invalid quantity for one or more products")
        # A price that rounds to 0.00 would go out as free.
        if any(line.unit_price.rounded().is_zero for line in lines):
            errors.append("Invalid price for one or more products")

        return errors

    def assemble(self, lines: Sequence[CartLine], form: CheckoutForm) -> OrderDraft:
        """Build the draft, or raise ValidationError listing every problem.

        The total is re-derived from *lines* here rather than taken from
        whatever the shopper last saw on screen.
        """
        errors = self.validate(lines, form)
        if errors:
            raise ValidationError(errors)

        draft_lines = tuple(
            OrderDraftLine(
                product_id=line.product_id,
                name=line.name,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for line in lines
        )

        total = Money.zero(self._currency)
        for line in lines:
            total = total + line.line_total

        return OrderDraft(
            customer_name=form.name.strip(),
            customer_email=form.email.strip(),
            customer_phone=_optional(form.phone),
            shipping_address=form.address.strip(),
            notes=_optional(form.notes),
            lines=draft_lines,
            total_amount=total.rounded(),
        )
