"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.product import Customer


@dataclass(frozen=True)
class CheckoutForm:
    """Input: the shipping/contact fields as the shopper typed them."""

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    notes: str = ""

    @staticmethod
    def prefilled(customer: Customer | None) -> CheckoutForm:
        """Start a form from the signed-in customer's profile, if any."""
        if customer is None:
            return CheckoutForm()
        return CheckoutForm(
            name=customer.name.strip(),
            email=customer.email.strip(),
            phone=customer.phone.strip(),
            address=customer.shipping_address.strip(),
        )


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    product_id: str
    name: str
    quantity: int
    stock: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """Output: the whole cart as displayed to the user."""

    lines: list[CartLineDTO]
    item_count: int
    total: str


@dataclass(frozen=True)
class SubmissionResult:
    """Output: what the shopper is told after a successful checkout.

    ``warning`` is set when the order was recorded but the notification
    could not be delivered.
    """

    order_id: str
    total: str
    notified: bool
    warning: str | None = None
