"""Catalog snapshots handed to the core by the surrounding application.

Neither type is owned here: products come from the catalog, customers
from the session. Both are read-only inputs.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product as seen by the shopper at the moment of adding it.

    ``stock`` is a snapshot and may already be stale; it only bounds the
    quantities the cart will accept.
    """

    id: str
    name: str
    price: Money
    stock: int
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Product id is required")
        if not isinstance(self.stock, int) or self.stock < 0:
            raise ValidationError(
                f"Product stock must be a non-negative integer, got {self.stock!r}"
            )


def _clean(value: str | None) -> str:
    return (value or "").strip()


@dataclass(frozen=True)
class Customer:
    """Signed-in shopper identity, used only to pre-fill checkout."""

    name: str = ""
    email: str = ""
    phone: str = ""
    shipping_address: str = ""

    @staticmethod
    def from_metadata(
        email: str | None,
        metadata: dict | None = None,
    ) -> Customer:
        """Build from an auth profile's email plus its free-form metadata."""
        metadata = metadata or {}
        return Customer(
            name=_clean(metadata.get("full_name")),
            email=_clean(email),
            phone=_clean(metadata.get("phone")),
            shipping_address=_clean(metadata.get("shipping_address")),
        )
