"""Application services: catalog lookups and stock seeding.

The catalog proper lives outside this package. These handlers read the
storage layer's stock rows so the cart can be handed ``Product``
snapshots, and let fixtures set stock levels.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.stock import StockItem
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository


@dataclass(frozen=True)
class CatalogLineDTO:
    product_id: str
    name: str
    price: str
    stock: int


class ShowCatalogHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    async def handle(self) -> list[CatalogLineDTO]:
        items = await self._order_repo.list_stock()
        return [
            CatalogLineDTO(
                product_id=item.product_id,
                name=item.name,
                price=str(item.price),
                stock=item.stock,
            )
            for item in items
        ]


class FindProductHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    async def handle(self, product_id: str) -> Product:
        """Return a fresh snapshot of a product for the cart."""
        item = await self._order_repo.get_stock(product_id)
        if item is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")
        return item.to_product()


class SetStockHandler:

    def __init__(self, order_repo: OrderRepository, currency: str = "USD") -> None:
        self._order_repo = order_repo
        self._currency = currency

    async def handle(
        self,
        product_id: str,
        stock: int,
        name: str | None = None,
        price: str | None = None,
    ) -> StockItem:
        """Set the stock level of a product, creating the row if needed.

        New rows need a name and a price; existing rows keep theirs unless
        new ones are given.
        """
        existing = await self._order_repo.get_stock(product_id)
        if existing is None:
            if not name or not name.strip() or price is None:
                raise ValidationError(
                    f"Product '{product_id}' is new: name and price are required"
                )
            item = StockItem(
                product_id=product_id,
                name=name.strip(),
                price=Money.of(price, self._currency),
                stock=0,
            )
        else:
            item = existing
            if name and name.strip():
                item.name = name.strip()
            if price is not None:
                item.price = Money.of(price, self._currency)

        item.set_stock(stock)
        await self._order_repo.save_stock(item)
        return item
