"""CLI commands for products and their stock."""

from __future__ import annotations

import asyncio

import click

from storefront.application.catalog import SetStockHandler, ShowCatalogHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import order_repository
from storefront.infrastructure.config import Settings


@click.command("list")
@click.pass_obj
def catalog_list(settings: Settings) -> None:
    """List products with price and available stock."""
    handler = ShowCatalogHandler(order_repo=order_repository(settings))

    try:
        lines = asyncio.run(handler.handle())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<10} {'Name':<20} {'Price':>10} {'Stock':>8}")
    click.echo("-" * 51)
    for line in lines:
        click.echo(f"{line.product_id:<10} {line.name:<20} {line.price:>10} {line.stock:>8}")


@click.command("stock")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--stock", required=True, type=int, help="Units available.")
@click.option("--name", default=None, help="Product name (required for new products).")
@click.option("--price", default=None, help="Unit price, e.g. 19.99 (required for new products).")
@click.pass_obj
def catalog_stock(
    settings: Settings,
    product_id: str,
    stock: int,
    name: str | None,
    price: str | None,
) -> None:
    """Set the stock level of a product."""
    handler = SetStockHandler(
        order_repo=order_repository(settings),
        currency=settings.currency,
    )

    try:
        item = asyncio.run(handler.handle(product_id, stock, name=name, price=price))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{item.name}' set to {item.stock} at {item.price}")
