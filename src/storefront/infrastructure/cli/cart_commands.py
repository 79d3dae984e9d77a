"""CLI commands for the shopping cart."""

from __future__ import annotations

import asyncio

import click

from storefront.application.cart_store import CartStore
from storefront.application.catalog import FindProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cart_store, order_repository
from storefront.infrastructure.config import Settings


def _display_cart(store: CartStore) -> None:
    dto = store.summary()
    if not dto.lines:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'ID':<10} {'Product':<20} {'Qty':>5} {'Stock':>6} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*66}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<10} {line.name:<20} {line.quantity:>5} "
            f"{line.stock:>6} {line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*66}")
    click.echo(f"  {'Cart Total':<27} {dto.total:>39}")


@click.command("show")
@click.pass_obj
def cart_show(settings: Settings) -> None:
    """Show the current cart."""
    _display_cart(cart_store(settings))


@click.command("add")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
@click.pass_obj
def cart_add(settings: Settings, product_id: str, quantity: int) -> None:
    """Add a product to the cart (clamped to available stock)."""
    handler = FindProductHandler(order_repo=order_repository(settings))

    try:
        product = asyncio.run(handler.handle(product_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if product.stock == 0:
        raise click.ClickException(f"'{product.name}' is out of stock")

    store = cart_store(settings)
    line = store.add(product, quantity)
    if line is None:
        click.echo(f"Nothing added for '{product.name}'.")
    elif line.quantity == product.stock:
        click.echo(f"'{product.name}' x{line.quantity} in cart (all available stock).")
    else:
        click.echo(f"'{product.name}' x{line.quantity} in cart.")


@click.command("set")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
@click.pass_obj
def cart_set(settings: Settings, product_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    store = cart_store(settings)
    if store.get(product_id) is None:
        raise click.ClickException(f"Product '{product_id}' is not in the cart")

    line = store.set_quantity(product_id, quantity)
    if line is None:
        click.echo(f"Removed '{product_id}' from cart.")
    else:
        click.echo(f"'{line.name}' quantity set to {line.quantity}.")


@click.command("remove")
@click.option("--product-id", required=True, help="Product ID.")
@click.pass_obj
def cart_remove(settings: Settings, product_id: str) -> None:
    """Remove a product from the cart."""
    cart_store(settings).remove(product_id)
    click.echo(f"Removed '{product_id}' from cart.")
