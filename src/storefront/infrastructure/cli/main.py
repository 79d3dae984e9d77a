import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_remove,
    cart_set,
    cart_show,
)
from storefront.infrastructure.cli.catalog_commands import catalog_list, catalog_stock
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging_setup import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront — cart and order placement"""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    ctx.obj = settings


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def catalog() -> None:
    """Browse products and stock."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_set)
cart.add_command(cart_show)
catalog.add_command(catalog_list)
catalog.add_command(catalog_stock)
cli.add_command(checkout)
