"""CLI command for placing an order from the cart."""

from __future__ import annotations

import asyncio
from dataclasses import replace

import click

from storefront.application.dto import CheckoutForm
from storefront.domain.exceptions import (
    DomainException,
    OrderCreationError,
    ValidationError,
)
from storefront.infrastructure.bootstrap import (
    cart_store,
    checkout_handler,
    signed_in_customer,
)
from storefront.infrastructure.config import Settings


@click.command("checkout")
@click.option("--name", default=None, help="Full name (defaults to the signed-in customer).")
@click.option("--email", default=None, help="Contact e-mail (defaults to the signed-in customer).")
@click.option("--phone", default=None, help="Phone (optional).")
@click.option("--address", default=None, help="Shipping address (defaults to the signed-in customer).")
@click.option("--notes", default=None, help="Notes for the seller (optional).")
@click.pass_obj
def checkout(
    settings: Settings,
    name: str | None,
    email: str | None,
    phone: str | None,
    address: str | None,
    notes: str | None,
) -> None:
    """Place an order for everything in the cart."""
    store = cart_store(settings)
    handler = checkout_handler(store, settings)

    form = CheckoutForm.prefilled(signed_in_customer(settings))
    given = {"name": name, "email": email, "phone": phone, "address": address, "notes": notes}
    form = replace(form, **{field: value for field, value in given.items() if value is not None})

    try:
        result = asyncio.run(handler.handle(form))
    except ValidationError as exc:
        raise click.ClickException(
            "Please fix the following:\n" + "\n".join(f"  - {e}" for e in exc.errors)
        )
    except OrderCreationError as exc:
        raise click.ClickException(
            f"Your order could not be placed: {exc}\n"
            "Your cart was kept; adjust it and try again."
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order placed successfully!")
    click.echo(f"Order number: {result.order_id}")
    click.echo(f"Total:        {result.total}")
    if result.warning:
        click.echo(f"Warning: {result.warning}", err=True)
