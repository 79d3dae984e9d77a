"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.cart_store import CartStore
from storefront.application.checkout import CheckoutHandler
from storefront.application.order_assembler import OrderAssembler
from storefront.application.submit_order import OrderSubmissionGateway
from storefront.domain.model.product import Customer
from storefront.domain.repository.order_notifier import OrderNotifier
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.notification.http_notifier import (
    HttpOrderNotifier,
    LoggingOrderNotifier,
)
from storefront.infrastructure.persistence.json_cart_storage import (
    JsonFileCartStorage,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)


def order_repository(settings: Settings | None = None) -> JsonOrderRepository:
    settings = settings or get_settings()
    return JsonOrderRepository(settings.store_file, currency=settings.currency)


def cart_store(settings: Settings | None = None) -> CartStore:
    settings = settings or get_settings()
    return CartStore(JsonFileCartStorage(settings.cart_file), currency=settings.currency)


def order_notifier(settings: Settings | None = None) -> OrderNotifier:
    settings = settings or get_settings()
    if not settings.notification_url:
        return LoggingOrderNotifier()
    return HttpOrderNotifier(
        settings.notification_url,
        api_key=settings.notification_api_key,
        timeout=settings.notification_timeout,
    )


def signed_in_customer(settings: Settings | None = None) -> Customer | None:
    settings = settings or get_settings()
    if not settings.customer_email:
        return None
    return Customer.from_metadata(
        settings.customer_email,
        {
            "full_name": settings.customer_name,
            "phone": settings.customer_phone,
            "shipping_address": settings.customer_address,
        },
    )


def checkout_handler(
    store: CartStore,
    settings: Settings | None = None,
) -> CheckoutHandler:
    settings = settings or get_settings()
    gateway = OrderSubmissionGateway(
        order_repo=order_repository(settings),
        notifier=order_notifier(settings),
        cart_store=store,
    )
    return CheckoutHandler(
        cart_store=store,
        assembler=OrderAssembler(currency=settings.currency),
        gateway=gateway,
    )
