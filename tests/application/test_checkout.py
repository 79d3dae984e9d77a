"""End-to-end checkout scenarios through CheckoutHandler with fakes."""

import asyncio

import pytest

from storefront.application.cart_store import CartStore
from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import CheckoutForm
from storefront.application.order_assembler import OrderAssembler
from storefront.application.submit_order import OrderSubmissionGateway
from storefront.domain.exceptions import StockConflictError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.stock import StockItem
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeNotifier, FakeOrderRepository, InMemoryCartStorage

FORM = CheckoutForm(
    name="Alice",
    email="alice@example.com",
    phone="",
    address="1 Main St",
    notes="",
)


def _handler(
    store: CartStore,
    repo: FakeOrderRepository,
    notifier: FakeNotifier | None = None,
) -> CheckoutHandler:
    gateway = OrderSubmissionGateway(
        order_repo=repo,
        notifier=notifier or FakeNotifier(),
        cart_store=store,
    )
    return CheckoutHandler(cart_store=store, assembler=OrderAssembler(), gateway=gateway)


class TestCheckoutHappyPath:

    def test_single_line_total_and_cart_cleared(self):
        repo = FakeOrderRepository([
            StockItem(product_id="sku-1", name="Widget", price=Money.of("19.99"), stock=5),
        ])
        storage = InMemoryCartStorage()
        store = CartStore(storage)
        store.add(Product(id="sku-1", name="Widget", price=Money.of("19.99"), stock=5), 2)

        result = asyncio.run(_handler(store, repo).handle(FORM))

        draft = repo.orders[result.order_id]
        assert draft.total_amount == Money.of("39.98")
        assert result.total == "$39.98"
        assert store.is_empty()
        # The cleared cart survives a reload
        assert CartStore(storage).is_empty()


class TestCheckoutValidation:

    def test_invalid_form_never_reaches_repository(self):
        repo = FakeOrderRepository()
        store = CartStore(InMemoryCartStorage())
        store.add(Product(id="sku-1", name="Widget", price=Money.of("19.99"), stock=5))

        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(_handler(store, repo).handle(CheckoutForm(name="Alice")))

        assert len(exc_info.value.errors) == 2
        assert repo.calls == 0
        assert not store.is_empty()


class TestConcurrentCheckout:

    def test_only_one_shopper_gets_the_last_unit(self):
        repo = FakeOrderRepository([
            StockItem(product_id="rare", name="Last One", price=Money.of("50.00"), stock=1),
        ])
        product = asyncio.run(repo.get_stock("rare")).to_product()

        stores = [CartStore(InMemoryCartStorage()) for _ in range(2)]
        for store in stores:
            store.add(product, 1)
        handlers = [_handler(store, repo) for store in stores]

        async def race():
            return await asyncio.gather(
                *(handler.handle(FORM) for handler in handlers),
                return_exceptions=True,
            )

        outcomes = asyncio.run(race())

        winners = [i for i, o in enumerate(outcomes) if not isinstance(o, BaseException)]
        losers = [i for i, o in enumerate(outcomes) if isinstance(o, StockConflictError)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert stores[winners[0]].is_empty()
        assert stores[losers[0]].get("rare").quantity == 1
        assert asyncio.run(repo.get_stock("rare")).stock == 0
        assert len(repo.orders) == 1
