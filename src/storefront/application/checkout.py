"""Application service: Checkout use case.

Wires the cart store, the assembler and the submission gateway for one
submit click. The draft is rebuilt from the cart on every attempt.
"""

from __future__ import annotations

from storefront.application.cart_store import CartStore
from storefront.application.dto import CheckoutForm, SubmissionResult
from storefront.application.order_assembler import OrderAssembler
from storefront.application.submit_order import OrderSubmissionGateway


class CheckoutHandler:

    def __init__(
        self,
        cart_store: CartStore,
        assembler: OrderAssembler,
        gateway: OrderSubmissionGateway,
    ) -> None:
        self._cart_store = cart_store
        self._assembler = assembler
        self._gateway = gateway

    async def handle(self, form: CheckoutForm) -> SubmissionResult:
        """Validate and place the order.

        Raises ValidationError (every problem at once) before anything is
        sent, or an OrderCreationError if the store refuses the order.
        The cart is cleared only on success.
        """
        draft = self._assembler.assemble(self._cart_store.lines(), form)
        return await self._gateway.submit(draft)
