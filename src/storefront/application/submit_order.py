"""Application service: Order Submission Gateway.

Submission is a two-phase contract:

  Phase 1 — durable: the repository's atomic create.  Any failure here
            fails the whole submission and leaves the cart untouched.
  Phase 2 — best effort: the notification.  Runs only after phase 1 has
            succeeded and the cart has been cleared; its failure is
            logged and reported as a warning, never as an order failure.

Neither phase is retried automatically. Resubmitting is a fresh action
by the shopper.
"""

from __future__ import annotations

import structlog

from storefront.application.cart_store import CartStore
from storefront.application.dto import SubmissionResult
from storefront.domain.exceptions import NotificationError, OrderCreationError
from storefront.domain.model.order import OrderDraft
from storefront.domain.repository.order_notifier import OrderNotifier
from storefront.domain.repository.order_repository import OrderRepository

NOTIFICATION_WARNING = (
    "Your order was placed, but the confirmation notice could not be sent."
)

logger = structlog.get_logger()


class OrderSubmissionGateway:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifier: OrderNotifier,
        cart_store: CartStore,
    ) -> None:
        self._order_repo = order_repo
        self._notifier = notifier
        self._cart_store = cart_store

    async def submit(self, draft: OrderDraft) -> SubmissionResult:
        log = logger.bind(
            customer_email=draft.customer_email,
            total=str(draft.total_amount),
            lines=len(draft.lines),
        )

        # Phase 1: durable creation
        try:
            order_id = await self._order_repo.create_order(draft)
        except OrderCreationError as exc:
            log.warning("order_creation_failed", kind=exc.kind, error=str(exc))
            raise

        log = log.bind(order_id=order_id)
        log.info("order_created")
        self._cart_store.clear()

        # Phase 2: best-effort notification
        warning: str | None = None
        try:
            await self._notifier.notify(order_id, draft)
        except NotificationError as exc:
            log.warning("order_notification_failed", error=str(exc))
            warning = NOTIFICATION_WARNING
        except Exception:
            log.exception("order_notification_crashed")
            warning = NOTIFICATION_WARNING
        else:
            log.info("order_notification_sent")

        return SubmissionResult(
            order_id=order_id,
            total=str(draft.total_amount),
            notified=warning is None,
            warning=warning,
        )
