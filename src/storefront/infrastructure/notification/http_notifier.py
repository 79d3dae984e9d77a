"""OrderNotifier implementations.

``HttpOrderNotifier`` posts the order summary to a serverless function
that e-mails the shop. ``LoggingOrderNotifier`` stands in when no
endpoint is configured and only records what would have been sent.
"""

from __future__ import annotations

import httpx
import structlog

from storefront.application.payloads import notification_payload
from storefront.domain.exceptions import NotificationError
from storefront.domain.model.order import OrderDraft
from storefront.domain.repository.order_notifier import OrderNotifier

logger = structlog.get_logger()


class HttpOrderNotifier(OrderNotifier):

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._api_key = api_key or ""
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        # The function gateway wants the key both as bearer token and apikey.
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
            "apikey": self._api_key,
        }

    async def notify(self, order_id: str, draft: OrderDraft) -> None:
        payload = notification_payload(order_id, draft)
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(self._url, json=payload, headers=self._headers())
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise NotificationError(
                    f"Notification endpoint answered {exc.response.status_code}: "
                    f"{exc.response.text[:200]}"
                ) from exc
            except httpx.HTTPError as exc:
                raise NotificationError(f"Notification request failed: {exc}") from exc

        logger.debug("notification_delivered", order_id=order_id, status=response.status_code)


class LoggingOrderNotifier(OrderNotifier):

    async def notify(self, order_id: str, draft: OrderDraft) -> None:
        logger.warning(
            "notification_simulated",
            order_id=order_id,
            customer_email=draft.customer_email,
            items=draft.item_count,
            total=str(draft.total_amount),
        )
