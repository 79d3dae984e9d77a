"""Abstract port for the best-effort order notification channel."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import OrderDraft


class OrderNotifier(ABC):

    @abstractmethod
    async def notify(self, order_id: str, draft: OrderDraft) -> None:
        """Announce a durably recorded order.

        Raises NotificationError if delivery fails. Callers treat that as
        a soft failure: the order already exists.
        """
