"""Wire payloads for the storage layer and the notification channel.

Amounts go out as two-decimal floats and item prices under ``price``,
which is what both external collaborators read.
"""

from __future__ import annotations

from typing import Any

from storefront.domain.model.order import OrderDraft
from storefront.domain.model.value_objects import Money


def _amount(money: Money) -> float:
    return float(money.rounded().amount)


def order_items(draft: OrderDraft) -> list[dict[str, Any]]:
    return [
        {
            "product_id": line.product_id,
            "name": line.name,
            "quantity": line.quantity,
            "price": _amount(line.unit_price),
        }
        for line in draft.lines
    ]


def order_payload(draft: OrderDraft) -> dict[str, Any]:
    """Input of the atomic order-creation call."""
    return {
        "customer_email": draft.customer_email,
        "customer_name": draft.customer_name,
        "customer_phone": draft.customer_phone,
        "shipping_address": draft.shipping_address,
        "total_amount": _amount(draft.total_amount),
        "notes": draft.notes,
        "items": order_items(draft),
    }


def notification_payload(order_id: str, draft: OrderDraft) -> dict[str, Any]:
    """Body posted to the notification channel (camelCase, notes never null)."""
    return {
        "orderId": order_id,
        "customerEmail": draft.customer_email,
        "customerName": draft.customer_name,
        "items": order_items(draft),
        "totalAmount": _amount(draft.total_amount),
        "shippingAddress": draft.shipping_address,
        "notes": draft.notes or "",
    }
