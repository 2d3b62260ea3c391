import logging
from typing import Optional

import requests

from kopi_cafe.config import settings
from kopi_cafe.models import Order
from kopi_cafe.pricing import money

logger = logging.getLogger(__name__)


class OrderNotifier:
    """
    Status change notifications.
    The customer side is only logged; staff also get a Telegram message when a bot is configured.
    """

    def __init__(self, token: Optional[str] = None, chat_id: Optional[str] = None, timeout: float = 5.0):
        self.token = token
        self.chat_id = chat_id
        self.timeout = timeout
        self.api_url = f"https://api.telegram.org/bot{token}/sendMessage" if token else None

    @property
    def enabled(self) -> bool:
        return bool(self.api_url and self.chat_id)

    def send(self, message: str) -> None:
        response = requests.post(
            self.api_url,
            data={
                "chat_id": self.chat_id,
                "text": message,
                "parse_mode": "HTML",
            },
            timeout=self.timeout,
        )
        response.raise_for_status()

    def format_items(self, order: Order) -> str:
        lines = []
        for detail in order.details:
            name = detail.product_name_snapshot
            if name is None and detail.product is not None:
                name = detail.product.name
            lines.append(f"• {name or '?'} x {detail.quantity or 0} = {money(detail.line_total)}")
        lines.append(f"\nTotal: {money(order.total_amount)}")
        return "\n".join(lines)

    def notify_order_status_change_to_customer(self, order: Order, old_status: str, new_status: str) -> None:
        customer_id = order.customer.id if order.customer is not None else None
        logger.info("Order %s (customer %s): %s -> %s", order.id, customer_id, old_status, new_status)

    def notify_order_status_change_to_staff(self, order: Order, old_status: str, new_status: str) -> None:
        logger.info("Order %s: staff notified of %s -> %s", order.id, old_status, new_status)
        if not self.enabled:
            return
        msg = [
            f"<b>Order #{order.id}</b>",
            f"Status: {old_status} -> {new_status}",
        ]
        if order.table is not None:
            msg.append(f"Table {order.table.number}")
        elif order.address is not None:
            msg.append(f"Ship to: {order.address.address_line}")
        if order.details:
            msg.append("\n" + self.format_items(order))
        self.send("\n".join(msg))


notifier = OrderNotifier(
    token=settings.TELEGRAM_TOKEN,
    chat_id=settings.TELEGRAM_CHAT_ID,
)
