from decimal import Decimal

import pytest
import requests

from kopi_cafe.services import notifications
from kopi_cafe.services.notifications import OrderNotifier

from fakes import make_detail, make_order, make_product, make_table


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture
def posts(monkeypatch):
    sent = []

    def fake_post(url, data=None, timeout=None):
        sent.append({"url": url, "data": data, "timeout": timeout})
        return FakeResponse()

    monkeypatch.setattr(notifications.requests, "post", fake_post)
    return sent


@pytest.fixture
def order():
    kopi = make_product(id=1, name="Kopi Susu")
    return make_order(
        id=77,
        table=make_table(number=6),
        total_amount=Decimal("24000"),
        details=[make_detail(kopi, quantity=2, line_total="24000")],
    )


def test_staff_message_goes_to_telegram(posts, order):
    notifier = OrderNotifier(token="123:abc", chat_id="-100200")

    notifier.notify_order_status_change_to_staff(order, "PENDING", "READY")

    (call,) = posts
    assert call["url"] == "https://api.telegram.org/bot123:abc/sendMessage"
    assert call["data"]["chat_id"] == "-100200"
    assert call["data"]["parse_mode"] == "HTML"
    text = call["data"]["text"]
    assert "<b>Order #77</b>" in text
    assert "PENDING -> READY" in text
    assert "Table 6" in text
    assert "• Kopi Susu x 2 = 24000" in text
    assert "Total: 24000" in text


def test_without_credentials_nothing_is_sent(posts, order):
    OrderNotifier(token=None, chat_id="-100200").notify_order_status_change_to_staff(order, "PENDING", "READY")
    OrderNotifier(token="123:abc", chat_id=None).notify_order_status_change_to_staff(order, "PENDING", "READY")

    assert posts == []


def test_customer_notification_is_logged_only(posts, order, caplog):
    with caplog.at_level("INFO", logger="kopi_cafe.services.notifications"):
        OrderNotifier(token="123:abc", chat_id="-100200").notify_order_status_change_to_customer(
            order, "PENDING", "READY"
        )

    assert posts == []
    assert "Order 77" in caplog.text


def test_http_errors_propagate(monkeypatch, order):
    monkeypatch.setattr(notifications.requests, "post", lambda *args, **kwargs: FakeResponse(502))

    with pytest.raises(requests.HTTPError):
        OrderNotifier(token="123:abc", chat_id="-100200").notify_order_status_change_to_staff(
            order, "PENDING", "READY"
        )
