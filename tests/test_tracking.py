"""Tests for tracking events and the webhook sender."""

import json
from urllib import error

from bean_variants.cart import Cart, CartItem, CartVariation
from bean_variants.checkout import summarize_order
from bean_variants.schema import Product
from bean_variants.tracking import (
    EventSender,
    TrackingConfig,
    add_to_cart_event,
    purchase_event,
    view_item_event,
)


def _line() -> CartItem:
    return CartItem(
        id="p1-v2",
        product_id="p1",
        name="Ethiopia Guji",
        price=14.99,
        quantity=2,
        variation=CartVariation(weight="250g", beans="Arabica", additions="Ground"),
    )


def test_add_to_cart_event_describes_line():
    event = add_to_cart_event(_line())

    assert event.event_name == "add_to_cart"
    assert event.value == 29.98
    assert event.currency == "AED"
    assert event.items[0].item_variant == "250g, Arabica, Ground"
    assert event.items[0].quantity == 2


def test_view_item_event_uses_localized_name():
    product = Product(id="p1", name="Guji", name_ar="غوجي", category="Single Origin")

    event = view_item_event(product, 14.99, language="ar")

    assert event.items[0].item_name == "غوجي"
    assert event.items[0].item_category == "Single Origin"


def test_purchase_event_carries_order_totals():
    cart = Cart(items=[_line()])
    summary = summarize_order(cart)

    event = purchase_event("order-1", cart, summary)

    assert event.transaction_id == "order-1"
    assert event.value == summary.total
    assert event.shipping == 25


def test_tracking_config_from_env(monkeypatch):
    monkeypatch.setenv("TRACKING_ENABLED", "true")
    monkeypatch.setenv("TRACKING_WEBHOOK_URL", "https://receiver.example/events")
    monkeypatch.setenv("TRACKING_WEBHOOK_TIMEOUT_SEC", "not-a-number")

    config = TrackingConfig.from_env()

    assert config.enabled is True
    assert config.webhook_url == "https://receiver.example/events"
    assert config.webhook_timeout_sec == 2.0


def test_sender_disabled_does_not_call_network(mocker):
    urlopen = mocker.patch("bean_variants.tracking.request.urlopen")

    sent = EventSender(TrackingConfig()).send(add_to_cart_event(_line()))

    assert sent is False
    urlopen.assert_not_called()


def test_sender_posts_json_with_token(mocker):
    urlopen = mocker.patch("bean_variants.tracking.request.urlopen")
    config = TrackingConfig(
        enabled=True,
        webhook_url="https://receiver.example/events",
        webhook_token="secret",
    )

    sent = EventSender(config).send(add_to_cart_event(_line()))

    assert sent is True
    req = urlopen.call_args.args[0]
    assert req.get_method() == "POST"
    assert req.get_header("X-webhook-token") == "secret"
    assert json.loads(req.data)["event_name"] == "add_to_cart"


def test_sender_swallows_delivery_failure(mocker):
    mocker.patch(
        "bean_variants.tracking.request.urlopen",
        side_effect=error.URLError("connection refused"),
    )
    config = TrackingConfig(enabled=True, webhook_url="https://receiver.example/events")

    assert EventSender(config).send(add_to_cart_event(_line())) is False
