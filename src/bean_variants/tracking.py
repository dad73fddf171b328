"""E-commerce tracking events and best-effort server-side delivery."""

from __future__ import annotations

import json
import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib import error, request

from pydantic import BaseModel, Field

from bean_variants.cart import Cart, CartItem
from bean_variants.checkout import OrderSummary
from bean_variants.schema import Product

DEFAULT_CURRENCY = "AED"

logger = logging.getLogger(__name__)


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _safe_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


class TrackingItem(BaseModel):
    item_id: str
    item_name: str
    item_category: str | None = None
    item_variant: str | None = None
    price: float
    quantity: int = 1


class TrackingEvent(BaseModel):
    event_name: str
    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    items: list[TrackingItem] = Field(default_factory=list)
    value: float = 0.0
    currency: str = DEFAULT_CURRENCY
    transaction_id: str | None = None
    shipping: float | None = None
    coupon: str | None = None


def _item_from_line(line: CartItem) -> TrackingItem:
    labels = [line.variation.weight, line.variation.beans, line.variation.additions]
    return TrackingItem(
        item_id=line.product_id,
        item_name=line.name,
        item_variant=", ".join(label for label in labels if label) or None,
        price=line.price,
        quantity=line.quantity,
    )


def view_item_event(product: Product, price: float, *, language: str = "en") -> TrackingEvent:
    item = TrackingItem(
        item_id=product.id,
        item_name=product.display_name(language),
        item_category=product.category,
        price=price,
    )
    return TrackingEvent(event_name="view_item", items=[item], value=price)


def add_to_cart_event(line: CartItem) -> TrackingEvent:
    return TrackingEvent(event_name="add_to_cart", items=[_item_from_line(line)], value=line.line_total)


def remove_from_cart_event(line: CartItem) -> TrackingEvent:
    return TrackingEvent(
        event_name="remove_from_cart",
        items=[_item_from_line(line)],
        value=line.line_total,
    )


def begin_checkout_event(cart: Cart, summary: OrderSummary | None = None) -> TrackingEvent:
    return TrackingEvent(
        event_name="begin_checkout",
        items=[_item_from_line(line) for line in cart.items],
        value=summary.total if summary else cart.total_price,
        coupon=summary.promotion_code if summary else None,
    )


def purchase_event(order_id: str, cart: Cart, summary: OrderSummary) -> TrackingEvent:
    return TrackingEvent(
        event_name="purchase",
        transaction_id=order_id,
        items=[_item_from_line(line) for line in cart.items],
        value=summary.total,
        shipping=summary.shipping,
        coupon=summary.promotion_code,
    )


@dataclass(frozen=True)
class TrackingConfig:
    enabled: bool = False
    webhook_url: str | None = None
    webhook_token: str | None = None
    webhook_timeout_sec: float = 2.0

    @classmethod
    def from_env(cls) -> "TrackingConfig":
        return cls(
            enabled=_parse_bool(os.getenv("TRACKING_ENABLED"), False),
            webhook_url=os.getenv("TRACKING_WEBHOOK_URL"),
            webhook_token=os.getenv("TRACKING_WEBHOOK_TOKEN"),
            webhook_timeout_sec=_safe_float(os.getenv("TRACKING_WEBHOOK_TIMEOUT_SEC"), 2.0),
        )


class EventSender:
    """Posts tracking events to the receiver. Delivery failures are logged, never raised."""

    def __init__(self, config: TrackingConfig):
        self.config = config

    def should_send(self) -> bool:
        return self.config.enabled and bool(self.config.webhook_url)

    def send(self, event: TrackingEvent) -> bool:
        if not self.should_send():
            return False

        data = json.dumps(event.model_dump(mode="json"), ensure_ascii=False).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        if self.config.webhook_token:
            headers["x-webhook-token"] = self.config.webhook_token
        req = request.Request(
            self.config.webhook_url,
            data=data,
            headers=headers,
            method="POST",
        )
        try:
            with request.urlopen(req, timeout=self.config.webhook_timeout_sec):
                pass
        except (error.URLError, TimeoutError, ValueError) as exc:
            logger.warning("tracking event %s not delivered: %s", event.event_name, exc)
            return False
        return True
