"""Order summary for the checkout page."""

from __future__ import annotations

from datetime import datetime

from bean_variants.cart import Cart
from bean_variants.promotions import Promotion, apply_promotion
from bean_variants.schema import WireModel
from bean_variants.shipping import ShippingRule, calculate_shipping


class OrderSummary(WireModel):
    subtotal: float
    discount: float = 0.0
    shipping: float = 0.0
    total: float
    shipping_rule_id: str | None = None
    promotion_code: str | None = None
    amount_to_free_shipping: float | None = None


def summarize_order(
    cart: Cart,
    *,
    shipping_rules: list[ShippingRule] | None = None,
    promotion: Promotion | None = None,
    now: datetime | None = None,
) -> OrderSummary:
    """Total a cart: subtotal, promotion discount, then shipping on the discounted amount.

    Promotion errors propagate so the caller can show why a code was refused.
    """
    subtotal = round(cart.total_price, 2)
    discount = 0.0
    free_shipping = False
    promotion_code = None
    if promotion is not None:
        result = apply_promotion(promotion, cart, now=now)
        discount = min(result.discount, subtotal)
        free_shipping = result.free_shipping
        promotion_code = result.code

    discounted = round(subtotal - discount, 2)
    quote = calculate_shipping(discounted, shipping_rules)
    shipping = 0.0 if free_shipping else quote.shipping_cost

    return OrderSummary(
        subtotal=subtotal,
        discount=discount,
        shipping=shipping,
        total=round(discounted + shipping, 2),
        shipping_rule_id=quote.shipping_rule.id if quote.shipping_rule else None,
        promotion_code=promotion_code,
        amount_to_free_shipping=None if free_shipping else quote.amount_to_free_shipping,
    )
