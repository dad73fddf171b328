"""Promotion codes applied at order level."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from bean_variants.cart import Cart, CartItem
from bean_variants.exceptions import PromotionError
from bean_variants.schema import WireModel

PromotionType = Literal["PERCENTAGE", "FIXED_AMOUNT", "FREE_SHIPPING", "BUY_X_GET_Y"]


class Promotion(WireModel):
    """A promotion. PERCENTAGE values are fractions, like product discounts."""

    id: str | None = None
    name: str
    description: str | None = None
    code: str | None = None
    type: PromotionType
    value: float = Field(default=0.0, ge=0)
    min_order_amount: float | None = None
    max_uses: int | None = None
    current_uses: int = 0
    is_active: bool = True
    start_date: datetime
    end_date: datetime
    product_ids: list[str] = Field(default_factory=list)
    buy_quantity: int | None = Field(default=None, ge=1)
    get_quantity: int | None = Field(default=None, ge=1)

    @field_validator("start_date", "end_date")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _check_value(self):
        if self.type == "PERCENTAGE" and self.value > 1:
            raise ValueError(f"percentage promotion value must be a fraction between 0 and 1, got {self.value}")
        if self.end_date < self.start_date:
            raise ValueError("promotion end date is before its start date")
        return self


class PromotionResult(BaseModel):
    code: str | None = None
    discount: float = 0.0
    free_shipping: bool = False


def find_promotion(code: str, promotions: list[Promotion]) -> Promotion | None:
    wanted = code.strip().casefold()
    if not wanted:
        return None
    return next(
        (promo for promo in promotions if promo.code and promo.code.strip().casefold() == wanted),
        None,
    )


def apply_promotion(
    promotion: Promotion,
    cart: Cart,
    *,
    now: datetime | None = None,
) -> PromotionResult:
    """Compute the order-level effect of a promotion on a cart.

    Raises:
        PromotionError: The promotion cannot be used for this cart right now.
            `reason` is one of inactive, not_started, expired, usage_limit,
            not_applicable or min_order.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if not promotion.is_active:
        raise PromotionError("inactive", "This promotion is not active")
    if now < promotion.start_date:
        raise PromotionError("not_started", "This promotion has not started yet")
    if now > promotion.end_date:
        raise PromotionError("expired", "This promotion has expired")
    if promotion.max_uses is not None and promotion.current_uses >= promotion.max_uses:
        raise PromotionError("usage_limit", "This promotion has reached its usage limit")

    eligible = _eligible_lines(promotion, cart)
    if not eligible:
        raise PromotionError("not_applicable", "No items in the cart qualify for this promotion")

    subtotal = cart.total_price
    if promotion.min_order_amount and subtotal < promotion.min_order_amount:
        raise PromotionError(
            "min_order",
            f"Minimum order amount is {promotion.min_order_amount:.2f}",
        )

    eligible_total = sum(item.line_total for item in eligible)
    discount = 0.0
    free_shipping = False
    if promotion.type == "PERCENTAGE":
        discount = eligible_total * promotion.value
    elif promotion.type == "FIXED_AMOUNT":
        discount = min(promotion.value, eligible_total)
    elif promotion.type == "FREE_SHIPPING":
        free_shipping = True
    else:
        buy = promotion.buy_quantity or 1
        get = promotion.get_quantity or 1
        for item in eligible:
            free_units = (item.quantity // (buy + get)) * get
            discount += free_units * item.price

    return PromotionResult(
        code=promotion.code,
        discount=round(discount, 2),
        free_shipping=free_shipping,
    )


def _eligible_lines(promotion: Promotion, cart: Cart) -> list[CartItem]:
    if not promotion.product_ids:
        return list(cart.items)
    wanted = set(promotion.product_ids)
    return [item for item in cart.items if item.product_id in wanted]
