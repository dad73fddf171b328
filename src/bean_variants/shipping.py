"""Shipping rule evaluation."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from bean_variants.schema import WireModel

RuleType = Literal["FREE", "FIXED", "PERCENTAGE"]


class ShippingRule(WireModel):
    """A priced shipping rule. PERCENTAGE costs are fractions of the order total."""

    id: str
    name: str
    name_ar: str | None = None
    type: RuleType
    cost: float = Field(default=0.0, ge=0)
    min_order_amount: float | None = None
    max_order_amount: float | None = None
    is_active: bool = True
    priority: int = 0
    description: str | None = None
    description_ar: str | None = None

    def applies_to(self, order_total: float) -> bool:
        meets_minimum = not self.min_order_amount or order_total >= self.min_order_amount
        meets_maximum = not self.max_order_amount or order_total <= self.max_order_amount
        return meets_minimum and meets_maximum

    @property
    def unbounded(self) -> bool:
        return not self.min_order_amount and not self.max_order_amount

    def cost_for(self, order_total: float) -> float:
        if self.type == "FREE":
            return 0.0
        if self.type == "FIXED":
            return self.cost
        return order_total * self.cost


class ShippingQuote(WireModel):
    shipping_cost: float
    shipping_rule: ShippingRule | None = None
    free_shipping_threshold: float | None = None
    amount_to_free_shipping: float | None = None


DEFAULT_SHIPPING_RULES: list[ShippingRule] = [
    ShippingRule(
        id="1",
        name="Free Shipping",
        name_ar="شحن مجاني",
        type="FREE",
        cost=0,
        min_order_amount=200,
        priority=1,
        description="Free shipping for orders over 200 AED",
        description_ar="شحن مجاني للطلبات التي تزيد عن 200 درهم",
    ),
    ShippingRule(
        id="2",
        name="Standard Shipping",
        name_ar="شحن عادي",
        type="FIXED",
        cost=25,
        priority=2,
        description="Standard shipping rate",
        description_ar="سعر الشحن العادي",
    ),
]


def calculate_shipping(order_total: float, rules: list[ShippingRule] | None = None) -> ShippingQuote:
    """Quote shipping for an order total using the highest-priority applicable rule."""
    if order_total < 0:
        raise ValueError("Valid order total is required")

    active_rules = sorted(
        (rule for rule in (DEFAULT_SHIPPING_RULES if rules is None else rules) if rule.is_active),
        key=lambda rule: rule.priority,
    )

    applicable = next((rule for rule in active_rules if rule.applies_to(order_total)), None)
    if applicable is None:
        applicable = next((rule for rule in active_rules if rule.unbounded), None)

    cost = applicable.cost_for(order_total) if applicable else 0.0

    free_rule = next(
        (
            rule
            for rule in active_rules
            if rule.type == "FREE" and rule.min_order_amount and rule.min_order_amount > order_total
        ),
        None,
    )
    threshold = free_rule.min_order_amount if free_rule else None
    return ShippingQuote(
        shipping_cost=round(cost, 2),
        shipping_rule=applicable,
        free_shipping_threshold=threshold,
        amount_to_free_shipping=max(0.0, threshold - order_total) if threshold else None,
    )
