"""Displayed price and discount label calculations."""

import math

from bean_variants.schema import PricedItem


def _has_active_discount(item: PricedItem) -> bool:
    return bool(item.discount and item.discount > 0)


def _has_discount_price(item: PricedItem) -> bool:
    return item.discount_price is not None and 0 < item.discount_price < item.price


def current_price(item: PricedItem) -> float:
    """Return the price a shopper pays for one unit of a variant or product.

    Percentage discounts are fractions (0.2 means 20% off). A legacy explicit
    `discountPrice` is used only when no `discount` is set.
    """
    base = item.price
    if _has_active_discount(item):
        if item.discount_type == "PERCENTAGE":
            return base * (1 - item.discount)
        return max(0.0, base - item.discount)
    if _has_discount_price(item):
        return item.discount_price
    return base


def original_price(item: PricedItem) -> float | None:
    """Return the pre-discount price when a discount is active, else None."""
    if _has_active_discount(item) or _has_discount_price(item):
        return item.price
    return None


def discount_percent_label(item: PricedItem) -> int:
    """Return the discount as a whole-number percentage in [0, 100]."""
    if _has_active_discount(item):
        if item.discount_type == "PERCENTAGE":
            percent = item.discount * 100
        elif item.price > 0:
            percent = item.discount / item.price * 100
        else:
            return 0
    elif _has_discount_price(item) and item.price > 0:
        percent = (item.price - item.discount_price) / item.price * 100
    else:
        return 0
    return max(0, min(100, math.floor(percent + 0.5)))


def format_price(value: float) -> str:
    return f"{value:.2f}"
