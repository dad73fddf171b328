"""Quantity and stock guards."""

import logging

from bean_variants.localization import Translator
from bean_variants.notifications import Notifier
from bean_variants.schema import PricedItem, Product, Variant

logger = logging.getLogger(__name__)


def is_out_of_stock(item: PricedItem | None) -> bool:
    """Missing or zero stock means the item cannot be purchased at all."""
    if item is None:
        return True
    return item.stock_quantity is None or item.stock_quantity <= 0


def available_stock(variant: Variant | None, product: Product | None) -> int | None:
    if variant is not None:
        return variant.stock_quantity
    if product is not None:
        return product.stock_quantity
    return None


def clamp_quantity(
    requested: int,
    available: int | None,
    *,
    notifier: Notifier | None = None,
    translator: Translator | None = None,
) -> int:
    """Clamp a requested quantity to [1, available].

    When `available` is missing or zero no upper bound is applied; callers gate
    purchases with `is_out_of_stock` instead. A warning toast is emitted when
    the request is cut down to the available stock.
    """
    quantity = max(1, int(requested))
    if available is None or available <= 0 or quantity <= available:
        return quantity

    logger.warning("requested quantity %d exceeds stock %d", quantity, available)
    if notifier is not None:
        translator = translator or Translator()
        notifier.notify(translator.t("only_left", count=available), "warning")
    return available
