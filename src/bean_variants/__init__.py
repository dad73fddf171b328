"""bean-variants: Resolve, price and sell coffee product variations."""

from bean_variants.core import CatalogResult, fetch_product
from bean_variants.pricing import current_price, discount_percent_label, original_price
from bean_variants.resolver import Resolution, resolve
from bean_variants.schema import Product, SelectionState, Variant
from bean_variants.stock import clamp_quantity, is_out_of_stock

__version__ = "0.1.0"

__all__ = [
    "fetch_product",
    "resolve",
    "current_price",
    "original_price",
    "discount_percent_label",
    "clamp_quantity",
    "is_out_of_stock",
    "CatalogResult",
    "Product",
    "Resolution",
    "SelectionState",
    "Variant",
    "__version__",
]
