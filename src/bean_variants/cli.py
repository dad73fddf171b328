"""Command-line interface for bean-variants."""

import argparse
import json
import sys

from bean_variants import __version__
from bean_variants.core import fetch_product
from bean_variants.localization import Translator
from bean_variants.notifications import ToastQueue
from bean_variants.pricing import format_price
from bean_variants.storefront import ProductView


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="bean-variants",
        description="Resolve a coffee product variation from a catalog file",
    )
    parser.add_argument("catalog", help="Path to a product catalog JSON file")
    parser.add_argument("--product", default="", help="Product id or slug inside the catalog")
    parser.add_argument("--weight", help="Weight label, e.g. 250g")
    parser.add_argument("--beans", help="Beans label, e.g. Arabica")
    parser.add_argument("--additions", help="Additions label, e.g. Ground")
    parser.add_argument("--quantity", type=int, default=1, help="Requested quantity")
    parser.add_argument(
        "--language",
        choices=["en", "ar"],
        default="en",
        help="Display language (default: en)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"bean-variants {__version__}",
    )

    args = parser.parse_args(argv)

    result = fetch_product(args.product, source="file", path=args.catalog)
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    toasts = ToastQueue()
    view = ProductView(result.product, translator=Translator(args.language), notifier=toasts)
    for facet in ("weight", "beans", "additions"):
        value = getattr(args, facet)
        if value:
            view.select(facet, value)
    view.set_quantity(args.quantity)

    if args.json:
        print(json.dumps(_as_dict(view, toasts), ensure_ascii=False, indent=2))
    else:
        _print_formatted(view, toasts)

    return 0


def _as_dict(view: ProductView, toasts: ToastQueue) -> dict:
    variant = view.variant
    return {
        "product": view.product.id,
        "selection": view.selection.model_dump(),
        "method": view.resolution.method,
        "variant": variant.model_dump(mode="json", by_alias=True, exclude_none=True) if variant else None,
        "price": round(view.current_price, 2),
        "originalPrice": view.original_price,
        "discountPercent": view.discount_percent,
        "quantity": view.quantity,
        "outOfStock": view.is_out_of_stock,
        "options": view.resolution.options.model_dump(),
        "messages": [toast.message for toast in toasts.drain()],
    }


def _print_formatted(view: ProductView, toasts: ToastQueue) -> None:
    """Print result in human-readable format."""
    print()
    print(f"  {view.product.display_name(view.translator.language)}")
    print()

    variant = view.variant
    original = view.original_price
    fields = [
        ("Weight", view.selection.weight),
        ("Beans", view.selection.beans),
        ("Additions", view.selection.additions),
        ("Variant", f"{variant.id} ({view.resolution.method})" if variant else None),
        ("Price", format_price(view.current_price)),
        ("Was", format_price(original) if original is not None else None),
        ("Discount", f"{view.discount_percent}%" if view.discount_percent else None),
        ("Quantity", str(view.quantity)),
        ("Stock", "out of stock" if view.is_out_of_stock else _format_stock(variant)),
    ]

    for label, value in fields:
        display = value if value else "-"
        print(f"  {label + ':':<12} {display}")

    options = view.resolution.options
    print()
    print(f"  {'Weights:':<12} {_format_list(options.weight)}")
    print(f"  {'Beans:':<12} {_format_list(options.beans)}")
    print(f"  {'Additions:':<12} {_format_list(options.additions)}")

    for toast in toasts.drain():
        print(f"  [{toast.level}] {toast.message}")
    print()


def _format_stock(variant) -> str | None:
    if variant is None or variant.stock_quantity is None:
        return None
    return str(variant.stock_quantity)


def _format_list(items: list[str]) -> str:
    return ", ".join(items) if items else "-"


if __name__ == "__main__":
    sys.exit(main())
