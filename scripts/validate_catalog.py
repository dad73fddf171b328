"""Validate a product catalog JSON file before it is published.

Checks:
1. Every product and variation parses (percentage discounts are fractions).
2. No two variations of a product share the same weight/beans/additions labels.
3. Legacy `size`/`type` variation fields are reported so they can be migrated.
4. Out-of-stock variations are counted per product.

Usage:
  PYTHONPATH=src python scripts/validate_catalog.py data/catalog.json
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from pydantic import ValidationError

from bean_variants.resolver import find_duplicate_variants
from bean_variants.schema import LEGACY_FACET_ALIASES, Product
from bean_variants.stock import is_out_of_stock


def fail(message: str) -> None:
    print(f"[catalog-check] ERROR: {message}")
    raise SystemExit(1)


def warn(message: str) -> None:
    print(f"[catalog-check] WARN: {message}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a product catalog file")
    parser.add_argument("catalog", help="Catalog JSON file (one product or a list)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat legacy field usage as an error",
    )
    return parser.parse_args()


def load_raw_products(path: Path) -> list[dict]:
    if not path.exists():
        fail(f"Missing catalog file: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    items = data if isinstance(data, list) else [data]
    if not all(isinstance(item, dict) for item in items):
        fail(f"Catalog must contain product objects: {path}")
    return items


def legacy_fields(raw_product: dict) -> list[str]:
    found: list[str] = []
    for index, raw_variation in enumerate(raw_product.get("variations") or []):
        for legacy in LEGACY_FACET_ALIASES:
            if isinstance(raw_variation, dict) and legacy in raw_variation:
                found.append(f"variations[{index}].{legacy}")
    return found


def main() -> int:
    args = parse_args()
    raw_products = load_raw_products(Path(args.catalog))

    errors = 0
    for raw in raw_products:
        label = raw.get("slug") or raw.get("id") or "<unknown>"
        try:
            product = Product.model_validate(raw)
        except ValidationError as exc:
            print(f"[catalog-check] ERROR: {label}: {exc}")
            errors += 1
            continue

        for combo, ids in find_duplicate_variants(product.variations).items():
            print(f"[catalog-check] ERROR: {label}: duplicate variation {combo} in {', '.join(ids)}")
            errors += 1

        legacy = legacy_fields(raw)
        if legacy:
            message = f"{label}: legacy fields {', '.join(legacy)}"
            if args.strict:
                print(f"[catalog-check] ERROR: {message}")
                errors += 1
            else:
                warn(message)

        out_of_stock = sum(1 for variant in product.variations if is_out_of_stock(variant))
        if out_of_stock:
            warn(f"{label}: {out_of_stock}/{len(product.variations)} variations out of stock")

    if errors:
        fail(f"{errors} problem(s) found")
    print(f"[catalog-check] OK: {len(raw_products)} product(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
