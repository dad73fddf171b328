"""JSON file catalog source."""

import json
from pathlib import Path

from pydantic import ValidationError

from bean_variants.exceptions import CatalogFetchError
from bean_variants.schema import Product
from bean_variants.sources.base import BaseCatalogSource


class JsonFileCatalogSource(BaseCatalogSource):
    """Reads products from a JSON file holding one product or a list of them."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load_products(self) -> list[Product]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CatalogFetchError(f"Cannot read catalog file {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CatalogFetchError(f"Invalid JSON in catalog file {self.path}") from exc

        items = data if isinstance(data, list) else [data]
        try:
            return [Product.model_validate(item) for item in items]
        except ValidationError as exc:
            raise CatalogFetchError(f"Invalid product data in {self.path}: {exc}") from exc

    def fetch_product(self, product_id: str) -> Product:
        products = self.load_products()
        if not product_id and len(products) == 1:
            return products[0]
        for product in products:
            if product_id in {product.id, product.slug}:
                return product
        raise CatalogFetchError(f"Product not found in {self.path}: {product_id}")
