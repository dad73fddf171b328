"""Storefront HTTP API catalog source."""

import json
from urllib import error, parse, request

from pydantic import ValidationError

from bean_variants.exceptions import CatalogFetchError
from bean_variants.schema import Product
from bean_variants.sources.base import BaseCatalogSource


class HttpCatalogSource(BaseCatalogSource):
    """Reads products from `GET {base_url}/api/products/{id}`."""

    def __init__(self, base_url: str, *, timeout_sec: float = 5.0):
        if not base_url:
            raise CatalogFetchError("Catalog base URL is required")
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec

    def product_url(self, product_id: str) -> str:
        return f"{self.base_url}/api/products/{parse.quote(product_id, safe='')}"

    def fetch_product(self, product_id: str) -> Product:
        url = self.product_url(product_id)
        req = request.Request(url, headers={"Accept": "application/json"}, method="GET")
        try:
            with request.urlopen(req, timeout=self.timeout_sec) as response:
                body = response.read()
        except error.HTTPError as exc:
            raise CatalogFetchError(f"Failed to fetch product {product_id}: HTTP {exc.code}") from exc
        except (error.URLError, TimeoutError) as exc:
            raise CatalogFetchError(f"Failed to fetch product {product_id}: {exc}") from exc

        try:
            return Product.model_validate(json.loads(body))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CatalogFetchError(f"Invalid JSON for product {product_id}") from exc
        except ValidationError as exc:
            raise CatalogFetchError(f"Invalid product data for {product_id}: {exc}") from exc
